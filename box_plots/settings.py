"""Configuration helpers for the box plots gallery package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from config import THUMBNAIL_PREFIX
from core.front_matter import PageMetadata

DEFAULT_OUTPUT_ROOT = Path("box_plots") / "outputs"
DEFAULT_SAMPLE_SIZE: int = 50
DEFAULT_JITTER: float = 0.3

# Fixed sample used by the outlier styling example.
OUTLIER_SAMPLE: Sequence[float] = (
    0.75, 5.25, 5.5, 6, 6.2, 6.6, 6.80, 7.0, 7.2, 7.5, 7.5, 7.75, 8.15,
    8.15, 8.65, 8.93, 9.2, 9.5, 10, 10.25, 11.5, 12, 16, 20.90, 22.3, 23.25,
)

GROUP_CONDITIONS: Sequence[str] = ("day 1", "day 2")
GROUPED_SAMPLES: Mapping[str, Sequence[float]] = {
    "kale": (0.2, 0.2, 0.6, 1.0, 0.5, 0.4, 0.2, 0.7, 0.9, 0.1, 0.5, 0.3),
    "radishes": (0.6, 0.7, 0.3, 0.6, 0.0, 0.5, 0.7, 0.9, 0.5, 0.8, 0.7, 0.2),
    "carrots": (0.1, 0.3, 0.1, 0.9, 0.6, 0.6, 0.9, 1.0, 0.3, 0.6, 0.8, 0.5),
}
GROUP_COLORS: Mapping[str, str] = {
    "kale": "#3D9970",
    "radishes": "#FF4136",
    "carrots": "#FF851B",
}


@dataclass(frozen=True)
class CaseConfig:
    """Descriptor for a box plot example."""

    case_id: str
    name: str
    description: str | None = None


_CASE_CONFIGS: Mapping[str, CaseConfig] = {
    "case_1": CaseConfig(
        case_id="case_1",
        name="Basic box plot",
        description="Two normal samples of 50 draws, shifted down and up by one unit.",
    ),
    "case_2": CaseConfig(
        case_id="case_2",
        name="Basic horizontal box plot",
        description="The same two samples laid out along the x axis.",
    ),
    "case_3": CaseConfig(
        case_id="case_3",
        name="Box plot that displays the underlying data",
        description="Every sample point is drawn with jitter beside its box.",
    ),
    "case_4": CaseConfig(
        case_id="case_4",
        name="Box plot with mean and standard deviation",
        description="A dashed line marks the mean and a bracket spans one standard deviation.",
    ),
    "case_5": CaseConfig(
        case_id="case_5",
        name="Styling outliers",
        description="One sample drawn with whiskers only, with outliers, and with suspected outliers highlighted.",
    ),
    "case_6": CaseConfig(
        case_id="case_6",
        name="Grouped box plots",
        description="One box per group for each conditioning value, grouped side by side.",
    ),
    "case_7": CaseConfig(
        case_id="case_7",
        name="Fully styled box plots",
        description="Thirty boxes following a sine trend with colors swept across a colormap.",
    ),
}

PAGE_METADATA = PageMetadata(
    title="Box Plots | matplotlib",
    permalink="/python/box-plots/",
    description="How to make box plots in Python with matplotlib.",
    name="Box Plots",
    thumbnail=f"{THUMBNAIL_PREFIX}/box.jpg",
    display_as="statistical",
    order=3,
)


def get_case_config(case_id: str) -> CaseConfig:
    try:
        return _CASE_CONFIGS[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown box plot case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(_CASE_CONFIGS.keys())

__all__ = [
    "AVAILABLE_CASE_IDS",
    "CaseConfig",
    "DEFAULT_JITTER",
    "DEFAULT_OUTPUT_ROOT",
    "DEFAULT_SAMPLE_SIZE",
    "GROUPED_SAMPLES",
    "GROUP_COLORS",
    "GROUP_CONDITIONS",
    "OUTLIER_SAMPLE",
    "PAGE_METADATA",
    "get_case_config",
]
