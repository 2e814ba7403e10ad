"""Configuration for the feature_selection_methods package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from config import DEFAULT_RANDOM_STATE, THUMBNAIL_PREFIX
from core.front_matter import PageMetadata

DEFAULT_OUTPUT_ROOT = Path("feature_selection_methods") / "outputs"
DEFAULT_CONDITIONINGS: tuple[float, ...] = (1.0, 1e-4)
DEFAULT_N_RESAMPLING: int = 200
DEFAULT_SCALING: float = 0.5
DEFAULT_SAMPLE_FRACTION: float = 0.75
DEFAULT_N_GRID: int = 100
DEFAULT_PATH_EPS: float = 0.05
LASSO_CV_FOLDS: int = 6
# Stability scores are computed on this many alphas between alpha_max and 10% of it.
N_STABILITY_ALPHAS: int = 6
MIN_SCORE_RATIO: float = 1e-4
SCORE_PLOT_FEATURES: int = 100


@dataclass(frozen=True)
class DesignSettings:
    """Shape of the synthetic sparse-recovery problem.

    Parameters
    ----------
    n_features:
        Total number of columns in the design matrix.
    n_relevant_features:
        Leading columns with a non-zero coefficient; also the correlation block size.
    noise_level:
        Standard deviation of the noise added to the standardized response.
    coef_min:
        Lower bound of the relevant coefficients (uniform on ``[coef_min, coef_min + 1)``).
    n_samples:
        Number of rows.
    """

    n_features: int = 501
    n_relevant_features: int = 3
    noise_level: float = 0.2
    coef_min: float = 0.2
    n_samples: int = 25
    random_state: int = DEFAULT_RANDOM_STATE

    def __post_init__(self) -> None:
        if self.n_relevant_features <= 0:
            raise ValueError("n_relevant_features must be positive")
        if self.n_features <= self.n_relevant_features:
            raise ValueError("n_features must exceed n_relevant_features")
        if self.n_samples < 2:
            raise ValueError("n_samples must be at least 2")


DEFAULT_DESIGN = DesignSettings()


@dataclass(frozen=True)
class FeatureSelectionCase:
    """Descriptor for a feature selection experiment."""

    case_id: str
    name: str
    method: str
    description: str
    conditionings: Sequence[float] = DEFAULT_CONDITIONINGS


FEATURE_SELECTION_CASES: Mapping[str, FeatureSelectionCase] = {
    "case_1": FeatureSelectionCase(
        case_id="case_1",
        name="Stability paths",
        method="lasso_stability_path",
        description=(
            "Selection frequency of every feature along the randomized Lasso path. "
            "Relevant features are drawn in red, irrelevant ones in black."
        ),
    ),
    "case_2": FeatureSelectionCase(
        case_id="case_2",
        name="Feature selection scores",
        method="selection_scores",
        description=(
            "Stability selection, F-test and Lasso coefficient scores compared "
            "against the ground truth with precision-recall curves."
        ),
    ),
}

PAGE_METADATA = PageMetadata(
    title="Randomized Lasso | matplotlib",
    permalink="/python/randomized-lasso/",
    description=(
        "Stability selection with a randomized Lasso on a synthetic design, "
        "compared with univariate and Lasso scores."
    ),
    name="Randomized Lasso",
    thumbnail=f"{THUMBNAIL_PREFIX}/randomized-lasso.jpg",
    display_as="feature_selection",
    order=1,
)


def get_case_config(case_id: str) -> FeatureSelectionCase:
    """Return the configuration for a feature selection experiment."""

    try:
        return FEATURE_SELECTION_CASES[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown feature selection case id: {case_id}") from exc


AVAILABLE_CASE_IDS: tuple[str, ...] = tuple(FEATURE_SELECTION_CASES.keys())

__all__ = [
    "AVAILABLE_CASE_IDS",
    "DEFAULT_CONDITIONINGS",
    "DEFAULT_DESIGN",
    "DEFAULT_N_GRID",
    "DEFAULT_N_RESAMPLING",
    "DEFAULT_OUTPUT_ROOT",
    "DEFAULT_PATH_EPS",
    "DEFAULT_SAMPLE_FRACTION",
    "DEFAULT_SCALING",
    "DesignSettings",
    "FEATURE_SELECTION_CASES",
    "FeatureSelectionCase",
    "LASSO_CV_FOLDS",
    "MIN_SCORE_RATIO",
    "N_STABILITY_ALPHAS",
    "PAGE_METADATA",
    "SCORE_PLOT_FEATURES",
    "get_case_config",
]
