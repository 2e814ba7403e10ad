"""Feature selection methods case registry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Tuple

from core.pages import PageSection, source_snippet, write_page
from core.shared_utils import read_case_metadata

from .case_1_stability_paths import CASE_ID as CASE_1_ID
from .case_1_stability_paths import CASE_NAME as CASE_1_NAME
from .case_1_stability_paths import run_case as run_case_1
from .case_2_selection_scores import CASE_ID as CASE_2_ID
from .case_2_selection_scores import CASE_NAME as CASE_2_NAME
from .case_2_selection_scores import run_case as run_case_2
from .settings import (
    AVAILABLE_CASE_IDS,
    DEFAULT_CONDITIONINGS,
    DEFAULT_DESIGN,
    DEFAULT_OUTPUT_ROOT,
    FEATURE_SELECTION_CASES,
    PAGE_METADATA,
    DesignSettings,
    FeatureSelectionCase,
    get_case_config,
)
from .stability import lasso_stability_path, selection_scores
from .visualization import plot_selection_scores, plot_stability_paths

PAGE_INTRO = (
    "Stability selection refits a randomized Lasso on many subsamples and records how "
    "often each feature is selected. The examples below use a synthetic design whose "
    "relevant and irrelevant columns are correlated in blocks; the smaller the "
    "conditioning, the higher the mutual incoherence and the harder the recovery."
)


@dataclass(frozen=True)
class CaseStudy:
    """Descriptor for a feature selection case study."""

    case_id: str
    title: str
    runner: Callable[..., Path]
    plotters: Tuple[Callable[..., object], ...]


CASE_STUDIES: Tuple[CaseStudy, ...] = (
    CaseStudy(
        case_id=CASE_1_ID,
        title=CASE_1_NAME,
        runner=run_case_1,
        plotters=(lasso_stability_path, plot_stability_paths),
    ),
    CaseStudy(
        case_id=CASE_2_ID,
        title=CASE_2_NAME,
        runner=run_case_2,
        plotters=(selection_scores, plot_selection_scores),
    ),
)

_CASE_RUNNERS = {case.case_id: case.runner for case in CASE_STUDIES}


def get_case_studies() -> Tuple[CaseStudy, ...]:
    """Return the registered feature selection case studies."""

    return CASE_STUDIES


def run_case_by_id(case_id: str, **kwargs):
    """Execute a feature selection case by its identifier."""

    try:
        runner = _CASE_RUNNERS[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown feature selection case id: {case_id}") from exc
    return runner(**kwargs)


def run_all_cases(**kwargs) -> list[Path]:
    """Execute all registered feature selection case studies sequentially."""

    outputs = []
    for case in CASE_STUDIES:
        print(f"\n>>> Running {case.case_id}: {case.title}")
        outputs.append(case.runner(**kwargs))
    return outputs


def build_page(
    *,
    output_root: Path | str | None = None,
    pages_root: Path | str | None = None,
    show_plots: bool = False,
    **case_options,
) -> Path:
    """Run both cases and write the randomized Lasso gallery page."""

    case_dirs = run_all_cases(output_root=output_root, show_plots=show_plots, **case_options)

    sections = []
    for case, case_dir in zip(CASE_STUDIES, case_dirs):
        metadata = read_case_metadata(case_dir)
        sections.append(
            PageSection(
                heading=case.title,
                description=get_case_config(case.case_id).description,
                figures=[Path(figure) for figure in metadata.get("figures", [])],
                snippet=source_snippet(
                    case.plotters,
                    f'from feature_selection_methods import run_case_by_id\n\nrun_case_by_id("{case.case_id}")',
                ),
            )
        )

    page_path = write_page(PAGE_METADATA, sections, pages_root=pages_root, intro=PAGE_INTRO)
    print(f"\nGallery page written to: {page_path}")
    return page_path


__all__ = [
    "AVAILABLE_CASE_IDS",
    "CASE_STUDIES",
    "CaseStudy",
    "DEFAULT_CONDITIONINGS",
    "DEFAULT_DESIGN",
    "DEFAULT_OUTPUT_ROOT",
    "DesignSettings",
    "FEATURE_SELECTION_CASES",
    "FeatureSelectionCase",
    "PAGE_METADATA",
    "build_page",
    "get_case_config",
    "get_case_studies",
    "run_all_cases",
    "run_case_by_id",
]
