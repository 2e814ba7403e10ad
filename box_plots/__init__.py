"""Box plots gallery case registry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Tuple

from core.pages import PageSection, source_snippet, write_page
from core.shared_utils import read_case_metadata

from .case_1_basic_boxplot import run_case as run_case_1
from .case_2_horizontal_boxplot import run_case as run_case_2
from .case_3_points_boxplot import run_case as run_case_3
from .case_4_mean_sd_boxplot import run_case as run_case_4
from .case_5_outlier_styles import run_case as run_case_5
from .case_6_grouped_boxplots import run_case as run_case_6
from .case_7_styled_boxplots import run_case as run_case_7
from .settings import (
    AVAILABLE_CASE_IDS,
    DEFAULT_OUTPUT_ROOT,
    PAGE_METADATA,
    CaseConfig,
    get_case_config,
)
from .visualization import (
    plot_grouped_boxplot,
    plot_horizontal_boxplot,
    plot_outlier_styles,
    plot_sample_boxplot,
    plot_styled_boxplots,
)

PAGE_INTRO = (
    "A box plot summarises a distribution by its quartiles, median and outliers. "
    "Each example below draws its chart with matplotlib from freshly generated samples."
)


@dataclass(frozen=True)
class CaseStudy:
    """Descriptor for a box plot example."""

    case_id: str
    title: str
    runner: Callable[..., Path]
    plotters: Tuple[Callable[..., object], ...]


CASE_STUDIES: Tuple[CaseStudy, ...] = (
    CaseStudy(
        case_id="case_1",
        title=get_case_config("case_1").name,
        runner=run_case_1,
        plotters=(plot_sample_boxplot,),
    ),
    CaseStudy(
        case_id="case_2",
        title=get_case_config("case_2").name,
        runner=run_case_2,
        plotters=(plot_horizontal_boxplot,),
    ),
    CaseStudy(
        case_id="case_3",
        title=get_case_config("case_3").name,
        runner=run_case_3,
        plotters=(plot_sample_boxplot,),
    ),
    CaseStudy(
        case_id="case_4",
        title=get_case_config("case_4").name,
        runner=run_case_4,
        plotters=(plot_sample_boxplot,),
    ),
    CaseStudy(
        case_id="case_5",
        title=get_case_config("case_5").name,
        runner=run_case_5,
        plotters=(plot_outlier_styles,),
    ),
    CaseStudy(
        case_id="case_6",
        title=get_case_config("case_6").name,
        runner=run_case_6,
        plotters=(plot_grouped_boxplot,),
    ),
    CaseStudy(
        case_id="case_7",
        title=get_case_config("case_7").name,
        runner=run_case_7,
        plotters=(plot_styled_boxplots,),
    ),
)

_CASE_RUNNERS = {case.case_id: case.runner for case in CASE_STUDIES}


def get_case_studies() -> Tuple[CaseStudy, ...]:
    """Return the registered box plot examples."""

    return CASE_STUDIES


def run_case_by_id(case_id: str, **kwargs) -> Path:
    """Execute a box plot example by its identifier."""

    try:
        runner = _CASE_RUNNERS[case_id]
    except KeyError as exc:
        raise KeyError(f"Unknown box plot case id: {case_id}") from exc
    return runner(**kwargs)


def run_all_cases(**kwargs) -> list[Path]:
    """Execute all registered box plot examples sequentially."""

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
) -> Path:
    """Run every example and write the box plots gallery page."""

    sections = []
    for case, case_dir in zip(CASE_STUDIES, run_all_cases(output_root=output_root, show_plots=show_plots)):
        metadata = read_case_metadata(case_dir)
        sections.append(
            PageSection(
                heading=case.title,
                description=get_case_config(case.case_id).description or "",
                figures=[Path(figure) for figure in metadata.get("figures", [])],
                snippet=source_snippet(
                    case.plotters,
                    f'from box_plots import run_case_by_id\n\nrun_case_by_id("{case.case_id}")',
                ),
            )
        )

    page_path = write_page(PAGE_METADATA, sections, pages_root=pages_root, intro=PAGE_INTRO)
    print(f"\nGallery page written to: {page_path}")
    return page_path


__all__ = [
    "AVAILABLE_CASE_IDS",
    "CASE_STUDIES",
    "CaseConfig",
    "CaseStudy",
    "DEFAULT_OUTPUT_ROOT",
    "PAGE_METADATA",
    "build_page",
    "get_case_config",
    "get_case_studies",
    "run_all_cases",
    "run_case_by_id",
]
