"""Case study 5: one sample drawn with three outlier styles."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

from core.shared_utils import resolve_output_dir, save_dataframe

from box_plots._shared import case_kwargs, parse_case_args, persist_case_outputs
from box_plots.settings import DEFAULT_OUTPUT_ROOT, OUTLIER_SAMPLE, get_case_config
from box_plots.statistics import classify_outliers
from box_plots.visualization import plot_outlier_styles

CASE_ID = "case_5"
CASE_CONFIG = get_case_config(CASE_ID)
CASE_NAME = CASE_CONFIG.name
OUTLIER_STYLES = ("Only whiskers", "Whiskers and outliers", "Suspected outliers")


def run_case(
    *,
    values: Sequence[float] | None = None,
    output_root: Path | str | None = None,
    show_plots: bool = False,
) -> Path:
    """Compare whisker-only, outlier and suspected-outlier renderings."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    sample = list(values) if values is not None else list(OUTLIER_SAMPLE)
    summary = classify_outliers(sample)
    print(
        f"Quartiles: q1={summary.q1:.3f}, median={summary.median:.3f}, q3={summary.q3:.3f}; "
        f"{summary.outliers.size} outliers, {summary.suspected_outliers.size} suspected"
    )

    summary_path = save_dataframe(summary.to_frame(), case_output_dir, f"{CASE_ID}_outlier_summary.csv")
    print(f"Outlier summary saved to: {summary_path}")

    figure_path = plot_outlier_styles(
        sample,
        title=CASE_NAME,
        output_dir=case_output_dir,
        show=show_plots,
    )
    print(f"Outlier style comparison saved to: {figure_path}")

    persist_case_outputs(
        case_config=CASE_CONFIG,
        case_output_dir=case_output_dir,
        samples={style: sample for style in OUTLIER_STYLES},
        figure_path=figure_path,
        trace_count=len(OUTLIER_STYLES),
        extras={
            "outliers": summary.outliers.tolist(),
            "suspected_outliers": summary.suspected_outliers.tolist(),
            "whiskers": [summary.lower_whisker, summary.upper_whisker],
        },
    )
    return case_output_dir


__all__ = ["CASE_ID", "CASE_NAME", "OUTLIER_STYLES", "run_case"]


if __name__ == "__main__":
    run_case(**case_kwargs(parse_case_args(CASE_NAME, with_sample_size=False, with_random_state=False)))
