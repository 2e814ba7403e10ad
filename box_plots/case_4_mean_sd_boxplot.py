"""Case study 4: box plot with mean and standard deviation markers."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from config import DEFAULT_RANDOM_STATE
from core.shared_utils import resolve_output_dir, save_dataframe

from box_plots._shared import case_kwargs, parse_case_args, persist_case_outputs
from box_plots.settings import DEFAULT_OUTPUT_ROOT, DEFAULT_SAMPLE_SIZE, get_case_config
from box_plots.statistics import shifted_normal_samples
from box_plots.visualization import plot_sample_boxplot

CASE_ID = "case_4"
CASE_CONFIG = get_case_config(CASE_ID)
CASE_NAME = CASE_CONFIG.name
SAMPLE_SHIFTS = {"Control": 0.0, "Treatment": 0.75}


def run_case(
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    random_state: int | None = DEFAULT_RANDOM_STATE,
    output_root: Path | str | None = None,
    show_plots: bool = False,
) -> Path:
    """Plot boxes annotated with the sample mean and one standard deviation."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    draws = shifted_normal_samples(list(SAMPLE_SHIFTS.values()), sample_size, random_state=random_state)
    samples = dict(zip(SAMPLE_SHIFTS.keys(), draws))

    figure_path = plot_sample_boxplot(
        samples,
        title=CASE_NAME,
        output_dir=case_output_dir,
        show=show_plots,
        show_mean=True,
    )
    print(f"Mean/SD box plot saved to: {figure_path}")

    moments = pd.DataFrame(
        [
            {"trace": label, "mean": float(values.mean()), "std": float(values.std(ddof=0))}
            for label, values in samples.items()
        ]
    )
    moments_path = save_dataframe(moments, case_output_dir, f"{CASE_ID}_moments.csv")
    print(f"Sample moments saved to: {moments_path}")

    persist_case_outputs(
        case_config=CASE_CONFIG,
        case_output_dir=case_output_dir,
        samples=samples,
        figure_path=figure_path,
        trace_count=len(samples),
        extras={"sample_size": sample_size, "random_state": random_state},
    )
    return case_output_dir


__all__ = ["CASE_ID", "CASE_NAME", "run_case"]


if __name__ == "__main__":
    run_case(**case_kwargs(parse_case_args(CASE_NAME)))
