"""Case study 7: thirty styled boxes following a sine trend."""

from __future__ import annotations

from pathlib import Path

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

from config import DEFAULT_RANDOM_STATE
from core.shared_utils import resolve_output_dir

from box_plots._shared import case_kwargs, parse_case_args, persist_case_outputs
from box_plots.settings import DEFAULT_OUTPUT_ROOT, get_case_config
from box_plots.statistics import sine_trend_samples
from box_plots.visualization import plot_styled_boxplots

CASE_ID = "case_7"
CASE_CONFIG = get_case_config(CASE_ID)
CASE_NAME = CASE_CONFIG.name
N_BOXES = 30
SAMPLE_SIZE = 10


def run_case(
    *,
    n_boxes: int = N_BOXES,
    sample_size: int = SAMPLE_SIZE,
    random_state: int | None = DEFAULT_RANDOM_STATE,
    output_root: Path | str | None = None,
    show_plots: bool = False,
) -> Path:
    """Draw unlabeled boxes colored across a hue sweep."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    draws = sine_trend_samples(n_boxes, sample_size, random_state=random_state)
    samples = {f"box_{idx:02d}": values for idx, values in enumerate(draws)}

    figure_path = plot_styled_boxplots(
        draws,
        title=CASE_NAME,
        output_dir=case_output_dir,
        show=show_plots,
    )
    print(f"Styled box plot saved to: {figure_path}")

    persist_case_outputs(
        case_config=CASE_CONFIG,
        case_output_dir=case_output_dir,
        samples=samples,
        figure_path=figure_path,
        trace_count=len(draws),
        extras={"sample_size": sample_size, "random_state": random_state},
    )
    return case_output_dir


__all__ = ["CASE_ID", "CASE_NAME", "run_case"]


if __name__ == "__main__":
    run_case(**case_kwargs(parse_case_args(CASE_NAME)))
