"""Case study 6: grouped box plots across conditioning values."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from core.shared_utils import resolve_output_dir, save_dataframe

from box_plots._shared import case_kwargs, parse_case_args, persist_case_outputs
from box_plots.settings import (
    DEFAULT_OUTPUT_ROOT,
    GROUPED_SAMPLES,
    GROUP_COLORS,
    GROUP_CONDITIONS,
    get_case_config,
)
from box_plots.statistics import split_by_condition
from box_plots.visualization import plot_grouped_boxplot

CASE_ID = "case_6"
CASE_CONFIG = get_case_config(CASE_ID)
CASE_NAME = CASE_CONFIG.name


def run_case(
    *,
    samples: Mapping[str, Sequence[float]] | None = None,
    conditions: Sequence[str] | None = None,
    output_root: Path | str | None = None,
    show_plots: bool = False,
) -> Path:
    """Draw one box per group for every conditioning value."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")

    group_samples = dict(samples) if samples is not None else dict(GROUPED_SAMPLES)
    condition_list = list(conditions) if conditions is not None else list(GROUP_CONDITIONS)
    print(f"Groups: {', '.join(group_samples)}")
    print(f"Conditions: {', '.join(condition_list)}")

    grouped = {
        group: split_by_condition(values, condition_list)
        for group, values in group_samples.items()
    }

    records = [
        {"group": group, "condition": condition, "value": float(value)}
        for group, by_condition in grouped.items()
        for condition, values in by_condition.items()
        for value in values
    ]
    long_path = save_dataframe(pd.DataFrame(records), case_output_dir, f"{CASE_ID}_grouped_samples.csv")
    print(f"Grouped samples saved to: {long_path}")

    colors = {group: GROUP_COLORS[group] for group in group_samples if group in GROUP_COLORS}
    figure_path, box_count = plot_grouped_boxplot(
        grouped,
        condition_list,
        title=CASE_NAME,
        output_dir=case_output_dir,
        show=show_plots,
        colors=colors if len(colors) == len(group_samples) else None,
    )
    print(f"Grouped box plot ({box_count} boxes) saved to: {figure_path}")

    persist_case_outputs(
        case_config=CASE_CONFIG,
        case_output_dir=case_output_dir,
        samples=group_samples,
        figure_path=figure_path,
        trace_count=box_count,
        extras={"conditions": condition_list, "legend_entries": len(group_samples)},
    )
    return case_output_dir


__all__ = ["CASE_ID", "CASE_NAME", "run_case"]


if __name__ == "__main__":
    run_case(**case_kwargs(parse_case_args(CASE_NAME, with_sample_size=False, with_random_state=False)))
