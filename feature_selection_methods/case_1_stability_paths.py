"""Case study 1: randomized Lasso stability paths for two conditionings."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

if __package__ in (None, ""):
    import sys
    from pathlib import Path as _Path

    sys.path.append(str(_Path(__file__).resolve().parents[1]))

import pandas as pd

from config import DEFAULT_RANDOM_STATE
from core.shared_utils import resolve_output_dir, save_dataframe, write_case_metadata
from feature_selection_methods._shared import (
    case_kwargs,
    normalize_conditionings,
    parse_case_args,
)
from feature_selection_methods.settings import (
    DEFAULT_DESIGN,
    DEFAULT_N_RESAMPLING,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_PATH_EPS,
    FEATURE_SELECTION_CASES,
    DesignSettings,
)
from feature_selection_methods.stability import (
    design_incoherence,
    lasso_stability_path,
    make_correlated_design,
    stability_path_frame,
)
from feature_selection_methods.visualization import StabilityPathPanel, plot_stability_paths

CASE_ID = "case_1"
CASE_CONFIG = FEATURE_SELECTION_CASES[CASE_ID]
CASE_NAME = CASE_CONFIG.name
CASE_METHOD = CASE_CONFIG.method


def run_case(
    *,
    conditionings: Sequence[float] | None = None,
    design: DesignSettings = DEFAULT_DESIGN,
    n_resampling: int = DEFAULT_N_RESAMPLING,
    random_state: int | None = DEFAULT_RANDOM_STATE,
    output_root: Path | str | None = None,
    show_plots: bool = False,
) -> Path:
    """Compute and plot stability paths for each conditioning value."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    conditioning_list = normalize_conditionings(
        conditionings if conditionings is not None else CASE_CONFIG.conditionings
    )

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"Method: {CASE_METHOD}")
    print(
        f"Design: {design.n_samples} samples x {design.n_features} features, "
        f"{design.n_relevant_features} relevant"
    )
    print(f"Conditionings: {', '.join(f'{value:g}' for value in conditioning_list)}")

    panels: list[StabilityPathPanel] = []
    incoherence_records = []
    path_frames = []
    for conditioning in conditioning_list:
        problem = make_correlated_design(conditioning, design)
        incoherence = design_incoherence(problem)
        print(f"Conditioning {conditioning:g}: mutual incoherence {incoherence:.3f}")

        alphas, scores_path = lasso_stability_path(
            problem.X,
            problem.y,
            random_state=random_state,
            n_resampling=n_resampling,
            eps=DEFAULT_PATH_EPS,
        )
        panels.append(
            StabilityPathPanel(
                conditioning=conditioning,
                incoherence=incoherence,
                alphas=alphas,
                scores_path=scores_path,
                relevant_mask=problem.relevant_mask,
            )
        )
        incoherence_records.append(
            {
                "conditioning": conditioning,
                "mutual_incoherence": incoherence,
                "grid_points": len(alphas),
                "mean_relevant_score": float(scores_path[problem.relevant_mask].mean()),
                "mean_irrelevant_score": float(scores_path[~problem.relevant_mask].mean()),
            }
        )
        frame = stability_path_frame(alphas, scores_path, problem.relevant_mask)
        frame.insert(0, "conditioning", conditioning)
        path_frames.append(frame)

    incoherence_df = pd.DataFrame(incoherence_records)
    incoherence_path = save_dataframe(incoherence_df, case_output_dir, "stability_path_summary.csv")
    print(f"Stability path summary saved to: {incoherence_path}")

    paths_path = save_dataframe(
        pd.concat(path_frames, ignore_index=True),
        case_output_dir,
        "stability_paths.csv",
    )
    print(f"Stability paths saved to: {paths_path}")

    figure_path, line_count = plot_stability_paths(
        panels,
        title=f"{CASE_NAME} (randomized Lasso)",
        output_dir=case_output_dir,
        show=show_plots,
    )
    print(f"Stability path figure ({line_count} paths) saved to: {figure_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="feature_selection_methods",
        features=design.n_features,
        trace_count=line_count,
        figures=[figure_path],
        extras={
            "method": CASE_METHOD,
            "conditionings": conditioning_list,
            "mutual_incoherence": incoherence_df["mutual_incoherence"].tolist(),
            "n_resampling": n_resampling,
            "random_state": random_state,
            "n_relevant_features": design.n_relevant_features,
        },
    )
    print(f"Metadata written to: {metadata_path}")

    return case_output_dir


__all__ = ["CASE_ID", "CASE_NAME", "run_case"]


if __name__ == "__main__":
    run_case(**case_kwargs(parse_case_args(CASE_NAME)))
