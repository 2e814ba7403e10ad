"""Case study 2: stability selection versus univariate and Lasso scores."""

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
    FEATURE_SELECTION_CASES,
    DesignSettings,
)
from feature_selection_methods.stability import (
    design_incoherence,
    make_correlated_design,
    precision_recall_summary,
    selection_scores,
)
from feature_selection_methods.visualization import ScorePanel, plot_selection_scores

CASE_ID = "case_2"
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
    """Score features three ways and compare them with precision-recall curves."""

    case_output_dir = resolve_output_dir(CASE_ID, DEFAULT_OUTPUT_ROOT, output_root)
    conditioning_list = normalize_conditionings(
        conditionings if conditionings is not None else CASE_CONFIG.conditionings
    )

    print(f"=== Running {CASE_ID}: {CASE_NAME} ===")
    print(f"Method: {CASE_METHOD}")
    print(f"Conditionings: {', '.join(f'{value:g}' for value in conditioning_list)}")

    panels: list[ScorePanel] = []
    auc_frames = []
    score_frames = []
    curve_frames = []
    alpha_records = []
    for conditioning in conditioning_list:
        problem = make_correlated_design(conditioning, design)
        incoherence = design_incoherence(problem)

        print(f"Fitting LassoLarsCV and {n_resampling} randomized Lasso resamplings (conditioning {conditioning:g})...")
        result = selection_scores(problem, n_resampling=n_resampling, random_state=random_state)
        auc_df, curves_df = precision_recall_summary(problem.relevant_mask, result.scores)
        aucs = dict(zip(auc_df["method"], auc_df["auc"]))
        for method, value in aucs.items():
            print(f"  {method}: precision-recall AUC {value:.3f}")

        panels.append(
            ScorePanel(
                conditioning=conditioning,
                incoherence=incoherence,
                scores=result.scores,
                relevant_mask=problem.relevant_mask,
                curves=curves_df,
                aucs=aucs,
            )
        )

        auc_df.insert(0, "conditioning", conditioning)
        auc_df.insert(1, "mutual_incoherence", incoherence)
        auc_frames.append(auc_df)

        score_df = result.to_frame(problem.coef)
        score_df.insert(0, "conditioning", conditioning)
        score_frames.append(score_df)

        curves_df = curves_df.copy()
        curves_df.insert(0, "conditioning", conditioning)
        curve_frames.append(curves_df)

        alpha_records.append(
            {
                "conditioning": conditioning,
                "lasso_cv_alpha": result.alpha,
                "stability_alphas": result.stability_alphas.tolist(),
            }
        )

    auc_summary = pd.concat(auc_frames, ignore_index=True)
    auc_path = save_dataframe(auc_summary, case_output_dir, "precision_recall_auc.csv")
    print(f"Precision-recall AUC summary saved to: {auc_path}")

    scores_path = save_dataframe(pd.concat(score_frames, ignore_index=True), case_output_dir, "feature_scores.csv")
    print(f"Feature scores saved to: {scores_path}")

    curves_path = save_dataframe(pd.concat(curve_frames, ignore_index=True), case_output_dir, "precision_recall_curves.csv")
    print(f"Precision-recall curves saved to: {curves_path}")

    figure_path, curve_count = plot_selection_scores(
        panels,
        title=CASE_NAME,
        output_dir=case_output_dir,
        show=show_plots,
    )
    print(f"Selection score figure ({curve_count} curves) saved to: {figure_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=CASE_ID,
        case_name=CASE_NAME,
        package="feature_selection_methods",
        features=design.n_features,
        trace_count=curve_count,
        figures=[figure_path],
        extras={
            "method": CASE_METHOD,
            "conditionings": conditioning_list,
            "n_resampling": n_resampling,
            "random_state": random_state,
            "alphas": alpha_records,
            "auc": auc_summary.to_dict(orient="records"),
        },
    )
    print(f"Metadata written to: {metadata_path}")

    return case_output_dir


__all__ = ["CASE_ID", "CASE_NAME", "run_case"]


if __name__ == "__main__":
    run_case(**case_kwargs(parse_case_args(CASE_NAME)))
