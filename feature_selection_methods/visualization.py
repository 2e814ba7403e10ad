"""Plots for the stability selection gallery page."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.lines import Line2D

from core.shared_utils import sanitize_filename
from core.visualization import save_figure
from feature_selection_methods.settings import SCORE_PLOT_FEATURES
from feature_selection_methods.stability import normalized_scores

_DEFAULT_OUTPUT_DIR = Path("feature_selection_methods") / "outputs"
_RELEVANT_COLOR = "#D62728"
_IRRELEVANT_COLOR = "black"
_METHOD_COLORS = {
    "F-test": "#1F77B4",
    "Stability selection": "#2CA02C",
    "Lasso coefs": "#FF7F0E",
}


@dataclass(frozen=True)
class StabilityPathPanel:
    """Stability path of one conditioning value."""

    conditioning: float
    incoherence: float
    alphas: np.ndarray
    scores_path: np.ndarray
    relevant_mask: np.ndarray


@dataclass(frozen=True)
class ScorePanel:
    """Selection scores and precision-recall curves of one conditioning value."""

    conditioning: float
    incoherence: float
    scores: Mapping[str, np.ndarray]
    relevant_mask: np.ndarray
    curves: pd.DataFrame
    aucs: Mapping[str, float]


def stability_plot_axis(alphas: np.ndarray) -> np.ndarray:
    """Cube-root alpha axis scaled to end at one; drops the leading zero alpha."""

    trimmed = np.asarray(alphas[1:], dtype=float) ** (1.0 / 3.0)
    peak = np.max(trimmed) if trimmed.size else 0.0
    return trimmed / peak if peak > 0 else trimmed


def plot_stability_paths(
    panels: Sequence[StabilityPathPanel],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
) -> tuple[Path, int]:
    """Draw one stability path panel per conditioning value.

    Returns the figure path and the number of path lines drawn.
    """

    if not panels:
        raise ValueError("panels must contain at least one stability path")

    fig, axes = plt.subplots(1, len(panels), figsize=(6.5 * len(panels), 5.0), squeeze=False)
    line_count = 0
    for ax, panel in zip(axes.ravel(), panels):
        n_features = len(panel.relevant_mask)
        if panel.scores_path.shape != (n_features, len(panel.alphas)):
            plt.close(fig)
            raise ValueError(
                f"scores_path has shape {panel.scores_path.shape}, "
                f"expected {(n_features, len(panel.alphas))}"
            )

        x = stability_plot_axis(panel.alphas)
        irrelevant = panel.scores_path[~panel.relevant_mask, 1:]
        relevant = panel.scores_path[panel.relevant_mask, 1:]
        if irrelevant.size:
            ax.plot(x, irrelevant.T, color=_IRRELEVANT_COLOR, linewidth=0.5, alpha=0.4)
        if relevant.size:
            ax.plot(x, relevant.T, color=_RELEVANT_COLOR, linewidth=1.5)
        line_count += irrelevant.shape[0] + relevant.shape[0]

        ax.set_xlabel(r"$(\alpha / \alpha_{max})^{1/3}$")
        ax.set_ylabel("Stability score: proportion of times selected")
        ax.set_ylim(0, 1.05)
        ax.set_title(
            f"Conditioning {panel.conditioning:g}\nMutual incoherence: {panel.incoherence:.1f}"
        )
        ax.grid(True, linestyle="--", alpha=0.3)

    legend_handles = [
        Line2D([0], [0], color=_RELEVANT_COLOR, linewidth=1.5, label="Relevant features"),
        Line2D([0], [0], color=_IRRELEVANT_COLOR, linewidth=0.5, label="Irrelevant features"),
    ]
    axes.ravel()[0].legend(handles=legend_handles, loc="upper right")

    fig.suptitle(title, fontsize=14)
    fig.tight_layout(rect=[0, 0.02, 1, 0.94])

    path = save_figure(fig, output_dir, sanitize_filename(title, "stability_paths"), default_dir=_DEFAULT_OUTPUT_DIR, show=show)
    return path, line_count


def plot_selection_scores(
    panels: Sequence[ScorePanel],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
    max_features: int = SCORE_PLOT_FEATURES,
) -> tuple[Path, int]:
    """Grid with one row per conditioning: normalised scores and precision-recall curves.

    Returns the figure path and the number of score curves drawn.
    """

    if not panels:
        raise ValueError("panels must contain at least one score panel")

    fig, axes = plt.subplots(len(panels), 2, figsize=(13.0, 4.5 * len(panels)), squeeze=False)
    curve_count = 0
    for row, panel in enumerate(panels):
        score_ax, pr_ax = axes[row]
        n_features = len(panel.relevant_mask)
        shown = min(max_features, n_features)
        feature_index = np.arange(shown)

        for name, score in panel.scores.items():
            if len(score) != n_features:
                plt.close(fig)
                raise ValueError(f"Score '{name}' has {len(score)} entries, expected {n_features}")
            color = _METHOD_COLORS.get(name)
            score_ax.semilogy(
                feature_index,
                normalized_scores(score)[:shown],
                color=color,
                label=f"{name}. AUC: {panel.aucs.get(name, float('nan')):.3f}",
            )
            method_curve = panel.curves[panel.curves["method"] == name]
            pr_ax.plot(method_curve["recall"], method_curve["precision"], color=color, label=name)
            curve_count += 1

        truth = np.where(panel.relevant_mask)[0]
        truth = truth[truth < shown]
        score_ax.plot(truth, np.full(truth.size, 2e-4), "mo", label="Ground truth")
        score_ax.set_xlim(0, max(shown - 1, 1))
        score_ax.set_xlabel("Features")
        score_ax.set_ylabel("Score")
        score_ax.set_title(
            f"Feature selection scores - Mutual incoherence: {panel.incoherence:.1f}"
        )
        score_ax.legend(loc="best", fontsize=8)

        pr_ax.set_xlabel("Recall")
        pr_ax.set_ylabel("Precision")
        pr_ax.set_xlim(0, 1.02)
        pr_ax.set_ylim(0, 1.05)
        pr_ax.set_title(f"Precision-recall (conditioning {panel.conditioning:g})")
        pr_ax.grid(True, linestyle="--", alpha=0.3)
        pr_ax.legend(loc="lower left", fontsize=8)

    fig.suptitle(title, fontsize=14)
    fig.tight_layout(rect=[0, 0.02, 1, 0.96])

    path = save_figure(fig, output_dir, sanitize_filename(title, "selection_scores"), default_dir=_DEFAULT_OUTPUT_DIR, show=show)
    return path, curve_count


__all__ = [
    "ScorePanel",
    "StabilityPathPanel",
    "plot_selection_scores",
    "plot_stability_paths",
    "stability_plot_axis",
]
