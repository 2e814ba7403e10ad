"""Visualization utilities for the box plots gallery."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Mapping, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.lines import Line2D
from matplotlib.patches import Patch

from core.shared_utils import sanitize_filename
from core.visualization import save_figure

from .statistics import classify_outliers

_DEFAULT_OUTPUT_DIR = Path("box_plots") / "outputs"

ColorMap = Mapping[str, tuple[float, float, float, float]]


def _numeric_samples(samples: Mapping[str, Sequence[float]]) -> dict[str, np.ndarray]:
    cleaned: dict[str, np.ndarray] = {}
    for label, values in samples.items():
        array = pd.to_numeric(pd.Series(list(values)), errors="coerce").dropna().to_numpy(dtype=float)
        if array.size == 0:
            print(f"[WARN] Sample '{label}' has no numeric values; skipping.")
            continue
        cleaned[label] = array
    if not cleaned:
        raise ValueError("No numeric samples available to plot.")
    return cleaned


def _style_boxes(boxes: Mapping[str, list], colors: Sequence) -> None:
    for patch, color in zip(boxes["boxes"], colors):
        patch.set_facecolor(color)
        patch.set_edgecolor("black")
        patch.set_alpha(0.6)


def build_color_map(labels: Sequence[str], cmap_name: str = "Set2") -> dict[str, tuple[float, float, float, float]]:
    """Return a stable color mapping for the provided trace labels."""

    ordered = list(dict.fromkeys(labels))
    if not ordered:
        return {}

    cmap = plt.get_cmap(cmap_name)
    if len(ordered) == 1:
        colors = [cmap(0.5)]
    else:
        positions = np.linspace(0.1, 0.9, num=len(ordered))
        colors = [cmap(pos) for pos in positions]
    return {label: color for label, color in zip(ordered, colors)}


def plot_sample_boxplot(
    samples: Mapping[str, Sequence[float]],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
    show_points: bool = False,
    jitter: float = 0.3,
    show_mean: bool = False,
    random_state: int | None = None,
    color_map: ColorMap | None = None,
) -> Path:
    """Draw one vertical box per named sample.

    ``show_points`` overlays every observation to the left of its box with
    horizontal jitter; ``show_mean`` adds a dashed mean line and a one standard
    deviation bracket.
    """

    data = _numeric_samples(samples)
    labels = list(data.keys())
    color_map = color_map or build_color_map(labels)
    positions = np.arange(1, len(labels) + 1)

    fig, ax = plt.subplots(figsize=(max(5.0, 2.2 * len(labels)), 5.5))
    boxes = ax.boxplot(
        [data[label] for label in labels],
        positions=positions,
        patch_artist=True,
        showmeans=show_mean,
        meanline=show_mean,
        meanprops={"color": "black", "linestyle": "--", "linewidth": 1.5},
        showfliers=not show_points,
    )
    _style_boxes(boxes, [color_map[label] for label in labels])

    if show_points:
        rng = np.random.default_rng(random_state)
        for position, label in zip(positions, labels):
            values = data[label]
            offsets = rng.uniform(-jitter / 2, jitter / 2, size=values.size)
            ax.scatter(
                position - 0.4 + offsets,
                values,
                s=12,
                color=color_map[label],
                edgecolor="black",
                linewidth=0.3,
                alpha=0.8,
                zorder=3,
            )

    if show_mean:
        for position, label in zip(positions, labels):
            values = data[label]
            mean = float(values.mean())
            std = float(values.std(ddof=0))
            ax.errorbar(
                position + 0.3,
                mean,
                yerr=std,
                fmt="D",
                color="black",
                markersize=4,
                capsize=4,
                linewidth=1,
            )

    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.set_title(title)
    ax.set_ylabel("Value")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()

    suffix = "boxplot"
    if show_points:
        suffix = "points_boxplot"
    elif show_mean:
        suffix = "mean_sd_boxplot"
    return save_figure(fig, output_dir, sanitize_filename(title, suffix), default_dir=_DEFAULT_OUTPUT_DIR, show=show)


def plot_horizontal_boxplot(
    samples: Mapping[str, Sequence[float]],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
) -> Path:
    """Draw horizontal boxes, one row per sample."""

    data = _numeric_samples(samples)
    melted = pd.DataFrame(
        [(label, value) for label, values in data.items() for value in values],
        columns=["trace", "value"],
    )
    order = list(data.keys())

    sns.set_theme(style="whitegrid")
    fig_height = max(3.5, 0.9 * len(order) + 1.5)
    fig, ax = plt.subplots(figsize=(8.0, fig_height))
    sns.boxplot(
        data=melted,
        x="value",
        y="trace",
        order=order,
        hue="trace",
        hue_order=order,
        orient="h",
        palette="Set2",
        dodge=False,
        ax=ax,
        width=0.6,
    )
    if ax.legend_ is not None:
        ax.legend_.remove()
    ax.set_title(title)
    ax.set_xlabel("Value")
    ax.set_ylabel("")
    ax.grid(True, axis="x", linestyle="--", alpha=0.3)
    fig.tight_layout()

    return save_figure(fig, output_dir, sanitize_filename(title, "horizontal_boxplot"), default_dir=_DEFAULT_OUTPUT_DIR, show=show)


def plot_outlier_styles(
    values: Sequence[float],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
    whis: float = 1.5,
    suspected_whis: float = 3.0,
) -> Path:
    """Draw the same sample three times with increasingly detailed outlier marks."""

    array = _numeric_samples({"sample": values})["sample"]
    summary = classify_outliers(array, whis=whis, suspected_whis=suspected_whis)
    styles = ("Only whiskers", "Whiskers and outliers", "Suspected outliers")
    colors = build_color_map(styles, cmap_name="Pastel1")

    fig, ax = plt.subplots(figsize=(8.0, 6.0))
    for position, style in enumerate(styles, start=1):
        boxes = ax.boxplot(
            [array],
            positions=[position],
            whis=whis,
            patch_artist=True,
            showfliers=style == "Whiskers and outliers",
            flierprops={"marker": "o", "markerfacecolor": "none", "markeredgecolor": "black"},
            widths=0.5,
        )
        _style_boxes(boxes, [colors[style]])

    mild = np.setdiff1d(summary.outliers, summary.suspected_outliers)
    ax.scatter(
        np.full(mild.size, len(styles)),
        mild,
        marker="o",
        facecolors="none",
        edgecolors="#8C564B",
        zorder=3,
    )
    ax.scatter(
        np.full(summary.suspected_outliers.size, len(styles)),
        summary.suspected_outliers,
        marker="o",
        color="#D62728",
        edgecolors="black",
        s=40,
        zorder=3,
    )

    legend_handles = [
        Patch(facecolor="#d9d9d9", edgecolor="black", label=f"IQR ({summary.q1:.2f} to {summary.q3:.2f})"),
        Line2D([0], [0], marker="o", linestyle="", markerfacecolor="none", markeredgecolor="#8C564B", label="Outlier"),
        Line2D([0], [0], marker="o", linestyle="", color="#D62728", label=f"Suspected outlier (>{suspected_whis:g} IQR)"),
    ]
    ax.legend(handles=legend_handles, loc="upper left")
    ax.set_xticks(range(1, len(styles) + 1))
    ax.set_xticklabels(styles)
    ax.set_title(title)
    ax.set_ylabel("Value")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()

    return save_figure(fig, output_dir, sanitize_filename(title, "outliers"), default_dir=_DEFAULT_OUTPUT_DIR, show=show)


def plot_grouped_boxplot(
    grouped: Mapping[str, Mapping[str, Sequence[float]]],
    conditions: Sequence[str],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
    colors: Mapping[str, str] | None = None,
) -> tuple[Path, int]:
    """Draw one box per group for each conditioning value.

    ``grouped`` maps a group name to its samples keyed by condition. Returns
    the figure path and the number of boxes drawn.
    """

    if not conditions:
        raise ValueError("conditions must contain at least one value")
    groups = list(grouped.keys())
    if not groups:
        raise ValueError("grouped must contain at least one group")

    colors = colors or build_color_map(groups)
    width = 0.8 / len(groups)

    fig, ax = plt.subplots(figsize=(max(6.0, 3.0 * len(conditions)), 5.5))
    box_count = 0
    for cond_idx, condition in enumerate(conditions):
        for group_idx, group in enumerate(groups):
            values = grouped[group].get(condition)
            if values is None or len(values) == 0:
                continue
            position = cond_idx + 1 - 0.4 + width * (group_idx + 0.5)
            boxes = ax.boxplot(
                [np.asarray(values, dtype=float)],
                positions=[position],
                widths=width * 0.85,
                patch_artist=True,
            )
            _style_boxes(boxes, [colors[group]])
            box_count += 1

    if box_count == 0:
        plt.close(fig)
        raise ValueError("No samples matched the requested conditions.")

    legend_handles = [
        Patch(facecolor=colors[group], edgecolor="black", label=group, alpha=0.6)
        for group in groups
    ]
    ax.legend(handles=legend_handles, loc="upper right")
    ax.set_xticks(range(1, len(conditions) + 1))
    ax.set_xticklabels(conditions)
    ax.set_xlim(0.5, len(conditions) + 0.5)
    ax.set_title(title)
    ax.set_ylabel("Normalized moisture")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()

    path = save_figure(fig, output_dir, sanitize_filename(title, "grouped_boxplot"), default_dir=_DEFAULT_OUTPUT_DIR, show=show)
    return path, box_count


def plot_styled_boxplots(
    samples: Sequence[Sequence[float]],
    *,
    title: str,
    output_dir: Path | str | None = None,
    show: bool = False,
    cmap_name: str = "hsv",
) -> Path:
    """Draw many unlabeled boxes with colors swept across ``cmap_name``."""

    if not samples:
        raise ValueError("samples must contain at least one sequence")

    cmap = plt.get_cmap(cmap_name)
    colors = [cmap(pos) for pos in np.linspace(0.0, 0.9, num=len(samples))]

    fig, ax = plt.subplots(figsize=(max(8.0, 0.35 * len(samples)), 5.0))
    boxes = ax.boxplot(
        [np.asarray(values, dtype=float) for values in samples],
        patch_artist=True,
        showfliers=False,
        widths=0.6,
    )
    _style_boxes(boxes, colors)
    ax.set_facecolor("#f3f3f3")
    ax.set_xticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_ylim(
        math.floor(min(float(np.min(values)) for values in samples)) - 0.5,
        math.ceil(max(float(np.max(values)) for values in samples)) + 0.5,
    )
    ax.set_title(title)
    fig.tight_layout()

    return save_figure(fig, output_dir, sanitize_filename(title, "styled_boxplot"), default_dir=_DEFAULT_OUTPUT_DIR, show=show)


__all__ = [
    "build_color_map",
    "plot_grouped_boxplot",
    "plot_horizontal_boxplot",
    "plot_outlier_styles",
    "plot_sample_boxplot",
    "plot_styled_boxplots",
]
