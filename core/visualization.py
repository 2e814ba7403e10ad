"""Figure persistence shared by the gallery packages."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from config import FIGURE_DPI


def save_figure(
    fig: plt.Figure,
    output_dir: Path | str | None,
    filename: str,
    *,
    default_dir: Path,
    show: bool = False,
) -> Path:
    """Save ``fig`` under ``output_dir`` (or ``default_dir``), close it and return the path."""

    directory = Path(output_dir) if output_dir is not None else default_dir
    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / filename
    fig.savefig(output_path, dpi=FIGURE_DPI, bbox_inches="tight")
    if show:
        plt.show()
    plt.close(fig)
    return output_path


__all__ = ["save_figure"]
