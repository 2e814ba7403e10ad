from __future__ import annotations

import os
import warnings

import pytest

# Headless backend; must be selected before pyplot is imported anywhere.
os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib  # noqa: E402

matplotlib.use("Agg")

warnings.filterwarnings(
    "ignore",
    category=FutureWarning,
)

from feature_selection_methods.settings import DesignSettings  # noqa: E402


@pytest.fixture()
def small_design() -> DesignSettings:
    """Design small enough for a handful of resamplings to run quickly."""
    return DesignSettings(n_features=30, n_relevant_features=3, n_samples=40, random_state=0)
