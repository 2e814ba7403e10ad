"""Tests for the randomized Lasso gallery cases and page."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd
import pytest

import feature_selection_methods
from core.front_matter import read_page_metadata
from core.shared_utils import read_case_metadata
from feature_selection_methods.settings import DesignSettings

if TYPE_CHECKING:
    from pathlib import Path


class TestStabilityPathCase:
    """Case 1 writes one path per feature and conditioning."""

    def test_single_conditioning(self, tmp_path: Path, small_design: DesignSettings) -> None:
        case_dir = feature_selection_methods.run_case_by_id(
            "case_1",
            conditionings=[1.0],
            design=small_design,
            n_resampling=10,
            output_root=tmp_path,
        )
        metadata = read_case_metadata(case_dir)
        assert metadata["trace_count"] == small_design.n_features
        assert metadata["conditionings"] == [1.0]
        assert len(metadata["mutual_incoherence"]) == 1

        paths = pd.read_csv(case_dir / "stability_paths.csv")
        assert set(paths["feature"]) == set(range(small_design.n_features))
        assert paths["score"].between(0, 1).all()

    def test_duplicate_conditionings_collapse(self, tmp_path: Path, small_design: DesignSettings) -> None:
        case_dir = feature_selection_methods.run_case_by_id(
            "case_1",
            conditionings=[1.0, 1.0, 1e-4],
            design=small_design,
            n_resampling=5,
            output_root=tmp_path,
        )
        metadata = read_case_metadata(case_dir)
        assert metadata["trace_count"] == 2 * small_design.n_features
        summary = pd.read_csv(case_dir / "stability_path_summary.csv")
        assert summary["mutual_incoherence"].iloc[1] > summary["mutual_incoherence"].iloc[0]

    def test_invalid_conditioning(self, tmp_path: Path, small_design: DesignSettings) -> None:
        with pytest.raises(ValueError, match="conditioning"):
            feature_selection_methods.run_case_by_id(
                "case_1", conditionings=[0.0], design=small_design, output_root=tmp_path
            )


class TestSelectionScoresCase:
    """Case 2 draws three score curves per conditioning."""

    def test_two_conditionings(self, tmp_path: Path, small_design: DesignSettings) -> None:
        case_dir = feature_selection_methods.run_case_by_id(
            "case_2",
            design=small_design,
            n_resampling=10,
            output_root=tmp_path,
        )
        metadata = read_case_metadata(case_dir)
        assert metadata["trace_count"] == 6
        assert metadata["conditionings"] == [1.0, 1e-4]

        auc = pd.read_csv(case_dir / "precision_recall_auc.csv")
        assert len(auc) == 6
        assert set(auc["method"]) == {"F-test", "Stability selection", "Lasso coefs"}
        assert auc["auc"].between(0, 1).all()

        scores = pd.read_csv(case_dir / "feature_scores.csv")
        assert len(scores) == 2 * small_design.n_features


class TestRandomizedLassoPage:
    """Assembling the randomized Lasso gallery page."""

    def test_build_page(self, tmp_path: Path, small_design: DesignSettings) -> None:
        page_path = feature_selection_methods.build_page(
            output_root=tmp_path / "outputs",
            pages_root=tmp_path / "pages",
            design=small_design,
            n_resampling=5,
        )

        metadata = read_page_metadata(page_path)
        assert metadata.permalink == "/python/randomized-lasso/"
        assert metadata.display_as == "feature_selection"
        text = page_path.read_text(encoding="utf-8")
        assert "### Stability paths" in text
        assert "### Feature selection scores" in text
        assert "def lasso_stability_path(" in text
        assert "f_regression(X, y)" in text
        assert "LassoLarsCV(cv=cv)" in text
        assert "def plot_selection_scores(" in text

    def test_unknown_case_id(self) -> None:
        with pytest.raises(KeyError):
            feature_selection_methods.run_case_by_id("case_9")
