"""Tests for the synthetic design and randomized Lasso scoring."""

from __future__ import annotations

import numpy as np
import pytest

from feature_selection_methods.settings import DEFAULT_DESIGN, DEFAULT_PATH_EPS, DesignSettings
from feature_selection_methods.stability import (
    design_incoherence,
    lasso_stability_path,
    make_correlated_design,
    mutual_incoherence,
    normalized_scores,
    precision_recall_summary,
    randomized_lasso_scores,
    selection_scores,
    stability_path_frame,
)


class TestMutualIncoherence:
    """Incoherence between relevant and irrelevant design blocks."""

    def test_orthogonal_blocks_have_zero_incoherence(self) -> None:
        X = np.eye(6)
        assert mutual_incoherence(X[:, :2], X[:, 2:]) == pytest.approx(0.0)

    def test_duplicated_column_has_unit_incoherence(self) -> None:
        column = np.arange(1.0, 6.0)[:, np.newaxis]
        assert mutual_incoherence(column, column) == pytest.approx(1.0)

    def test_row_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="row counts"):
            mutual_incoherence(np.ones((4, 2)), np.ones((5, 2)))

    def test_stronger_correlation_raises_incoherence(self, small_design: DesignSettings) -> None:
        loose = design_incoherence(make_correlated_design(1.0, small_design))
        tight = design_incoherence(make_correlated_design(1e-4, small_design))
        assert tight > loose


class TestCorrelatedDesign:
    """Shape and normalisation of the simulated problem."""

    def test_shapes_and_support(self, small_design: DesignSettings) -> None:
        problem = make_correlated_design(1.0, small_design)
        assert problem.X.shape == (40, 30)
        assert problem.y.shape == (40,)
        assert problem.n_relevant == 3
        assert problem.relevant_mask[:3].all()
        assert not problem.relevant_mask[3:].any()

    def test_columns_have_unit_norm(self, small_design: DesignSettings) -> None:
        problem = make_correlated_design(1e-4, small_design)
        np.testing.assert_allclose(np.linalg.norm(problem.X, axis=0), 1.0)

    def test_reproducible(self, small_design: DesignSettings) -> None:
        first = make_correlated_design(0.5, small_design)
        second = make_correlated_design(0.5, small_design)
        np.testing.assert_array_equal(first.X, second.X)
        np.testing.assert_array_equal(first.y, second.y)

    @pytest.mark.parametrize("conditioning", [0.0, -1.0, 1.5])
    def test_conditioning_out_of_range(self, small_design: DesignSettings, conditioning: float) -> None:
        with pytest.raises(ValueError, match="conditioning"):
            make_correlated_design(conditioning, small_design)

    def test_design_settings_validation(self) -> None:
        with pytest.raises(ValueError):
            DesignSettings(n_features=3, n_relevant_features=3)


class TestStabilityPath:
    """Randomized Lasso stability path."""

    def test_grid_and_scores(self, small_design: DesignSettings) -> None:
        problem = make_correlated_design(1.0, small_design)
        alphas, scores_path = lasso_stability_path(
            problem.X, problem.y, random_state=0, n_resampling=15, eps=0.05
        )
        assert alphas.ndim == 1
        assert np.all(np.diff(alphas) > 0)
        assert alphas[-1] == 1.0
        assert scores_path.shape == (30, len(alphas))
        assert scores_path.min() >= 0.0
        assert scores_path.max() <= 1.0
        # No feature is active at alpha_max.
        np.testing.assert_array_equal(scores_path[:, -1], 0.0)

    @pytest.mark.parametrize("scaling", [0.0, 1.0, 1.5])
    def test_scaling_out_of_range(self, small_design: DesignSettings, scaling: float) -> None:
        problem = make_correlated_design(1.0, small_design)
        with pytest.raises(ValueError, match="scaling"):
            lasso_stability_path(problem.X, problem.y, scaling=scaling)

    def test_path_frame_is_long_format(self) -> None:
        alphas = np.array([0.0, 0.5, 1.0])
        scores = np.array([[1.0, 0.5, 0.0], [1.0, 0.0, 0.0]])
        frame = stability_path_frame(alphas, scores, np.array([True, False]))
        assert len(frame) == 6
        assert frame["relevant"].sum() == 3
        assert frame.loc[frame["feature"] == 0, "score"].tolist() == [1.0, 0.5, 0.0]

    def test_path_frame_shape_mismatch(self) -> None:
        with pytest.raises(ValueError):
            stability_path_frame(np.array([0.0, 1.0]), np.zeros((2, 3)), np.array([True, False]))


class TestSelectionScores:
    """Stability selection against univariate and Lasso scores."""

    def test_randomized_scores_are_frequencies(self, small_design: DesignSettings) -> None:
        problem = make_correlated_design(1.0, small_design)
        scores, all_scores = randomized_lasso_scores(
            problem.X, problem.y, [0.1, 0.05, 0.01], n_resampling=10, random_state=0
        )
        assert scores.shape == (30,)
        assert all_scores.shape == (30, 3)
        assert np.all((scores >= 0) & (scores <= 1))
        np.testing.assert_allclose(scores, all_scores.max(axis=1))

    def test_non_positive_alpha_rejected(self, small_design: DesignSettings) -> None:
        problem = make_correlated_design(1.0, small_design)
        with pytest.raises(ValueError, match="alphas"):
            randomized_lasso_scores(problem.X, problem.y, [0.1, 0.0])

    def test_relevant_features_score_higher(self, small_design: DesignSettings) -> None:
        problem = make_correlated_design(1.0, small_design)
        result = selection_scores(problem, n_resampling=20, random_state=0)

        assert set(result.scores) == {"F-test", "Stability selection", "Lasso coefs"}
        stability = result.scores["Stability selection"]
        mask = problem.relevant_mask
        assert stability[mask].mean() > stability[~mask].mean()
        assert len(result.stability_alphas) == 6
        assert result.stability_alphas[0] > result.stability_alphas[-1]

        frame = result.to_frame(problem.coef)
        assert list(frame.columns[:3]) == ["feature", "coef", "relevant"]
        assert len(frame) == 30


class TestPrecisionRecall:
    """AUC summaries and score normalisation."""

    def test_perfect_score_has_unit_auc(self) -> None:
        mask = np.array([True, True, False, False, False])
        summary, curves = precision_recall_summary(mask, {"oracle": mask.astype(float)})
        assert summary.loc[0, "auc"] == pytest.approx(1.0)
        assert set(curves.columns) == {"method", "recall", "precision"}

    def test_shape_mismatch(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            precision_recall_summary(np.array([True, False]), {"bad": np.ones(3)})

    def test_no_relevant_features(self) -> None:
        with pytest.raises(ValueError):
            precision_recall_summary(np.zeros(3, dtype=bool), {"s": np.ones(3)})

    def test_normalized_scores(self) -> None:
        np.testing.assert_allclose(normalized_scores(np.array([0.0, 2.0, 4.0])), [1e-4, 0.5, 1.0])
        np.testing.assert_allclose(normalized_scores(np.zeros(3)), [1e-4] * 3)


class TestPublishedDesign:
    """The 25 x 501 problem the gallery page is built from."""

    def test_incoherence_rises_as_conditioning_falls(self) -> None:
        loose = design_incoherence(make_correlated_design(1.0, DEFAULT_DESIGN))
        tight = design_incoherence(make_correlated_design(1e-4, DEFAULT_DESIGN))
        assert tight > loose

    @pytest.mark.parametrize("conditioning", [1.0, 1e-4])
    def test_stability_path(self, conditioning: float) -> None:
        problem = make_correlated_design(conditioning, DEFAULT_DESIGN)
        assert problem.X.shape == (25, 501)

        alphas, scores_path = lasso_stability_path(
            problem.X, problem.y, random_state=0, n_resampling=10, eps=DEFAULT_PATH_EPS
        )
        assert alphas[-1] == 1.0
        assert np.all(np.diff(alphas) > 0)
        assert scores_path.shape == (501, len(alphas))
        assert scores_path.min() >= 0.0
        assert scores_path.max() <= 1.0

    @pytest.mark.parametrize("conditioning", [1.0, 1e-4])
    def test_selection_scores(self, conditioning: float) -> None:
        problem = make_correlated_design(conditioning, DEFAULT_DESIGN)
        result = selection_scores(problem, n_resampling=10, random_state=0)

        stability = result.scores["Stability selection"]
        assert stability.shape == (501,)
        assert np.all((stability >= 0) & (stability <= 1))
        assert all(np.all(np.isfinite(score)) for score in result.scores.values())

        summary, _ = precision_recall_summary(problem.relevant_mask, result.scores)
        assert summary["auc"].between(0, 1).all()
