"""Synthetic sparse-recovery designs and randomized Lasso stability selection.

The resampling loops mirror the randomized Lasso formerly shipped with
scikit-learn: every resampling draws a random subsample of the rows and
rescales a random half of the columns by ``1 - scaling`` before running the
Lasso path with :func:`sklearn.linear_model.lars_path`. A feature's stability
score is the fraction of resamplings in which it enters the model.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
import pandas as pd
from scipy import linalg
from scipy.interpolate import interp1d
from sklearn.exceptions import ConvergenceWarning
from sklearn.feature_selection import f_regression
from sklearn.linear_model import LassoLarsCV, lars_path
from sklearn.metrics import auc, precision_recall_curve
from sklearn.utils import check_random_state, check_X_y

from feature_selection_methods.settings import (
    DEFAULT_DESIGN,
    DEFAULT_N_GRID,
    DEFAULT_N_RESAMPLING,
    DEFAULT_SAMPLE_FRACTION,
    DEFAULT_SCALING,
    LASSO_CV_FOLDS,
    MIN_SCORE_RATIO,
    N_STABILITY_ALPHAS,
    DesignSettings,
)

_MACHINE_EPS = np.finfo(np.float64).eps


@dataclass(frozen=True)
class SyntheticProblem:
    """Design matrix, response and true coefficients for one conditioning."""

    X: np.ndarray
    y: np.ndarray
    coef: np.ndarray
    conditioning: float

    @property
    def relevant_mask(self) -> np.ndarray:
        return self.coef != 0

    @property
    def n_relevant(self) -> int:
        return int(self.relevant_mask.sum())


@dataclass(frozen=True)
class SelectionScores:
    """Per-feature scores produced by the competing selection methods."""

    scores: Mapping[str, np.ndarray]
    alpha: float
    stability_alphas: np.ndarray

    def to_frame(self, coef: np.ndarray | None = None) -> pd.DataFrame:
        frame = pd.DataFrame({name: values for name, values in self.scores.items()})
        frame.insert(0, "feature", np.arange(len(frame)))
        if coef is not None:
            frame.insert(1, "coef", coef)
            frame.insert(2, "relevant", coef != 0)
        return frame


def _validate_fraction(name: str, value: float) -> None:
    if not 0 < value < 1:
        raise ValueError(f"Parameter '{name}' should be between 0 and 1. Got {value!r} instead.")


def mutual_incoherence(X_relevant: np.ndarray, X_irrelevant: np.ndarray) -> float:
    """Mutual incoherence between relevant and irrelevant design columns.

    The largest absolute row sum of ``X_irr.T X_rel (X_rel.T X_rel)^+``; sparse
    recovery by the Lasso requires it to stay below one.
    """

    X_relevant = np.asarray(X_relevant, dtype=float)
    X_irrelevant = np.asarray(X_irrelevant, dtype=float)
    if X_relevant.ndim != 2 or X_irrelevant.ndim != 2:
        raise ValueError("Both design blocks must be two-dimensional")
    if X_relevant.shape[0] != X_irrelevant.shape[0]:
        raise ValueError(
            f"Design blocks have different row counts: {X_relevant.shape[0]} != {X_irrelevant.shape[0]}"
        )

    projector = np.dot(
        np.dot(X_irrelevant.T, X_relevant),
        linalg.pinvh(np.dot(X_relevant.T, X_relevant)),
    )
    return float(np.max(np.abs(projector).sum(axis=1)))


def make_correlated_design(
    conditioning: float,
    settings: DesignSettings = DEFAULT_DESIGN,
) -> SyntheticProblem:
    """Simulate a design whose columns are correlated in blocks.

    Inside each block of ``n_relevant_features`` columns the correlation is
    ``1 - conditioning``, so small conditioning values make relevant and
    irrelevant columns hard to tell apart.
    """

    if not 0 < conditioning <= 1:
        raise ValueError(f"conditioning must be in (0, 1], got {conditioning!r}")

    n_features = settings.n_features
    block_size = settings.n_relevant_features
    rng = check_random_state(settings.random_state)

    coef = np.zeros(n_features)
    coef[:block_size] = settings.coef_min + rng.rand(block_size)

    corr = np.zeros((n_features, n_features))
    for start in range(0, n_features, block_size):
        corr[start:start + block_size, start:start + block_size] = 1 - conditioning
    corr.flat[::n_features + 1] = 1
    corr = linalg.cholesky(corr)

    X = rng.normal(size=(settings.n_samples, n_features))
    X = np.dot(X, corr)
    # Shift the first rows away from the origin.
    X[:block_size] += 3
    X /= np.sqrt(np.sum(X ** 2, axis=0))

    y = np.dot(X, coef)
    y /= np.std(y)
    y += settings.noise_level * rng.normal(size=settings.n_samples)

    return SyntheticProblem(X=X, y=y, coef=coef, conditioning=float(conditioning))


def design_incoherence(problem: SyntheticProblem) -> float:
    mask = problem.relevant_mask
    return mutual_incoherence(problem.X[:, mask], problem.X[:, ~mask])


def _resampled_lasso_path(
    X: np.ndarray,
    y: np.ndarray,
    mask: np.ndarray,
    weights: np.ndarray,
    eps: float,
) -> tuple[np.ndarray, np.ndarray]:
    X = X * weights[np.newaxis, :]
    X = X[mask, :]
    y = y[mask]

    alpha_max = np.max(np.abs(np.dot(X.T, y))) / X.shape[0]
    alpha_min = eps * alpha_max

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ConvergenceWarning)
        alphas, _, coefs = lars_path(X, y, method="lasso", verbose=False, alpha_min=alpha_min)

    # Relative to alpha_max, ascending.
    alphas = alphas / alphas[0]
    alphas = alphas[::-1]
    coefs = coefs[:, ::-1]

    keep = alphas >= eps
    # The first point approximates the least-squares end of the path.
    keep[0] = True
    return alphas[keep], coefs[:, keep]


def _subsample_mask(rng: np.random.RandomState, n_samples: int, sample_fraction: float) -> np.ndarray:
    mask = rng.rand(n_samples) < sample_fraction
    if mask.sum() < 2:
        mask[:] = True
    return mask


def lasso_stability_path(
    X: np.ndarray,
    y: np.ndarray,
    *,
    scaling: float = DEFAULT_SCALING,
    random_state: int | np.random.RandomState | None = None,
    n_resampling: int = DEFAULT_N_RESAMPLING,
    n_grid: int = DEFAULT_N_GRID,
    sample_fraction: float = DEFAULT_SAMPLE_FRACTION,
    eps: float = 4 * _MACHINE_EPS,
) -> tuple[np.ndarray, np.ndarray]:
    """Stability path of the randomized Lasso.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        The ascending alpha grid (relative to ``alpha_max``, ending at 1) and
        the ``(n_features, n_grid_points)`` selection frequencies.
    """

    X, y = check_X_y(X, y, y_numeric=True)
    _validate_fraction("scaling", scaling)
    _validate_fraction("sample_fraction", sample_fraction)
    if n_resampling <= 0:
        raise ValueError("n_resampling must be positive")

    rng = check_random_state(random_state)
    n_samples, n_features = X.shape

    paths = []
    for _ in range(n_resampling):
        mask = _subsample_mask(rng, n_samples, sample_fraction)
        weights = 1.0 - scaling * rng.randint(0, 2, size=(n_features,))
        paths.append(_resampled_lasso_path(X, y, mask, weights, eps))

    all_alphas = sorted(set(np.concatenate([alphas for alphas, _ in paths]).tolist()))
    stride = max(1, int(len(all_alphas) / float(n_grid)))
    all_alphas = all_alphas[::stride]
    if all_alphas[-1] != 1:
        all_alphas.append(1.0)
    grid = np.array(all_alphas)

    scores_path = np.zeros((n_features, len(grid)))
    for alphas, coefs in paths:
        if alphas[0] != 0:
            alphas = np.r_[0, alphas]
            coefs = np.c_[np.ones((n_features, 1)), coefs]
        if alphas[-1] != grid[-1]:
            alphas = np.r_[alphas, grid[-1]]
            coefs = np.c_[coefs, np.zeros((n_features, 1))]
        interpolator = interp1d(
            alphas,
            coefs,
            kind="nearest",
            assume_sorted=True,
            bounds_error=False,
            fill_value=0,
            axis=-1,
        )
        scores_path += interpolator(grid) != 0

    scores_path /= n_resampling
    return grid, scores_path


def _randomized_lasso_selection(
    X: np.ndarray,
    y: np.ndarray,
    weights: np.ndarray,
    mask: np.ndarray,
    alphas: np.ndarray,
    max_iter: int = 500,
) -> np.ndarray:
    X = X[mask]
    y = y[mask]
    X = X - X.mean(axis=0)
    y = y - y.mean()
    X = (1 - weights) * X

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ConvergenceWarning)
        path_alphas, _, coefs = lars_path(
            X,
            y,
            alpha_min=float(np.min(alphas)),
            method="lasso",
            verbose=False,
            max_iter=max_iter,
        )

    if len(path_alphas) < 2:
        return np.zeros((X.shape[1], len(alphas)), dtype=bool)

    # Below the end of the path the active set stays as it was at the end.
    interpolator = interp1d(
        path_alphas[::-1],
        coefs[:, ::-1],
        bounds_error=False,
        fill_value=(coefs[:, -1], np.zeros(X.shape[1])),
        axis=-1,
    )
    return interpolator(alphas) != 0.0


def randomized_lasso_scores(
    X: np.ndarray,
    y: np.ndarray,
    alphas: Sequence[float] | float,
    *,
    scaling: float = DEFAULT_SCALING,
    sample_fraction: float = DEFAULT_SAMPLE_FRACTION,
    n_resampling: int = DEFAULT_N_RESAMPLING,
    random_state: int | np.random.RandomState | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Stability selection scores for a grid of Lasso penalties.

    Returns the per-feature score (maximum selection frequency over ``alphas``)
    and the full ``(n_features, n_alphas)`` frequency table.
    """

    X, y = check_X_y(X, y, y_numeric=True)
    _validate_fraction("scaling", scaling)
    _validate_fraction("sample_fraction", sample_fraction)
    if n_resampling <= 0:
        raise ValueError("n_resampling must be positive")

    alpha_grid = np.atleast_1d(np.asarray(alphas, dtype=np.float64))
    if np.any(alpha_grid <= 0):
        raise ValueError("alphas must be strictly positive")

    X = X - X.mean(axis=0)
    norms = np.sqrt(np.sum(X ** 2, axis=0))
    norms[norms == 0] = 1.0
    X = X / norms

    rng = check_random_state(random_state)
    n_samples, n_features = X.shape

    all_scores = np.zeros((n_features, len(alpha_grid)))
    for _ in range(n_resampling):
        weights = scaling * rng.randint(0, 2, size=(n_features,))
        mask = _subsample_mask(rng, n_samples, sample_fraction)
        all_scores += _randomized_lasso_selection(X, y, weights, mask, alpha_grid)

    all_scores /= n_resampling
    return all_scores.max(axis=1), all_scores


def selection_scores(
    problem: SyntheticProblem,
    *,
    n_resampling: int = DEFAULT_N_RESAMPLING,
    random_state: int | None = None,
    cv: int = LASSO_CV_FOLDS,
) -> SelectionScores:
    """Score every feature with stability selection, an F-test and LassoLarsCV."""

    X, y = problem.X, problem.y

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ConvergenceWarning)
        warnings.simplefilter("ignore", UserWarning)
        lars_cv = LassoLarsCV(cv=cv).fit(X, y)

    stability_alphas = np.linspace(lars_cv.alphas_[0], 0.1 * lars_cv.alphas_[0], N_STABILITY_ALPHAS)
    stability, _ = randomized_lasso_scores(
        X,
        y,
        stability_alphas,
        n_resampling=n_resampling,
        random_state=random_state,
    )
    f_scores, _ = f_regression(X, y)

    return SelectionScores(
        scores={
            "F-test": np.nan_to_num(f_scores),
            "Stability selection": stability,
            "Lasso coefs": np.abs(lars_cv.coef_),
        },
        alpha=float(lars_cv.alpha_),
        stability_alphas=stability_alphas,
    )


def normalized_scores(score: np.ndarray, floor: float = MIN_SCORE_RATIO) -> np.ndarray:
    """Scale a score vector by its maximum, clipped below at ``floor`` for log axes."""

    score = np.asarray(score, dtype=float)
    peak = np.max(score) if score.size else 0.0
    if peak <= 0:
        return np.full(score.shape, floor)
    return np.maximum(score / peak, floor)


def precision_recall_summary(
    relevant_mask: np.ndarray,
    scores: Mapping[str, np.ndarray],
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Precision-recall curves and their AUC for each scoring method."""

    relevant_mask = np.asarray(relevant_mask, dtype=bool)
    if not relevant_mask.any():
        raise ValueError("relevant_mask must flag at least one feature")

    summary_records = []
    curve_frames = []
    for name, score in scores.items():
        score = np.asarray(score, dtype=float)
        if score.shape != relevant_mask.shape:
            raise ValueError(
                f"Score '{name}' has shape {score.shape}, expected {relevant_mask.shape}"
            )
        precision, recall, _ = precision_recall_curve(relevant_mask, score)
        summary_records.append({"method": name, "auc": float(auc(recall, precision))})
        curve_frames.append(pd.DataFrame({"method": name, "recall": recall, "precision": precision}))

    return pd.DataFrame(summary_records), pd.concat(curve_frames, ignore_index=True)


def stability_path_frame(
    alphas: np.ndarray,
    scores_path: np.ndarray,
    relevant_mask: np.ndarray,
) -> pd.DataFrame:
    """Long frame of ``(feature, relevant, alpha, score)`` rows for persistence."""

    if scores_path.shape != (len(relevant_mask), len(alphas)):
        raise ValueError(
            f"scores_path has shape {scores_path.shape}, expected {(len(relevant_mask), len(alphas))}"
        )
    n_features, n_alphas = scores_path.shape
    return pd.DataFrame(
        {
            "feature": np.repeat(np.arange(n_features), n_alphas),
            "relevant": np.repeat(np.asarray(relevant_mask, dtype=bool), n_alphas),
            "alpha": np.tile(alphas, n_features),
            "score": scores_path.ravel(),
        }
    )


__all__ = [
    "SelectionScores",
    "SyntheticProblem",
    "design_incoherence",
    "lasso_stability_path",
    "make_correlated_design",
    "mutual_incoherence",
    "normalized_scores",
    "precision_recall_summary",
    "randomized_lasso_scores",
    "selection_scores",
    "stability_path_frame",
]
