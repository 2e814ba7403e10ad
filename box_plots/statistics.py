"""Sample generators and quartile summaries for box plot examples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class OutlierSummary:
    """Quartiles, whisker ends and flagged points of one sample."""

    q1: float
    median: float
    q3: float
    lower_whisker: float
    upper_whisker: float
    outliers: np.ndarray
    suspected_outliers: np.ndarray

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {"statistic": "q1", "value": self.q1},
                {"statistic": "median", "value": self.median},
                {"statistic": "q3", "value": self.q3},
                {"statistic": "iqr", "value": self.iqr},
                {"statistic": "lower_whisker", "value": self.lower_whisker},
                {"statistic": "upper_whisker", "value": self.upper_whisker},
                {"statistic": "outlier_count", "value": float(self.outliers.size)},
                {"statistic": "suspected_outlier_count", "value": float(self.suspected_outliers.size)},
            ]
        )


def classify_outliers(
    values: Sequence[float],
    *,
    whis: float = 1.5,
    suspected_whis: float = 3.0,
) -> OutlierSummary:
    """Split a sample into whisker range, outliers and suspected outliers.

    Whiskers reach the most extreme observations inside ``whis`` IQRs of the
    quartiles. Outliers fall outside those fences; suspected outliers are the
    subset lying beyond ``suspected_whis`` IQRs.
    """

    if suspected_whis < whis:
        raise ValueError("suspected_whis must be greater than or equal to whis")

    array = np.asarray(values, dtype=float)
    array = array[np.isfinite(array)]
    if array.size == 0:
        raise ValueError("Cannot summarise an empty sample.")

    q1, median, q3 = np.percentile(array, [25, 50, 75])
    iqr = q3 - q1
    lower_fence = q1 - whis * iqr
    upper_fence = q3 + whis * iqr
    inside = array[(array >= lower_fence) & (array <= upper_fence)]

    outlier_mask = (array < lower_fence) | (array > upper_fence)
    suspected_mask = (array < q1 - suspected_whis * iqr) | (array > q3 + suspected_whis * iqr)

    return OutlierSummary(
        q1=float(q1),
        median=float(median),
        q3=float(q3),
        lower_whisker=float(inside.min()) if inside.size else float(q1),
        upper_whisker=float(inside.max()) if inside.size else float(q3),
        outliers=np.sort(array[outlier_mask]),
        suspected_outliers=np.sort(array[suspected_mask]),
    )


def shifted_normal_samples(
    shifts: Sequence[float],
    size: int,
    *,
    random_state: int | None = None,
) -> list[np.ndarray]:
    """Draw one standard normal sample of ``size`` values per shift."""

    if size <= 0:
        raise ValueError("size must be positive")
    rng = np.random.default_rng(random_state)
    return [rng.standard_normal(size) + shift for shift in shifts]


def sine_trend_samples(
    n_boxes: int = 30,
    size: int = 10,
    *,
    random_state: int | None = None,
) -> list[np.ndarray]:
    """Samples whose centre follows a half sine wave with a slight upward drift."""

    if n_boxes <= 0 or size <= 0:
        raise ValueError("n_boxes and size must be positive")
    rng = np.random.default_rng(random_state)
    samples = []
    for idx in range(n_boxes):
        phase = np.pi * idx / n_boxes
        centre = 3.5 * np.sin(phase) + idx / n_boxes
        spread = 1.5 + 0.5 * np.cos(phase)
        samples.append(centre + spread * rng.random(size))
    return samples


def split_by_condition(
    values: Sequence[float],
    conditions: Sequence[str],
) -> dict[str, np.ndarray]:
    """Split a flat sample into equal consecutive chunks, one per condition."""

    array = np.asarray(values, dtype=float)
    if not conditions:
        raise ValueError("conditions must contain at least one value")
    if array.size % len(conditions) != 0:
        raise ValueError(
            f"Sample of length {array.size} cannot be split evenly across {len(conditions)} conditions."
        )
    chunks = np.split(array, len(conditions))
    return {condition: chunk for condition, chunk in zip(conditions, chunks)}


__all__ = [
    "OutlierSummary",
    "classify_outliers",
    "shifted_normal_samples",
    "sine_trend_samples",
    "split_by_condition",
]
