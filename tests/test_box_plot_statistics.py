"""Tests for box plot sample generators and quartile summaries."""

from __future__ import annotations

import numpy as np
import pytest

from box_plots.settings import OUTLIER_SAMPLE
from box_plots.statistics import (
    classify_outliers,
    shifted_normal_samples,
    sine_trend_samples,
    split_by_condition,
)


class TestClassifyOutliers:
    """Quartiles, whiskers and outlier flags."""

    def test_reference_sample(self) -> None:
        summary = classify_outliers(OUTLIER_SAMPLE)
        assert summary.q1 == pytest.approx(6.85)
        assert summary.median == pytest.approx(8.15)
        assert summary.q3 == pytest.approx(10.1875)
        assert summary.lower_whisker == pytest.approx(5.25)
        assert summary.upper_whisker == pytest.approx(12.0)
        np.testing.assert_allclose(summary.outliers, [0.75, 16.0, 20.9, 22.3, 23.25])
        np.testing.assert_allclose(summary.suspected_outliers, [20.9, 22.3, 23.25])

    def test_suspected_outliers_are_subset_of_outliers(self) -> None:
        summary = classify_outliers(OUTLIER_SAMPLE)
        assert set(summary.suspected_outliers) <= set(summary.outliers)

    def test_sample_without_outliers(self) -> None:
        summary = classify_outliers([1.0, 2.0, 3.0, 4.0, 5.0])
        assert summary.outliers.size == 0
        assert summary.lower_whisker == 1.0
        assert summary.upper_whisker == 5.0

    def test_non_finite_values_are_ignored(self) -> None:
        summary = classify_outliers([1.0, 2.0, np.nan, 3.0, np.inf])
        assert summary.median == pytest.approx(2.0)

    def test_empty_sample_raises(self) -> None:
        with pytest.raises(ValueError):
            classify_outliers([])

    def test_suspected_fence_inside_outlier_fence_raises(self) -> None:
        with pytest.raises(ValueError):
            classify_outliers(OUTLIER_SAMPLE, whis=3.0, suspected_whis=1.5)

    def test_summary_frame_lists_counts(self) -> None:
        frame = classify_outliers(OUTLIER_SAMPLE).to_frame().set_index("statistic")
        assert frame.loc["outlier_count", "value"] == 5
        assert frame.loc["suspected_outlier_count", "value"] == 3


class TestSampleGenerators:
    """Random and deterministic sample helpers."""

    def test_shifted_samples_are_reproducible(self) -> None:
        first = shifted_normal_samples([-1.0, 1.0], 50, random_state=7)
        second = shifted_normal_samples([-1.0, 1.0], 50, random_state=7)
        assert len(first) == 2
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)
            assert a.shape == (50,)

    def test_shift_moves_the_sample(self) -> None:
        low, high = shifted_normal_samples([-5.0, 5.0], 200, random_state=0)
        assert low.mean() < 0 < high.mean()

    def test_non_positive_size_raises(self) -> None:
        with pytest.raises(ValueError):
            shifted_normal_samples([0.0], 0)

    def test_sine_trend_shapes(self) -> None:
        samples = sine_trend_samples(30, 10, random_state=0)
        assert len(samples) == 30
        assert all(sample.shape == (10,) for sample in samples)

    def test_split_by_condition(self) -> None:
        split = split_by_condition(range(12), ["day 1", "day 2"])
        np.testing.assert_array_equal(split["day 1"], np.arange(6))
        np.testing.assert_array_equal(split["day 2"], np.arange(6, 12))

    def test_uneven_split_raises(self) -> None:
        with pytest.raises(ValueError, match="evenly"):
            split_by_condition(range(5), ["day 1", "day 2"])
