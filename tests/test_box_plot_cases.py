"""Tests for the box plot gallery cases and page."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

import box_plots
from core.front_matter import read_page_metadata
from core.shared_utils import read_case_metadata

EXPECTED_TRACES = {
    "case_1": 2,
    "case_2": 2,
    "case_3": 2,
    "case_4": 2,
    "case_5": 3,
    "case_6": 6,
    "case_7": 30,
}


class TestBoxPlotCases:
    """Each case renders a figure and records its trace count."""

    @pytest.mark.parametrize(("case_id", "expected"), sorted(EXPECTED_TRACES.items()))
    def test_case_writes_figure_and_metadata(self, tmp_path: Path, case_id: str, expected: int) -> None:
        case_dir = box_plots.run_case_by_id(case_id, output_root=tmp_path)

        assert case_dir == tmp_path / case_id
        metadata = read_case_metadata(case_dir)
        assert metadata["case_id"] == case_id
        assert metadata["package"] == "box_plots"
        assert metadata["trace_count"] == expected
        assert metadata["figures"]
        for figure in metadata["figures"]:
            assert figure.endswith(".png")
            assert Path(figure).exists()

    def test_basic_case_saves_samples(self, tmp_path: Path) -> None:
        case_dir = box_plots.run_case_by_id("case_1", output_root=tmp_path, sample_size=20)
        samples = pd.read_csv(case_dir / "case_1_samples.csv")
        assert samples.groupby("trace").size().to_dict() == {"Sample A": 20, "Sample B": 20}

    def test_outlier_case_records_flags(self, tmp_path: Path) -> None:
        metadata = read_case_metadata(box_plots.run_case_by_id("case_5", output_root=tmp_path))
        assert metadata["suspected_outliers"] == pytest.approx([20.9, 22.3, 23.25])

    def test_grouped_case_with_custom_conditions(self, tmp_path: Path) -> None:
        case_dir = box_plots.run_case_by_id(
            "case_6",
            output_root=tmp_path,
            samples={"a": [1, 2, 3, 4, 5, 6], "b": [2, 3, 4, 5, 6, 7]},
            conditions=["x", "y", "z"],
        )
        metadata = read_case_metadata(case_dir)
        assert metadata["trace_count"] == 6
        assert metadata["legend_entries"] == 2

    def test_invalid_jitter(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="jitter"):
            box_plots.run_case_by_id("case_3", output_root=tmp_path, jitter=2.0)

    def test_unknown_case_id(self) -> None:
        with pytest.raises(KeyError, match="case_99"):
            box_plots.run_case_by_id("case_99")


class TestBoxPlotsPage:
    """Assembling the gallery page from every case."""

    def test_build_page(self, tmp_path: Path) -> None:
        page_path = box_plots.build_page(
            output_root=tmp_path / "outputs",
            pages_root=tmp_path / "pages",
        )

        assert page_path == tmp_path / "pages" / "box-plots" / "index.md"
        metadata = read_page_metadata(page_path)
        assert metadata.permalink == "/python/box-plots/"
        assert metadata.display_as == "statistical"
        assert metadata.order == 3

        text = page_path.read_text(encoding="utf-8")
        for case in box_plots.CASE_STUDIES:
            assert f"### {case.title}" in text
        assert text.count("![") == len(box_plots.CASE_STUDIES)

    def test_page_snippets_show_plotting_code(self, tmp_path: Path) -> None:
        page_path = box_plots.build_page(
            output_root=tmp_path / "outputs",
            pages_root=tmp_path / "pages",
        )

        text = page_path.read_text(encoding="utf-8")
        assert text.count("```python") == len(box_plots.CASE_STUDIES)
        assert "def plot_sample_boxplot(" in text
        assert "ax.boxplot(" in text
        assert "sns.boxplot(" in text
        assert 'run_case_by_id("case_7")' in text
