"""Tests for markdown page assembly and the gallery index."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.front_matter import PageMetadata, parse_front_matter
from core.pages import (
    PageSection,
    build_gallery_index,
    collect_pages,
    group_pages,
    source_snippet,
    write_page,
)

if TYPE_CHECKING:
    from pathlib import Path


def _page(title: str, slug: str, display_as: str, order: float) -> PageMetadata:
    return PageMetadata(
        title=title,
        permalink=f"/python/{slug}/",
        name=title,
        description=f"About {title}",
        display_as=display_as,
        order=order,
    )


class TestWritePage:
    """Writing a single gallery page."""

    def test_page_contains_sections_and_relative_figure(self, tmp_path: Path) -> None:
        figure = tmp_path / "outputs" / "case_1" / "chart.png"
        figure.parent.mkdir(parents=True)
        figure.write_bytes(b"png")

        page_path = write_page(
            _page("Box Plots", "box-plots", "statistical", 3),
            [PageSection(heading="Basic", description="Two samples.", figures=[figure], snippet="print(1)")],
            pages_root=tmp_path / "pages",
            intro="Intro text.",
        )

        assert page_path == tmp_path / "pages" / "box-plots" / "index.md"
        data, body = parse_front_matter(page_path.read_text(encoding="utf-8"))
        assert data["title"] == "Box Plots"
        assert "### Basic" in body
        assert "![Basic](../../outputs/case_1/chart.png)" in body
        assert "```python\nprint(1)\n```" in body
        assert "Intro text." in body

    def test_page_without_sections_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            write_page(_page("Empty", "empty", "statistical", 1), [], pages_root=tmp_path)


class TestGalleryIndex:
    """Grouping and ordering pages on the landing page."""

    def test_pages_grouped_by_section_and_sorted_by_order(self, tmp_path: Path) -> None:
        section = [PageSection(heading="Only")]
        write_page(_page("Violin", "violin", "statistical", 5), section, pages_root=tmp_path)
        write_page(_page("Box Plots", "box-plots", "statistical", 3), section, pages_root=tmp_path)
        write_page(_page("Randomized Lasso", "randomized-lasso", "feature_selection", 1), section, pages_root=tmp_path)

        grouped = group_pages(collect_pages(tmp_path))
        assert list(grouped) == ["statistical", "feature_selection"]
        assert [meta.title for meta, _ in grouped["statistical"]] == ["Box Plots", "Violin"]

        index_text = build_gallery_index(tmp_path).read_text(encoding="utf-8")
        assert index_text.index("Box Plots") < index_text.index("Violin")
        assert "## Feature selection" in index_text
        assert "(box-plots/index.md)" in index_text

    def test_unknown_sections_follow_known_ones(self, tmp_path: Path) -> None:
        section = [PageSection(heading="Only")]
        write_page(_page("Maps", "maps", "maps", 1), section, pages_root=tmp_path)
        write_page(_page("Box Plots", "box-plots", "statistical", 3), section, pages_root=tmp_path)

        assert list(group_pages(collect_pages(tmp_path))) == ["statistical", "maps"]

    def test_invalid_pages_are_skipped(self, tmp_path: Path) -> None:
        broken = tmp_path / "broken" / "index.md"
        broken.parent.mkdir()
        broken.write_text("no front matter\n", encoding="utf-8")

        assert collect_pages(tmp_path) == []
        assert "No gallery pages" in build_gallery_index(tmp_path).read_text(encoding="utf-8")

    @pytest.mark.parametrize(
        "front_matter",
        [
            "title: Bad permalink\npermalink: 5\n",
            "title: No order\npermalink: /python/no-order/\norder:\n",
            "title: Text order\npermalink: /python/text-order/\norder: first\n",
        ],
    )
    def test_malformed_front_matter_is_skipped(self, tmp_path: Path, front_matter: str) -> None:
        write_page(_page("Box Plots", "box-plots", "statistical", 3), [PageSection(heading="Only")], pages_root=tmp_path)
        broken = tmp_path / "broken" / "index.md"
        broken.parent.mkdir()
        broken.write_text(f"---\n{front_matter}---\n\nbody\n", encoding="utf-8")

        pages = collect_pages(tmp_path)
        assert [meta.title for meta, _ in pages] == ["Box Plots"]

        index_text = build_gallery_index(tmp_path).read_text(encoding="utf-8")
        assert "(box-plots/index.md)" in index_text
        assert "broken" not in index_text


def _draw(values):
    """Plot the values."""
    return sum(values)


class TestSourceSnippet:
    """Embedding plotting code in a page."""

    def test_function_source_precedes_call(self) -> None:
        snippet = source_snippet([_draw], "_draw([1, 2])")
        assert snippet.startswith("def _draw(values):")
        assert "return sum(values)" in snippet
        assert snippet.endswith("_draw([1, 2])")

    def test_without_call(self) -> None:
        assert source_snippet([_draw]).rstrip().endswith("return sum(values)")
