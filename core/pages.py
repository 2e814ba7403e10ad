"""Assemble markdown gallery pages from case outputs."""

from __future__ import annotations

import inspect
import os
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

from config import DISPLAY_GROUPS, PAGES_DIR
from core.front_matter import PageMetadata, read_page_metadata, render_front_matter

PAGE_FILENAME = "index.md"


@dataclass(frozen=True)
class PageSection:
    """One example on a gallery page."""

    heading: str
    description: str = ""
    figures: Sequence[Path] = ()
    snippet: str | None = None


def source_snippet(functions: Sequence[Callable], call: str | None = None) -> str:
    """Source of the plotting functions, followed by an optional example call."""

    blocks = [textwrap.dedent(inspect.getsource(function)).rstrip() for function in functions]
    if call:
        blocks.append(call.strip())
    return "\n\n\n".join(blocks)


def _relative_link(target: Path, page_dir: Path) -> str:
    relative = os.path.relpath(Path(target).resolve(), Path(page_dir).resolve())
    return Path(relative).as_posix()


def render_page(
    metadata: PageMetadata,
    sections: Iterable[PageSection],
    *,
    page_dir: Path,
    intro: str | None = None,
) -> str:
    """Return the page text: front matter followed by one block per section."""

    parts = [render_front_matter(metadata)]
    heading = metadata.name or metadata.title
    parts.append(f"\n# {heading}\n")
    if intro:
        parts.append(f"\n{intro.strip()}\n")

    for section in sections:
        parts.append(f"\n### {section.heading}\n")
        if section.description:
            parts.append(f"\n{section.description.strip()}\n")
        for figure in section.figures:
            link = _relative_link(figure, page_dir)
            parts.append(f"\n![{section.heading}]({link})\n")
        if section.snippet:
            parts.append(f"\n```python\n{section.snippet.rstrip()}\n```\n")

    return "".join(parts)


def write_page(
    metadata: PageMetadata,
    sections: Sequence[PageSection],
    *,
    pages_root: Path | str | None = None,
    intro: str | None = None,
) -> Path:
    """Write ``<pages_root>/<slug>/index.md`` and return its path."""

    if not sections:
        raise ValueError("A gallery page needs at least one section.")

    root = Path(pages_root) if pages_root is not None else PAGES_DIR
    page_dir = root / metadata.slug
    page_dir.mkdir(parents=True, exist_ok=True)

    text = render_page(metadata, sections, page_dir=page_dir, intro=intro)
    page_path = page_dir / PAGE_FILENAME
    page_path.write_text(text, encoding="utf-8")
    return page_path


def collect_pages(pages_root: Path | str | None = None) -> list[tuple[PageMetadata, Path]]:
    root = Path(pages_root) if pages_root is not None else PAGES_DIR
    pages = []
    for page_path in sorted(root.glob(f"*/{PAGE_FILENAME}")):
        try:
            metadata = read_page_metadata(page_path)
        except (KeyError, ValueError) as exc:
            print(f"[WARN] Skipping {page_path}: {exc}")
            continue
        pages.append((metadata, page_path))
    return pages


def group_pages(
    pages: Iterable[tuple[PageMetadata, Path]],
    display_groups: Mapping[str, str] | None = None,
) -> dict[str, list[tuple[PageMetadata, Path]]]:
    """Group pages by ``display_as``, ordered by known sections then by page order."""

    groups = display_groups if display_groups is not None else DISPLAY_GROUPS
    grouped: dict[str, list[tuple[PageMetadata, Path]]] = {}
    for metadata, path in pages:
        grouped.setdefault(metadata.display_as, []).append((metadata, path))

    known = [key for key in groups if key in grouped]
    unknown = sorted(key for key in grouped if key not in groups)
    return {
        key: sorted(grouped[key], key=lambda item: (item[0].order, item[0].title))
        for key in known + unknown
    }


def build_gallery_index(
    pages_root: Path | str | None = None,
    *,
    title: str = "Python chart gallery",
) -> Path:
    """Write the gallery landing page listing every page by section."""

    root = Path(pages_root) if pages_root is not None else PAGES_DIR
    root.mkdir(parents=True, exist_ok=True)
    grouped = group_pages(collect_pages(root))

    lines = [f"# {title}", ""]
    if not grouped:
        lines.append("No gallery pages have been built yet.")
    for display_as, entries in grouped.items():
        lines.append(f"## {DISPLAY_GROUPS.get(display_as, display_as.replace('_', ' ').title())}")
        lines.append("")
        for metadata, page_path in entries:
            link = Path(os.path.relpath(page_path, root)).as_posix()
            label = metadata.name or metadata.title
            summary = f" - {metadata.description}" if metadata.description else ""
            lines.append(f"- [{label}]({link}){summary}")
        lines.append("")

    index_path = root / PAGE_FILENAME
    index_path.write_text("\n".join(lines).rstrip() + "\n", encoding="utf-8")
    return index_path


__all__ = [
    "PageSection",
    "build_gallery_index",
    "collect_pages",
    "group_pages",
    "render_page",
    "source_snippet",
    "write_page",
]
