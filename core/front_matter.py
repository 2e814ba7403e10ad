"""Front-matter metadata for gallery pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from pathlib import Path
from typing import Any, Mapping

import yaml

FRONT_MATTER_DELIMITER = "---"

# Keys are emitted in this order; anything else lands after them.
FRONT_MATTER_KEYS: tuple[str, ...] = (
    "title",
    "permalink",
    "description",
    "name",
    "thumbnail",
    "layout",
    "language",
    "display_as",
    "order",
    "has_thumbnail",
    "page_type",
)
REQUIRED_KEYS: tuple[str, ...] = ("title", "permalink")


@dataclass(frozen=True)
class PageMetadata:
    """Front-matter fields consumed by the static-site generator.

    Parameters
    ----------
    title:
        Browser title of the page.
    permalink:
        Site path of the page; must start and end with ``/``.
    description:
        One-sentence summary shown in listings.
    name:
        Short display name used on the gallery index.
    thumbnail:
        Image path for the gallery tile.
    display_as:
        Gallery section the page is grouped under.
    order:
        Position of the page inside its section.
    extra:
        Unrecognised keys, kept so a parsed page can be rewritten unchanged.
    """

    title: str
    permalink: str
    description: str = ""
    name: str = ""
    thumbnail: str = ""
    display_as: str = "statistical"
    order: float = 0
    layout: str = "base"
    language: str = "python"
    has_thumbnail: bool = True
    page_type: str = "example_index"
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.permalink, str):
            raise ValueError(f"Permalink must be a string: {self.permalink!r}")
        if isinstance(self.order, bool) or not isinstance(self.order, Real):
            raise ValueError(f"Order must be a number: {self.order!r}")
        if not self.permalink.startswith("/") or not self.permalink.endswith("/"):
            raise ValueError(
                f"Permalink must start and end with '/': {self.permalink!r}"
            )

    @property
    def slug(self) -> str:
        parts = [part for part in self.permalink.split("/") if part]
        return parts[-1] if parts else "index"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PageMetadata":
        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise KeyError(f"Missing front-matter keys: {', '.join(missing)}")

        known = {key: data[key] for key in FRONT_MATTER_KEYS if key in data}
        extra = {key: value for key, value in data.items() if key not in FRONT_MATTER_KEYS}
        return cls(**known, extra=extra)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {key: getattr(self, key) for key in FRONT_MATTER_KEYS}
        payload.update(self.extra)
        return payload


def render_front_matter(metadata: PageMetadata | Mapping[str, Any]) -> str:
    """Return the YAML front-matter block, delimiters included."""

    if isinstance(metadata, PageMetadata):
        payload = metadata.to_mapping()
    else:
        payload = PageMetadata.from_mapping(metadata).to_mapping()

    body = yaml.safe_dump(payload, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return f"{FRONT_MATTER_DELIMITER}\n{body}{FRONT_MATTER_DELIMITER}\n"


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a page into its front-matter mapping and markdown body."""

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise ValueError("Page does not start with a front-matter block.")

    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            closing = idx
            break
    else:
        raise ValueError("Front-matter block is not terminated.")

    data = yaml.safe_load("".join(lines[1:closing])) or {}
    if not isinstance(data, dict):
        raise ValueError("Front matter must be a YAML mapping.")

    body = "".join(lines[closing + 1:])
    return data, body


def read_page_metadata(path: Path | str) -> PageMetadata:
    page_path = Path(path)
    with page_path.open("r", encoding="utf-8") as fh:
        data, _ = parse_front_matter(fh.read())
    return PageMetadata.from_mapping(data)


__all__ = [
    "FRONT_MATTER_KEYS",
    "PageMetadata",
    "parse_front_matter",
    "read_page_metadata",
    "render_front_matter",
]
