"""Core helpers for the chart gallery project."""

from .front_matter import PageMetadata, parse_front_matter, read_page_metadata, render_front_matter
from .pages import PageSection, build_gallery_index, write_page

__all__ = [
    "PageMetadata",
    "PageSection",
    "build_gallery_index",
    "parse_front_matter",
    "read_page_metadata",
    "render_front_matter",
    "write_page",
]
