"""Project-wide configuration constants."""

from pathlib import Path

PAGES_DIR = Path("pages")
THUMBNAIL_PREFIX = "/images/gallery"

DEFAULT_RANDOM_STATE = 42
FIGURE_DPI = 150

# Display groups used when assembling the gallery index, in menu order.
DISPLAY_GROUPS = {
    "statistical": "Statistical charts",
    "feature_selection": "Feature selection",
}
