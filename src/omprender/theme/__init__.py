"""Theme documents: blocks of segments with templates and properties."""

from ._load import load_theme, theme_from_mapping
from ._models import Block, Segment, ThemeDocument

__all__ = [
    "Block",
    "Segment",
    "ThemeDocument",
    "load_theme",
    "theme_from_mapping",
]
