"""Segment processing.

A segment's properties are validated for its type, its derived fields are
computed and published under `.Segments.<Key>`, and its template, prefix and
postfix are resolved. Blocks are processed left to right so later segments
can reference earlier ones.

Example:
    >>> from omprender.context import default_context
    >>> from omprender.segments import SegmentProcessor
    >>> from omprender.theme import Segment
    >>> segment = Segment(type="git", template="{{ .HEAD }}")
    >>> SegmentProcessor().process(segment, default_context()).text
    'main'
"""

from ._compose import compose_plain, strip_markup
from ._derived import DERIVERS, derive_fields
from ._processor import (
    ResolvedBlock,
    ResolvedSegment,
    SegmentProcessor,
    process_block,
    render_theme,
)
from ._properties import (
    PROPERTY_MODELS,
    GitProperties,
    PathProperties,
    PathStyle,
    SegmentProperties,
    SysinfoProperties,
    TimeProperties,
    validate_properties,
)
from ._timefmt import format_go_time

__all__ = [
    "DERIVERS",
    "PROPERTY_MODELS",
    "GitProperties",
    "PathProperties",
    "PathStyle",
    "ResolvedBlock",
    "ResolvedSegment",
    "SegmentProcessor",
    "SegmentProperties",
    "SysinfoProperties",
    "TimeProperties",
    "compose_plain",
    "derive_fields",
    "format_go_time",
    "process_block",
    "render_theme",
    "strip_markup",
    "validate_properties",
]
