"""Enumeration types for omprender."""

from enum import StrEnum


class Alignment(StrEnum):
    """Horizontal placement of a block on the prompt line."""

    LEFT = "left"
    RIGHT = "right"


class SegmentStyle(StrEnum):
    """Visual style of a segment, consumed by the rendering layer."""

    PLAIN = "plain"
    POWERLINE = "powerline"
    DIAMOND = "diamond"
    ACCORDION = "accordion"


class ErrorMarker(StrEnum):
    """What a placeholder renders when its expression fails.

    SOURCE keeps the literal placeholder text so the failure stays visible,
    EMPTY drops it.
    """

    SOURCE = "source"
    EMPTY = "empty"


class IssueKind(StrEnum):
    """Category of a reported template issue."""

    PARSE = "parse"
    EVALUATION = "evaluation"
    PROPERTIES = "properties"
