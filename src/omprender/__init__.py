"""Resolve shell prompt theme templates into display text.

Example:
    >>> from omprender import default_context, resolve
    >>> resolve("{{ .Git.Branch }}", default_context())
    'main'
"""

from omprender.context import Context, default_context, load_context
from omprender.enums import Alignment, ErrorMarker, IssueKind, SegmentStyle
from omprender.exceptions import (
    ContextLoadError,
    EvaluationError,
    OmpRenderError,
    ParseError,
    TemplateError,
    ThemeLoadError,
    ThemeValidationError,
)
from omprender.segments import SegmentProcessor, compose_plain, render_theme
from omprender.templating import TemplateIssue, TemplateResolver, resolve
from omprender.theme import ThemeDocument, load_theme

__all__ = [
    "Alignment",
    "Context",
    "ContextLoadError",
    "ErrorMarker",
    "EvaluationError",
    "IssueKind",
    "OmpRenderError",
    "ParseError",
    "SegmentProcessor",
    "SegmentStyle",
    "TemplateError",
    "TemplateIssue",
    "TemplateResolver",
    "ThemeDocument",
    "ThemeLoadError",
    "ThemeValidationError",
    "compose_plain",
    "default_context",
    "load_context",
    "load_theme",
    "render_theme",
    "resolve",
]
