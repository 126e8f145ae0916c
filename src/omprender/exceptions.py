"""Exceptions raised by omprender.

Everything derives from OmpRenderError. Template errors are internal to the
resolver and reach callers only as TemplateIssue records; the remaining
classes are raised by the theme, context and configuration loaders.
"""

from pathlib import Path
from typing import Any


class OmpRenderError(Exception):
    """Root of the omprender exception hierarchy."""


# =============================================================================
# Templates
# =============================================================================


class TemplateError(OmpRenderError):
    """A placeholder could not be parsed or evaluated.

    Attributes:
        expression: Source text of the offending expression or template.
        segment: Identifier of the segment being resolved, if any.
        cause: Underlying exception from a template function, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str,
        segment: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.expression: str = expression
        self.segment: str | None = segment
        self.cause: Exception | None = cause


class ParseError(TemplateError):
    """Malformed expression or template structure."""


class EvaluationError(TemplateError):
    """Unknown function, wrong argument count or a type mismatch."""


# =============================================================================
# Theme documents and context snapshots
# =============================================================================


class ThemeError(OmpRenderError):
    """Problem with a theme document."""


class ThemeLoadError(ThemeError):
    """Theme file is missing, unreadable or not decodable.

    Attributes:
        path: The theme file.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path: Path | None = path


class ThemeValidationError(ThemeError):
    """Theme document decoded but has the wrong shape.

    Attributes:
        path: Theme file path, or None for in-memory documents.
        issues: One message per failing field, e.g.
            "blocks.0.segments.1.type: Field required".
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        issues: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.path: Path | None = path
        self.issues: tuple[str, ...] = issues


class ContextLoadError(OmpRenderError):
    """Context snapshot is missing, undecodable or inconsistent."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path: Path | None = path


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(OmpRenderError):
    """Problem with omprender's own settings."""


class ConfigLoadError(ConfigError):
    """Config file could not be parsed.

    Attributes:
        path: The config file.
        line: 1-based line of the syntax error, when known.
        column: 1-based column of the syntax error, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """A configuration value has the wrong type or is out of range.

    Attributes:
        key: Dotted key of the value, e.g. "render.on_error".
        value: The rejected value.
        expected: What would have been accepted.
        source: Layer or file the value came from, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
