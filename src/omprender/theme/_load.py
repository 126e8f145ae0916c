"""Loading theme documents from mappings and files."""

from collections.abc import Mapping
from pathlib import Path

import structlog
from pydantic import ValidationError
from structlog.typing import FilteringBoundLogger

from omprender.exceptions import ThemeLoadError, ThemeValidationError
from omprender.utils import read_document

from ._models import ThemeDocument


def _format_issues(error: ValidationError) -> tuple[str, ...]:
    issues: list[str] = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        issues.append(f"{location}: {detail['msg']}")
    return tuple(issues)


def theme_from_mapping(
    data: Mapping[str, object], *, path: Path | None = None
) -> ThemeDocument:
    """Validate a decoded theme document.

    Args:
        data: Decoded document.
        path: Source file, recorded on errors.

    Returns:
        The validated ThemeDocument.

    Raises:
        ThemeValidationError: If the document has the wrong shape.
    """
    try:
        return ThemeDocument.model_validate(data)
    except ValidationError as e:
        issues = _format_issues(e)
        msg = f"Invalid theme: {len(issues)} validation error(s)"
        raise ThemeValidationError(msg, path=path, issues=issues) from e


def load_theme(
    path: Path,
    *,
    logger: FilteringBoundLogger | None = None,
) -> ThemeDocument:
    """Load a theme file.

    Args:
        path: Path to a `.json`, `.yaml`, `.yml` or `.toml` theme.
        logger: Logger for load events. Defaults to the package logger.

    Returns:
        The validated ThemeDocument.

    Raises:
        ThemeLoadError: If the file cannot be read or decoded.
        ThemeValidationError: If the document has the wrong shape.
    """
    log = logger if logger is not None else structlog.get_logger("omprender")

    try:
        data = read_document(path)
    except FileNotFoundError as e:
        msg = f"Theme file not found: {path}"
        raise ThemeLoadError(msg, path=path) from e
    except (OSError, ValueError) as e:
        msg = f"Failed to read theme: {e}"
        raise ThemeLoadError(msg, path=path) from e

    if not isinstance(data, Mapping):
        msg = "Theme document must be a mapping at the top level"
        raise ThemeValidationError(msg, path=path, issues=(msg,))

    theme = theme_from_mapping(data, path=path)  # pyright: ignore[reportUnknownArgumentType]
    log.debug(
        "theme_loaded",
        path=str(path),
        blocks=len(theme.blocks),
        segments=sum(len(block.segments) for block in theme.blocks),
    )
    return theme
