# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownMemberType=false, reportUnknownVariableType=false
"""Checking configuration data against the section models.

Keys omprender does not know about are ignored, so a newer config file
keeps working with an older tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from omprender.config._models._logging import LoggingConfig
from omprender.config._models._render import RenderConfig
from omprender.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic_core import ErrorDetails

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem found in configuration data.

    Attributes:
        key: Dotted location of the offending value, e.g. "render.on_error".
        message: What is wrong, as reported by pydantic.
        expected: Accepted values or pattern when pydantic names them.
        actual: The rejected value.
        severity: "error" for invalid values.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    severity: Severity


class ConfigSchema(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    render: RenderConfig = RenderConfig()


def _expected(error: ErrorDetails) -> str | None:
    ctx = error.get("ctx") or {}
    if "expected" in ctx:
        return str(ctx["expected"])
    if "pattern" in ctx:
        return f"pattern: {ctx['pattern']}"
    return None


def _issues(errors: Iterable[ErrorDetails]) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            key=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            expected=_expected(error),
            actual=error.get("input"),
            severity="error",
        )
        for error in errors
    ]


def validate_config(config: dict[str, Any]) -> list[ValidationIssue]:
    """Validate merged configuration data.

    Args:
        config: Merged data, typically defaults plus every loaded layer.

    Returns:
        The issues found; an empty list means the data is valid.
    """
    try:
        _ = ConfigSchema.model_validate(config)
    except ValidationError as e:
        return _issues(e.errors())
    return []


def raise_if_validation_errors(
    issues: list[ValidationIssue],
    source: str | None = None,
) -> None:
    """Turn the first error in `issues` into a ConfigValidationError.

    Args:
        issues: Result of validate_config().
        source: Layer or file the data came from, e.g. a file path.

    Raises:
        ConfigValidationError: If any issue has severity "error".
    """
    first = next((issue for issue in issues if issue.severity == "error"), None)
    if first is None:
        return
    msg = f"Invalid configuration value for '{first.key}': {first.message}"
    raise ConfigValidationError(
        msg,
        key=first.key,
        value=first.actual,
        expected=first.expected or first.message,
        source=source,
    )
