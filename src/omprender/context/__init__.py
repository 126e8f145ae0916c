"""Context model for template resolution.

A Context is an immutable snapshot of everything a template may reference:
environment variables, git state, system metrics, shell, path, clock and
platform, plus the derived fields of segments processed earlier in the same
block.

Example:
    >>> from omprender.context import context_from_mapping
    >>> ctx = context_from_mapping({"Git": {"Branch": "feature"}})
    >>> ctx.git.branch
    'feature'
"""

from ._defaults import DEFAULT_ENV, default_context
from ._load import ContextSnapshot, context_from_mapping, load_context
from ._models import (
    PATH_MISS,
    Context,
    EnvironmentVariables,
    GitChanges,
    GitContext,
    OsContext,
    PathContext,
    Record,
    SegmentFields,
    ShellContext,
    SystemContext,
    TimeContext,
    to_plain,
)

__all__ = [
    "DEFAULT_ENV",
    "PATH_MISS",
    "Context",
    "ContextSnapshot",
    "EnvironmentVariables",
    "GitChanges",
    "GitContext",
    "OsContext",
    "PathContext",
    "Record",
    "SegmentFields",
    "ShellContext",
    "SystemContext",
    "TimeContext",
    "context_from_mapping",
    "default_context",
    "load_context",
    "to_plain",
]
