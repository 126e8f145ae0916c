# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""Per-invocation state shared by the omprender commands.

`_app._launch` builds one CLIContext from the global options and the loaded
configuration and activates it for the duration of the command.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from rich.console import Console
from structlog.typing import FilteringBoundLogger

from omprender.config import Config


class OutputFormat(StrEnum):
    """How a command prints its result."""

    TEXT = "text"
    JSON = "json"


_active: ContextVar[CLIContext | None] = ContextVar("omprender_cli", default=None)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration for the running command.

    Attributes:
        config: Effective configuration.
        verbose: `--verbose` was given (debug logging).
        quiet: `--quiet` was given (no template issue warnings).
        no_color: `--no-color` was given.
        config_path: File passed with `--config`, if any.
        config_error: Why configuration fell back to defaults, if it did.
        logger: File logger bound to the command name.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    quiet: bool = False
    no_color: bool = False
    config_path: Path | None = None
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    def console(self) -> Console:
        """Console for command results on stdout. Lines are never wrapped."""
        return Console(no_color=self.no_color, soft_wrap=True)

    def error_console(self) -> Console:
        return Console(stderr=True, no_color=self.no_color)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Return the active context, or one built from default settings."""
        current = _active.get()
        return current if current is not None else cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        _active.set(ctx)

    @classmethod
    def reset(cls) -> None:
        _active.set(None)

    @classmethod
    @contextmanager
    def activate(cls, ctx: CLIContext) -> Iterator[CLIContext]:
        """Make `ctx` current inside the block and restore the previous one after."""
        token = _active.set(ctx)
        try:
            yield ctx
        finally:
            _active.reset(token)
