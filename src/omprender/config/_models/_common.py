"""Enums and the source record shared by the configuration models."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any


class LogLevel(StrEnum):
    """Minimum severity written to the CLI log."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Renderer used for CLI log lines."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Where a layer of configuration came from.

    Members are listed from the layer that wins a conflict (CLI) down to the
    built-in defaults.
    """

    CLI = "cli"
    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One layer of configuration and the values it contributed.

    Attributes:
        name: Which layer this is.
        path: File backing the layer; None for CLI, environment and defaults.
        exists: False when a file layer has no file on disk or a CLI layer
            carries no overrides.
        values: Raw (unvalidated) values read from the layer.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]

    @property
    def is_file(self) -> bool:
        return self.path is not None
