"""The `[logging]` section."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from omprender.config._models._common import LogFormat, LogLevel


class LoggingConfig(BaseModel):
    """Where and how much the CLI logs.

    Attributes:
        level: Lowest level written.
        format: `json` lines or `text` console lines.
        file: Log file; empty means `cli.log` in the user log directory.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""
