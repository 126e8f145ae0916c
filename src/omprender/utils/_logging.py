"""structlog logger factories.

Every logger built here is standalone: it owns its processors and output
stream and leaves the global structlog configuration alone, so library users
who configure structlog themselves are unaffected.
"""

import logging
import os
from pathlib import Path
from typing import IO, Literal, cast

import structlog
from structlog.typing import FilteringBoundLogger, Processor

from ._paths import get_cli_log_file

LogFormatType = Literal["json", "text"]

DEBUG_ENV = "OMPRENDER_DEBUG"
LOG_LEVEL_ENV = "OMPRENDER_LOG_LEVEL"


def _level_number(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _get_log_level() -> int:
    """Level from the environment: OMPRENDER_DEBUG, then OMPRENDER_LOG_LEVEL, else INFO."""
    if os.environ.get(DEBUG_ENV):
        return logging.DEBUG
    return _level_number(os.environ.get(LOG_LEVEL_ENV, "info"))


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Map a configured level name to a logging level.

    With `respect_env`, a set OMPRENDER_DEBUG wins over `level`.
    """
    if respect_env and os.environ.get(DEBUG_ENV):
        return logging.DEBUG
    return _level_number(level)


def _renderer(log_format: LogFormatType) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def _create_logger(
    stream: IO[str],
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
) -> FilteringBoundLogger:
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        *_renderer(log_format),
    ]
    level = _get_log_level() if log_level is None else log_level
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(stream),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
        ),
    )


def create_file_logger(
    log_file_path: str | Path,
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
) -> FilteringBoundLogger:
    """Create a logger that appends lines to `log_file_path`.

    Missing parent directories are created.

    Args:
        log_file_path: Log file, opened for appending.
        level: Level name; when None the level comes from the environment.
        log_format: "json" for one JSON object per line, "text" for
            `key=value` console lines.

    Returns:
        A FilteringBoundLogger.
    """
    path = Path(log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return _create_logger(
        path.open("a", encoding="utf-8"),
        log_level=None if level is None else _log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> FilteringBoundLogger:
    """Create the logger for one CLI invocation.

    Logs go to `log_file`, or to `cli.log` in the user log directory when
    it is empty. OMPRENDER_DEBUG forces debug output. A non-empty `command`
    is bound to every entry.
    """
    logger = create_file_logger(
        log_file or get_cli_log_file(), level=level, log_format=log_format
    )
    return logger.bind(command=command) if command else logger
