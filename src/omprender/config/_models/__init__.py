"""Configuration models.

This module provides Pydantic models for omprender configuration sections
and the main Config container class.
"""

from omprender.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from omprender.config._models._config import Config
from omprender.config._models._logging import LoggingConfig
from omprender.config._models._render import RenderConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
]
