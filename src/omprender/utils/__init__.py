"""Shared utilities: document decoding, logging and platform paths."""

from ._documents import SUPPORTED_SUFFIXES, load_json, read_document
from ._logging import LogFormatType, create_cli_logger, create_file_logger
from ._paths import (
    APP_NAME,
    get_cli_log_file,
    get_log_dir,
    get_user_config_dir,
    get_user_config_file,
)

__all__ = [
    "APP_NAME",
    "SUPPORTED_SUFFIXES",
    "LogFormatType",
    "create_cli_logger",
    "create_file_logger",
    "get_cli_log_file",
    "get_log_dir",
    "get_user_config_dir",
    "get_user_config_file",
    "load_json",
    "read_document",
]
