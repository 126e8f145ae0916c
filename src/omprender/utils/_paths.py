from pathlib import Path

import platformdirs

APP_NAME = "omprender"


def get_user_config_dir() -> Path:
    """Get the per-user configuration directory."""
    return platformdirs.user_config_path(APP_NAME)


def get_user_config_file() -> Path:
    """Get the path to the per-user configuration file."""
    return get_user_config_dir() / "config.toml"


def get_log_dir() -> Path:
    """Get the per-user log directory."""
    return platformdirs.user_log_path(APP_NAME)


def get_cli_log_file() -> Path:
    """Get the path to the CLI log file inside the user log directory."""
    return get_log_dir() / "cli.log"
