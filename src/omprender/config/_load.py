"""Configuration loading for the CLI entry point."""

import os
import sys
from pathlib import Path

from omprender.exceptions import ConfigError

from ._models import Config

STRICT_CONFIG_ENV = "OMPRENDER_STRICT_CONFIG"


def _report(message: str, *, strict: bool) -> None:
    """Print a config problem to stderr; exit with status 1 in strict mode."""
    if strict:
        print(f"Error: {message}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {message}", file=sys.stderr)  # noqa: T201


def safe_load_config(
    *,
    config_path: Path | None = None,
    start: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration without letting a bad file stop a render.

    A broken or invalid config file produces a warning on stderr and the
    built-in defaults are used instead. With `OMPRENDER_STRICT_CONFIG=1` the
    process exits with status 1. An explicit `config_path` that does not
    exist always exits.

    Args:
        config_path: File given with `--config`; replaces discovery.
        start: Directory for the project file search.
        cli_overrides: Overrides built from global CLI flags.

    Returns:
        The loaded Config and None, or the default Config and the error
        message when loading failed.
    """
    strict = os.environ.get(STRICT_CONFIG_ENV, "0") == "1"

    if config_path is not None and not config_path.exists():
        _report(f"Config file not found: {config_path}", strict=True)

    try:
        if config_path is not None:
            config = Config.from_file(config_path)
        else:
            config = Config.load(
                start=start,
                include_cli=cli_overrides is not None,
                cli_overrides=cli_overrides,
            )
    except (ConfigError, OSError) as e:
        error = f"Failed to load config: {e}"
        _report(error, strict=strict)
        return Config.from_dict({}), error
    return config, None
