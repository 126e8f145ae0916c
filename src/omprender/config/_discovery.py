"""Locating the configuration layers.

A project may carry a `.omprender.toml`; the nearest one above the working
directory applies. Per-user settings live in the platform config directory
(see `omprender.utils.get_user_config_file`).
"""

from pathlib import Path
from typing import Any

from omprender.utils import get_user_config_file

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_NAME = ".omprender.toml"


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def find_project_config(start: Path | None = None) -> Path | None:
    """Return the nearest `.omprender.toml` at or above `start`.

    The search starts in the working directory when `start` is None and
    stops at the filesystem root.
    """
    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / PROJECT_CONFIG_NAME
        if _is_file(candidate):
            return candidate
    return None


def get_user_config_path() -> Path:
    """Return where the per-user config file would be, whether or not it exists."""
    return get_user_config_file()


def discover_sources(
    start: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """List the layers that take part in loading, highest precedence first.

    Values are only filled in for the CLI and default layers; files and the
    environment are read by `Config.load()`. The user layer is always
    listed, with `exists=False` when its file is absent. The project layer
    is listed only when a project file was found.
    """
    layers: list[ConfigSource] = []

    if include_cli:
        overrides = cli_overrides or {}
        layers.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(overrides),
                values=overrides,
            )
        )
    if include_env:
        layers.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    project = find_project_config(start)
    if project is not None:
        layers.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT, path=project, exists=True, values={}
            )
        )

    user = get_user_config_path()
    layers.append(
        ConfigSource(
            name=ConfigSourceName.USER, path=user, exists=_is_file(user), values={}
        )
    )
    layers.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )
    return layers
