# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""The Config container returned by every configuration loader."""

from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from omprender.config._defaults import DEFAULT_CONFIG
from omprender.config._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from omprender.config._models._common import ConfigSource, ConfigSourceName
from omprender.config._models._logging import LoggingConfig
from omprender.config._models._render import RenderConfig

T = TypeVar("T")
SectionT = TypeVar("SectionT", bound=BaseModel)


def _section(model: type[SectionT], data: object) -> SectionT:
    """Build a section model, keeping the defaults when `data` is unusable.

    Only reached for unvalidated input (`validate=False`); validated input
    always parses.
    """
    if not isinstance(data, dict):
        return model()
    try:
        return model.model_validate(data)
    except ValidationError:
        return model()


def _check(merged: dict[str, Any], source: str | None = None) -> None:
    # Deferred import to avoid circular dependency
    from omprender.config._validation import (  # noqa: PLC0415
        raise_if_validation_errors,
        validate_config,
    )

    raise_if_validation_errors(validate_config(merged), source=source)


def _read_layer(source: ConfigSource, cli_overrides: dict[str, Any] | None) -> dict[str, Any]:
    match source.name:
        case ConfigSourceName.DEFAULT:
            return source.values
        case ConfigSourceName.ENV:
            return parse_env_vars()
        case ConfigSourceName.CLI:
            return cli_overrides or {}
        case _ if source.is_file and source.exists and source.path is not None:
            return read_toml_file(source.path)
        case _:
            return {}


class Config(BaseModel):
    """Merged omprender settings.

    `logging` and `render` are typed views of the merged data; `get()`
    reaches any key, including ones omprender does not model. Build
    instances with `from_dict()`, `from_file()` or `load()`.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    render: RenderConfig = RenderConfig()

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _build(cls, merged: dict[str, Any], sources: tuple[ConfigSource, ...]) -> Self:
        config = cls(
            logging=_section(LoggingConfig, merged.get("logging")),
            render=_section(RenderConfig, merged.get("render")),
        )
        config._data = merged
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Create a Config from `data` laid over the built-in defaults.

        Raises:
            ConfigValidationError: If `validate` is set and a value is invalid.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            _check(merged)
        return cls._build(merged, ())

    @classmethod
    def from_file(cls, path: Path, *, validate: bool = True) -> Self:
        """Create a Config from a single TOML file (plus defaults).

        User, project and environment layers are not consulted; this backs
        the `--config` option.

        Raises:
            FileNotFoundError: If `path` does not exist.
            ConfigLoadError: If `path` is not valid TOML.
            ConfigValidationError: If `validate` is set and a value is invalid.
        """
        data = read_toml_file(path)
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            _check(merged, source=str(path))
        source = ConfigSource(
            name=ConfigSourceName.PROJECT, path=path, exists=True, values=data
        )
        return cls._build(merged, (source,))

    @classmethod
    def load(
        cls,
        *,
        start: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Discover every configuration layer and merge them.

        Layers are applied lowest first: defaults, user file, project file,
        `OMPRENDER_*` environment variables, then CLI overrides.

        Args:
            start: Where the upward search for `.omprender.toml` begins.
                Defaults to the working directory.
            include_env: Read `OMPRENDER_SECTION__KEY` variables.
            include_cli: Apply `cli_overrides`.
            cli_overrides: Nested overrides built from command-line flags.

        Raises:
            ConfigLoadError: If a config file is not valid TOML.
            ConfigValidationError: If the merged result is invalid.
        """
        # Deferred import to avoid circular dependency
        from omprender.config._discovery import discover_sources  # noqa: PLC0415

        discovered = discover_sources(
            start,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        layers: list[ConfigSource] = []
        for source in reversed(discovered):
            values = _read_layer(source, cli_overrides)
            if values:
                merged = deep_merge(merged, values)
            layers.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

        _check(merged)
        return cls._build(merged, tuple(reversed(layers)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Layers that were consulted, highest precedence first."""
        return list(self._sources)

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key in the merged data.

        Examples:
            >>> Config.from_dict({}).get("render.on_error")
            'source'
            >>> Config.from_dict({}).get("render.colour", "auto")
            'auto'
        """
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def to_dict(self) -> dict[str, Any]:
        """Return an independent copy of the merged data."""
        return copy_value(self._data)
