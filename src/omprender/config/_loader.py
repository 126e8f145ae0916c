# pyright: reportAny=false, reportExplicitAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Reading config layers: TOML files, environment variables and merging."""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from omprender.exceptions import ConfigLoadError
from omprender.utils import load_json

ENV_PREFIX = "OMPRENDER_"

# OMPRENDER_RENDER__ON_ERROR -> ("render", "on_error")
_ENV_SEPARATOR = "__"

_TRUE = frozenset({"true", "1"})
_FALSE = frozenset({"false", "0"})


def read_toml_file(path: Path) -> dict[str, Any]:
    """Decode the TOML file at `path`.

    Raises:
        FileNotFoundError: If `path` does not exist.
        ConfigLoadError: If the content is not valid TOML. The error carries
            the position of the problem where the interpreter reports one.
    """
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise ConfigLoadError(
                msg,
                path=path,
                line=getattr(e, "lineno", None),
                column=getattr(e, "colno", None),
            ) from e


def copy_value(value: Any) -> Any:
    """Copy nested dicts and lists so the result shares no containers."""
    if isinstance(value, dict):
        return {key: copy_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Lay `override` over `base` and return the result as a new dict.

    Tables present on both sides merge key by key. Anything else in
    `override` (scalars, arrays, a table replacing a scalar) replaces the
    value in `base` outright. Neither argument is modified.
    """
    merged = copy_value(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy_value(value)
    return merged


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Store `value` under a dotted `key_path`, creating tables on the way.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "render.strict", True)
        >>> d
        {'render': {'strict': True}}
    """
    *parents, leaf = key_path.split(".")
    table = d
    for name in parents:
        child = table.get(name)
        if not isinstance(child, dict):
            child = table[name] = {}
        table = child
    table[leaf] = value


def _coerce_env_value(raw: str) -> Any:
    """Turn an environment string into a config value.

    Booleans (`true`/`false`/`1`/`0`) are recognised first, then integers,
    decimals, and JSON arrays or objects. Everything else stays a string.
    """
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False

    try:
        return int(raw)
    except ValueError:
        pass

    if "." in raw:
        try:
            return float(raw)
        except ValueError:
            pass

    if raw[:1] + raw[-1:] in ("[]", "{}"):
        decoded = load_json(raw)
        if decoded is not None:
            return decoded

    return raw


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Collect `<prefix>SECTION__KEY` variables into a nested dict.

    Double underscores separate nesting levels and names are lower-cased, so
    `OMPRENDER_LOGGING__LEVEL=debug` becomes `{"logging": {"level":
    "debug"}}`. Prefixed variables without a separator (`OMPRENDER_DEBUG`,
    `OMPRENDER_STRICT_CONFIG`) are process switches and are skipped.
    """
    values: dict[str, Any] = {}
    env = os.environ if environ is None else environ

    for name, raw in env.items():
        if not name.startswith(prefix):
            continue
        key = name.removeprefix(prefix)
        if _ENV_SEPARATOR not in key:
            continue
        dotted = ".".join(key.lower().split(_ENV_SEPARATOR))
        set_nested_key(values, dotted, _coerce_env_value(raw))

    return values
