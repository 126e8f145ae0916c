"""Reading structured documents (JSON, YAML, TOML) from disk."""

import tomllib
from pathlib import Path

import orjson
import yaml

SUPPORTED_SUFFIXES: frozenset[str] = frozenset({".json", ".yaml", ".yml", ".toml"})


def load_json(json_str: str) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON string.

    Args:
        json_str: The JSON string to parse.

    Returns:
        The parsed JSON data as a dictionary or list, or None if parsing fails.
    """
    try:
        data: object = orjson.loads(json_str)
    except orjson.JSONDecodeError:
        return None
    if isinstance(data, dict | list):
        return data  # pyright: ignore[reportUnknownVariableType]
    return None


def read_document(path: Path) -> object:
    """Read and decode a structured document, picking the format by suffix.

    Args:
        path: Path to a `.json`, `.yaml`, `.yml` or `.toml` file.

    Returns:
        The decoded document.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        ValueError: If the suffix is unsupported or the content cannot be
            decoded.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        supported = ", ".join(sorted(SUPPORTED_SUFFIXES))
        msg = f"Unsupported document type '{suffix}' (expected one of {supported})"
        raise ValueError(msg)

    if suffix == ".toml":
        with path.open("rb") as f:
            return tomllib.load(f)

    content = path.read_text(encoding="utf-8")
    if suffix == ".json":
        return orjson.loads(content)

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML: {e}"
        raise ValueError(msg) from e
