"""Truthiness and text conversion of template values."""

import math
from collections.abc import Mapping, Sized
from datetime import datetime

from omprender.context import PATH_MISS, Record

Value = str | int | float | bool | None


def is_truthy(value: object) -> bool:
    """Decide how a value behaves in an `if` guard.

    Empty strings, zero numbers, false, nil, missing paths and empty
    collections are false. Everything else, records included, is true.
    """
    if value is None or value is PATH_MISS:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return value != 0
    if isinstance(value, str | Mapping | list | tuple):
        return len(value) > 0  # pyright: ignore[reportUnknownArgumentType]
    return True


def format_number(value: float) -> str:
    """Render a float with the shortest representation that round-trips.

    Integral values print without a fractional part. Infinities and NaN print
    as an empty string so they never leak into prompt text.
    """
    if not math.isfinite(value):
        return ""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify(value: object) -> str:
    """Convert an evaluated value to the text a placeholder renders."""
    if value is None or value is PATH_MISS:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, Record):
        return value.template_text()
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return ""


def type_name(value: object) -> str:
    """Describe a value's type the way error messages refer to it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Record):
        return type(value).__name__
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, Sized):
        return "list"
    return type(value).__name__
