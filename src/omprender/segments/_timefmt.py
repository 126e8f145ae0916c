"""Formatting datetimes with Go reference layouts (`Mon Jan 2 15:04:05 MST 2006`)."""

import re
from collections.abc import Callable, Mapping
from datetime import datetime
from types import MappingProxyType

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Longest tokens first so that e.g. "2006" wins over "2".
_LAYOUT_RE = re.compile(
    r"January|Jan|Monday|Mon|2006|MST|Z07:00|Z0700|-07:00|-0700|-07"
    r"|15|06|01|02|_2|03|04|05|PM|pm|(?<=5)[.,](?:0+|9+)|1|2|3|4|5"
)


def _hour12(now: datetime) -> int:
    return now.hour % 12 or 12


def _offset(now: datetime, *, colon: bool, zulu: bool, minutes: bool = True) -> str:
    delta = now.utcoffset()
    if delta is None:
        return ""
    seconds = int(delta.total_seconds())
    if zulu and seconds == 0:
        return "Z"
    sign = "-" if seconds < 0 else "+"
    hours, rest = divmod(abs(seconds) // 60, 60)
    if not minutes:
        return f"{sign}{hours:02d}"
    return f"{sign}{hours:02d}{':' if colon else ''}{rest:02d}"


_FORMATTERS: Mapping[str, Callable[[datetime], str]] = MappingProxyType(
    {
        "January": lambda now: _MONTHS[now.month - 1],
        "Jan": lambda now: _MONTHS[now.month - 1][:3],
        "Monday": lambda now: _WEEKDAYS[now.weekday()],
        "Mon": lambda now: _WEEKDAYS[now.weekday()][:3],
        "2006": lambda now: f"{now.year:04d}",
        "06": lambda now: f"{now.year % 100:02d}",
        "01": lambda now: f"{now.month:02d}",
        "1": lambda now: str(now.month),
        "02": lambda now: f"{now.day:02d}",
        "_2": lambda now: f"{now.day:>2}",
        "2": lambda now: str(now.day),
        "15": lambda now: f"{now.hour:02d}",
        "03": lambda now: f"{_hour12(now):02d}",
        "3": lambda now: str(_hour12(now)),
        "04": lambda now: f"{now.minute:02d}",
        "4": lambda now: str(now.minute),
        "05": lambda now: f"{now.second:02d}",
        "5": lambda now: str(now.second),
        "PM": lambda now: "PM" if now.hour >= 12 else "AM",
        "pm": lambda now: "pm" if now.hour >= 12 else "am",
        "MST": lambda now: now.tzname() or "",
        "Z07:00": lambda now: _offset(now, colon=True, zulu=True),
        "Z0700": lambda now: _offset(now, colon=False, zulu=True),
        "-07:00": lambda now: _offset(now, colon=True, zulu=False),
        "-0700": lambda now: _offset(now, colon=False, zulu=False),
        "-07": lambda now: _offset(now, colon=False, zulu=False, minutes=False),
    }
)


def _fraction(now: datetime, token: str) -> str:
    separator, digits = token[0], token[1:]
    text = f"{now.microsecond:06d}000"[: len(digits)]
    if digits[0] == "9":
        text = text.rstrip("0")
        return f"{separator}{text}" if text else ""
    return f"{separator}{text}"


def format_go_time(now: datetime, layout: str) -> str:
    """Format `now` using a Go time layout.

    Example:
        >>> format_go_time(datetime(2024, 3, 9, 14, 5, 7), "15:04:05")
        '14:05:07'
        >>> format_go_time(datetime(2024, 3, 9, 14, 5, 7), "Mon Jan _2 3:04PM")
        'Sat Mar  9 2:05PM'
    """

    def substitute(match: re.Match[str]) -> str:
        token = match.group()
        formatter = _FORMATTERS.get(token)
        if formatter is None:
            return _fraction(now, token)
        return formatter(now)

    return _LAYOUT_RE.sub(substitute, layout)
