"""Built-in settings, the lowest configuration layer."""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "render": {
        "on_error": "source",
        "strict": False,
    },
}
