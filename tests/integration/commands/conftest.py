from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from omprender.cli import create_app

THEME_JSON = """
{
  "blocks": [
    {
      "segments": [
        {"type": "shell", "template": "{{ .Name }}"},
        {"type": "git", "template": " {{ .HEAD }}{{ if .Working.Changed }}*{{ end }}"}
      ]
    },
    {
      "alignment": "right",
      "segments": [{"type": "os", "template": "<#ff0000>{{ .Os.Platform }}</>"}]
    }
  ]
}
"""


@pytest.fixture
def omprender_cli(console: Console, isolated_env: Path) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code.

    Global options, configuration and logging are set up as in a real run.
    """
    _ = isolated_env
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


@pytest.fixture
def theme_file(isolated_env: Path) -> Path:
    path = isolated_env / "theme.json"
    path.write_text(THEME_JSON, encoding="utf-8")
    return path
