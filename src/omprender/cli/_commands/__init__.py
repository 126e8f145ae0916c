"""omprender CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._context import CLIContext, OutputFormat
from ._eval import app as eval_app
from ._render import app as render_app
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    get_error_console,
)
from ._show_context import app as context_app

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "context_app",
    "eval_app",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "register_commands",
    "render_app",
]


def register_commands(app: App) -> None:
    """Register all commands with the main app."""
    app.command(render_app)
    app.command(eval_app)
    app.command(context_app)
