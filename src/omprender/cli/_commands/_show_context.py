# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""omprender context command - print the effective context."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from ._context import CLIContext
from ._shared import format_json, print_text, resolve_context

app = App(
    name="context",
    help="Print the effective context as JSON",
    help_on_error=True,
)


@app.default
def show_context(
    *,
    context: Annotated[
        Path | None,
        Parameter(
            name=["--context", "-c"],
            help="Context snapshot file (mock context when omitted)",
        ),
    ] = None,
) -> None:
    """Print the context templates are resolved against."""
    ctx = CLIContext.get_current()
    snapshot = resolve_context(context, console=ctx.error_console())
    print_text(ctx.console(), format_json(snapshot.to_dict()))
