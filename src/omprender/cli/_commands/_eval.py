# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""omprender eval command - resolve a single template."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from omprender.enums import ErrorMarker
from omprender.templating import TemplateResolver

from ._context import CLIContext, OutputFormat
from ._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    print_text,
    report_issues,
    resolve_context,
)

app = App(
    name="eval",
    help="Resolve one template against a context",
    help_on_error=True,
)


@app.default
def evaluate(
    template: Annotated[str, Parameter(help="Template text, e.g. '{{ .Git.Branch }}'")],
    /,
    *,
    context: Annotated[
        Path | None,
        Parameter(name=["--context", "-c"], help="Context snapshot file"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
    on_error: Annotated[
        ErrorMarker | None,
        Parameter(
            name="--on-error",
            help="What a failing placeholder renders as (default from config)",
        ),
    ] = None,
) -> None:
    """Resolve a template and print the result."""
    ctx = CLIContext.get_current()
    console = ctx.console()
    error_console = ctx.error_console()

    snapshot = resolve_context(context, console=error_console)
    resolver = TemplateResolver(
        on_error=on_error if on_error is not None else ctx.config.render.on_error,
        logger=ctx.logger,
    )
    resolution = resolver.resolve_with_issues(template, snapshot)

    if output_format == OutputFormat.JSON:
        print_text(
            console,
            format_json(
                {
                    "text": resolution.text,
                    "issues": [issue.to_dict() for issue in resolution.issues],
                }
            ),
        )
    else:
        print_text(console, resolution.text)
        if not ctx.quiet:
            report_issues(error_console, resolution.issues)

    if resolution.issues and ctx.config.render.strict:
        exit_with_error(
            f"{len(resolution.issues)} template issue(s) reported",
            ExitCode.TEMPLATE_ISSUES,
            console=error_console,
        )
