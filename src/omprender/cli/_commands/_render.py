# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""omprender render command - resolve every segment of a theme."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from omprender.enums import ErrorMarker
from omprender.exceptions import ThemeLoadError, ThemeValidationError
from omprender.segments import SegmentProcessor, compose_plain
from omprender.templating import TemplateResolver
from omprender.theme import load_theme

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
    name="render",
    help="Resolve a theme's segments against a context",
    help_on_error=True,
)


@app.default
def render(
    theme: Annotated[Path, Parameter(help="Theme file (JSON, YAML or TOML)")],
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
    """Render a theme.

    Text output prints one line per block with style markup removed. JSON
    output prints every resolved segment together with its derived fields
    and the issues met while resolving it.

    Template issues are warnings unless `render.strict` is enabled, in
    which case the command exits with a non-zero status after printing.
    """
    ctx = CLIContext.get_current()
    console = ctx.console()
    error_console = ctx.error_console()

    try:
        document = load_theme(theme, logger=ctx.logger)
    except ThemeValidationError as e:
        for issue in e.issues:
            error_console.print(f"  {issue}", markup=False, highlight=False)
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=error_console)
    except ThemeLoadError as e:
        code = ExitCode.LOAD_ERROR if theme.exists() else ExitCode.NOT_FOUND
        exit_with_error(str(e), code, console=error_console)

    snapshot = resolve_context(context, console=error_console)
    marker = on_error if on_error is not None else ctx.config.render.on_error
    processor = SegmentProcessor(
        resolver=TemplateResolver(on_error=marker, logger=ctx.logger),
        logger=ctx.logger,
    )
    blocks = processor.render_theme(document, snapshot)
    issues = tuple(issue for block in blocks for issue in block.issues)

    if ctx.logger is not None:
        ctx.logger.info(
            "theme_rendered",
            theme=str(theme),
            blocks=len(blocks),
            issues=len(issues),
        )

    if output_format == OutputFormat.JSON:
        print_text(
            console,
            format_json(
                {
                    "blocks": [block.to_dict() for block in blocks],
                    "issues": [issue.to_dict() for issue in issues],
                }
            ),
        )
    else:
        for line in compose_plain(blocks):
            print_text(console, line)
        if not ctx.quiet:
            report_issues(error_console, issues)

    if issues and ctx.config.render.strict:
        exit_with_error(
            f"{len(issues)} template issue(s) reported",
            ExitCode.TEMPLATE_ISSUES,
            console=error_console,
        )
