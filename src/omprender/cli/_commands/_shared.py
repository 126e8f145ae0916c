# pyright: reportExplicitAny=false
"""Helpers used by every omprender command: exit codes, output and context loading."""

from enum import IntEnum
from pathlib import Path
from typing import Any, Never

import orjson
from rich.console import Console
from rich.markup import escape

from omprender.context import Context, default_context, load_context
from omprender.exceptions import ContextLoadError
from omprender.templating import TemplateIssue

FormattableData = dict[str, Any]


class ExitCode(IntEnum):
    """Process exit status of an omprender command."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    INTERNAL_ERROR = 5
    # render.strict is set and at least one template issue was reported
    TEMPLATE_ISSUES = 6


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Serialize `data` with orjson, two-space indented unless `indent` is False."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 if indent else None).decode()


def get_error_console() -> Console:
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print `message` as an error and leave with `code`.

    Raises:
        SystemExit: Always.
    """
    (console or get_error_console()).print(
        f"[red]Error:[/red] {escape(message)}", highlight=False
    )
    raise SystemExit(code)


def print_text(console: Console, text: str) -> None:
    """Print rendered text exactly as resolved (no markup, highlighting or emoji)."""
    console.print(text, markup=False, highlight=False, emoji=False)


def report_issues(console: Console, issues: tuple[TemplateIssue, ...]) -> None:
    for issue in issues:
        where = f"{issue.segment}: " if issue.segment else ""
        console.print(
            f"[yellow]Warning:[/yellow] {escape(where + issue.message)}",
            highlight=False,
        )


def resolve_context(path: Path | None, *, console: Console | None = None) -> Context:
    """Load the snapshot given with `--context`, or the mock context without one.

    A missing file exits with NOT_FOUND, an unusable one with LOAD_ERROR.
    """
    if path is None:
        return default_context()
    try:
        return load_context(path)
    except ContextLoadError as e:
        code = ExitCode.LOAD_ERROR if path.exists() else ExitCode.NOT_FOUND
        exit_with_error(str(e), code, console=console)
