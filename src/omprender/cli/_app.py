"""omprender application object and entry point."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from omprender.config import safe_load_config
from omprender.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Resolve shell prompt theme templates into display text."

# --verbose raises the log level through the CLI configuration layer
_VERBOSE_OVERRIDES: dict[str, object] = {"logging": {"level": "debug"}}


def _build_context(
    tokens: tuple[str, ...],
    *,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    config: Path | None,
) -> CLIContext:
    settings, config_error = safe_load_config(
        config_path=config,
        cli_overrides=_VERBOSE_OVERRIDES if verbose else None,
    )
    logger = create_cli_logger(
        level=settings.logging.level.value,
        log_format=settings.logging.format.value,  # type: ignore[arg-type]
        log_file=settings.logging.file,
        command=tokens[0] if tokens else "",
    )
    if config_error is not None:
        logger.warning("config_fallback", error=config_error)
    return CLIContext(
        config=settings,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_path=config,
        config_error=config_error,
        logger=logger,
    )


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the `omprender` application with its commands registered.

    Args:
        console: Where help and usage are printed.
        error_console: Where argument errors are printed.
        exit_on_error: Exit on argument errors instead of raising.
    """
    app = App(
        name="omprender",
        help=_HELP,
        help_on_error=True,
        console=console or Console(),
        error_console=error_console or Console(stderr=True),
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _launch(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Write debug entries to the log")] = False,
        quiet: Annotated[bool, Parameter(help="Do not print template warnings")] = False,
        no_color: Annotated[
            bool, Parameter(name="--no-color", help="Disable colored output")
        ] = False,
        config: Annotated[
            Path | None,
            Parameter(name="--config", help="Use this config file instead of discovery"),
        ] = None,
    ) -> None:
        """Apply global options, then run the selected command.

        Args:
            tokens: Command name and its arguments.
            verbose: Debug logging.
            quiet: Suppress template issue warnings.
            no_color: Disable colored output.
            config: Explicit config file.
        """
        ctx = _build_context(
            tokens, verbose=verbose, quiet=quiet, no_color=no_color, config=config
        )
        with CLIContext.activate(ctx):
            app(tokens)

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Entry point for the `omprender` script."""
    create_app().meta()


if __name__ == "__main__":
    main()
