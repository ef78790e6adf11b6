"""Main Typer application: the ``makewrap`` command.

Entry point: ``makewrap`` (configured via pyproject.toml console_scripts).

Every argument makewrap does not recognize is forwarded verbatim to make;
use ``--`` to pass arguments that collide with makewrap's own options.
Option defaults come from ``makewrap.config`` (``MAKEWRAP_*`` variables).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from makewrap import __version__
from makewrap.config import config
from makewrap.core.errors import MakewrapError
from makewrap.core.runner import BuildRunner
from makewrap.models.build import BuildCommand
from makewrap.monitor.renderer import SummaryRenderer

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

app = typer.Typer(
    name="makewrap",
    help="Run make and prefix compiler diagnostics with the directory make was in.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Exit status for failures of makewrap itself, distinct from make's own.
FATAL_EXIT_CODE = 2

# Shell status for a writer killed by SIGPIPE; used when stdout is closed early.
BROKEN_PIPE_EXIT_CODE = 141


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"makewrap {__version__}")
        raise typer.Exit()


def _silence_stdout() -> None:
    """Point stdout at devnull so the final flush at exit cannot fail again."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        # stdout without a file descriptor (captured or replaced)
        return


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(
            f"Unknown log level {level_name!r}", param_hint="'--log-level'"
        )
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("makewrap").setLevel(level)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run_cmd(
    make_args: Optional[List[str]] = typer.Argument(
        None,
        help="Arguments forwarded verbatim to make.",
        show_default=False,
    ),
    make_program: str = typer.Option(
        config.make_program,
        "--make-program",
        help="Build program to run.",
    ),
    echo: bool = typer.Option(
        config.echo_command,
        "--echo/--no-echo",
        help="Print the make command line before running it.",
    ),
    merge_stderr: bool = typer.Option(
        config.merge_stderr,
        "--merge-stderr/--separate-stderr",
        help="Filter make's stderr together with its stdout.",
    ),
    summary: bool = typer.Option(
        config.show_summary,
        "--summary/--no-summary",
        help="Print a line and diagnostic summary to stderr after the build.",
    ),
    log_level: str = typer.Option(
        config.log_level,
        "--log-level",
        help="Logging level for makewrap's own messages.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Run make, annotating diagnostics with the directory make was in.

    Exits with make's own exit status.
    """
    _configure_logging(log_level)

    command = BuildCommand(
        program=make_program,
        arguments=list(make_args or []),
        merge_stderr=merge_stderr,
    )

    runner = BuildRunner(command)
    try:
        if echo:
            typer.echo(command.display())
        result = runner.run()
    except BrokenPipeError as exc:
        logger.info("Output closed early; stopped forwarding build output")
        _silence_stdout()
        raise typer.Exit(code=BROKEN_PIPE_EXIT_CODE) from exc
    except MakewrapError as exc:
        logger.error("Build aborted: %s", exc)
        err_console.print(f"[bold red]makewrap:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=FATAL_EXIT_CODE) from exc

    if summary:
        SummaryRenderer(err_console).print(result)

    raise typer.Exit(code=result.exit_status)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
