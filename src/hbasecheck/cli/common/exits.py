"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from hbasecheck.cli.common.output import out
from hbasecheck.core.errors import ProbeError
from hbasecheck.core.report import status_line
from hbasecheck.core.status import Status


def status_exit(status: Status, msg: str) -> NoReturn:
    """Print the status line and exit with the status' exit code."""
    out.status_line(status_line(status, msg))
    raise typer.Exit(status.exit_code)


def usage_exit(msg: str) -> NoReturn:
    """Exit UNKNOWN for invalid command line input."""
    status_exit(Status.UNKNOWN, msg)


def exit_from_exc(exc: ProbeError) -> NoReturn:
    """
    Print a fatal probe error as the status line and exit.

    Chains the original exception so tracebacks stay useful when debugging.
    """
    out.status_line(status_line(exc.status, exc.message))
    raise typer.Exit(exc.status.exit_code) from exc


def unexpected_exit(exc: Exception) -> NoReturn:
    """Exit UNKNOWN for an error the probe has no classification for."""
    out.status_line(
        status_line(Status.UNKNOWN, f"unexpected error: {type(exc).__name__}: {exc}")
    )
    raise typer.Exit(Status.UNKNOWN.exit_code) from exc
