"""Error reporting for servicewire commands."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.panel import Panel

from servicewire.errors import ServiceWireError

logger = logging.getLogger(__name__)
console = Console(stderr=True)


class CLIError(Exception):
    """Invalid command-line input, reported without a traceback."""


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report a failed command as a rich panel and exit with code 1.

    Container errors are labelled with their type, so document, definition
    and resolution problems can be told apart. Errors from other sources are
    not caught and keep their traceback.

    Args:
        command: Name of the running command, used in the log record.
        title: Panel title.

    """
    try:
        yield
    except CLIError as e:
        _report(command, title, str(e))
        raise typer.Exit(1) from e
    except ServiceWireError as e:
        _report(command, title, f"{type(e).__name__}: {e}")
        raise typer.Exit(1) from e
    except OSError as e:
        _report(command, title, f"I/O error: {e}")
        raise typer.Exit(1) from e


def _report(command: str, title: str, message: str) -> None:
    logger.error("servicewire %s failed: %s", command, message)
    console.print(Panel(f"[red]{message}[/red]", title=title, border_style="red"))
