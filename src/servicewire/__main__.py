"""Main entry point for the servicewire command-line interface.

This module provides commands for:
- Showing the merged parameters and service names of a container
- Exporting the merged definitions as a container cache
- Validating container documents
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from servicewire.cli import export_command, show_command, validate_command

load_dotenv()

app = typer.Typer(name="servicewire", no_args_is_help=True)

ContainerFile = Annotated[
    Path,
    typer.Argument(
        help="Path to the primary container YAML file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
RootOption = Annotated[
    Path | None,
    typer.Option(
        "--root",
        help="Application root, the default 'root' parameter (defaults to the current directory)",
        envvar="SERVICEWIRE_ROOT",
        file_okay=False,
        dir_okay=True,
    ),
]
ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config-file",
        help="YAML file backing config.* references",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
]
BundleOption = Annotated[
    list[str] | None,
    typer.Option(
        "--bundle",
        "-b",
        help="Bundle as NAME=ROOT; repeat in override order",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose output (sets log level to DEBUG)"),
]


@app.command()
def show(
    container_file: ContainerFile,
    root: RootOption = None,
    cache: Annotated[
        Path | None,
        typer.Option(
            "--cache",
            help="Read a pre-merged container cache instead of the documents when it exists",
            dir_okay=False,
        ),
    ] = None,
    config_file: ConfigFileOption = None,
    bundle: BundleOption = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the snapshot as JSON")
    ] = False,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
) -> None:
    """Show merged parameters and service names without building any service.

    Example:
        servicewire show config/container.yml --root . --bundle blog=bundles/blog/src

    """
    show_command(
        container_file, root, cache, config_file, bundle, as_json, log_level, verbose
    )


@app.command()
def export(
    container_file: ContainerFile,
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Where to write the container cache (JSON)",
            dir_okay=False,
            writable=True,
        ),
    ],
    root: RootOption = None,
    config_file: ConfigFileOption = None,
    bundle: BundleOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
) -> None:
    """Write the fully merged definitions as a container cache."""
    export_command(container_file, output, root, config_file, bundle, log_level, verbose)


@app.command()
def validate(
    container_file: ContainerFile,
    root: RootOption = None,
    config_file: ConfigFileOption = None,
    bundle: BundleOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
) -> None:
    """Load and merge container documents, reporting any definition error."""
    validate_command(container_file, root, config_file, bundle, log_level, verbose)


def main() -> None:
    """Run the servicewire CLI."""
    app()


if __name__ == "__main__":
    main()
