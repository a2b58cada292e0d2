"""CLI command implementations for inspecting container documents."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from servicewire.builder import build_container, write_cache
from servicewire.bundles import StaticBundleDiscovery
from servicewire.cli.errors import CLIError, cli_error_handler
from servicewire.config_providers import MappingConfigProvider
from servicewire.configuration import ContainerConfiguration
from servicewire.container import ContainerSnapshot, ServiceContainer

logger = logging.getLogger(__name__)
console = Console()


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Configure basic console logging for a CLI run.

    Args:
        level: Logging level name
        verbose: Force DEBUG regardless of ``level``

    """
    if verbose:
        level = "DEBUG"
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise CLIError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def parse_bundles(values: list[str] | None) -> dict[str, Path]:
    """Parse repeated ``NAME=PATH`` options, keeping their order.

    Raises:
        CLIError: If an entry is not of the form NAME=PATH.

    """
    bundles: dict[str, Path] = {}
    for value in values or []:
        name, separator, path = value.partition("=")
        if not separator or not name or not path:
            raise CLIError(f"Bundle must be given as NAME=PATH, got: {value}")
        bundles[name] = Path(path)
    return bundles


def load_container(
    container_file: Path,
    root: Path | None,
    cache: Path | None,
    config_file: Path | None,
    bundles: list[str] | None,
) -> ServiceContainer:
    """Build a container from CLI options.

    Documents are merged without constructing any service.
    """
    configuration = ContainerConfiguration(
        root=root or Path.cwd(),
        container_path=container_file,
        cache_path=cache,
        use_cache=cache is not None,
    )
    config = MappingConfigProvider.from_file(config_file) if config_file else None
    return build_container(
        configuration,
        config=config,
        bundles=StaticBundleDiscovery(parse_bundles(bundles)),
    )


def show_command(
    container_file: Path,
    root: Path | None = None,
    cache: Path | None = None,
    config_file: Path | None = None,
    bundles: list[str] | None = None,
    as_json: bool = False,
    log_level: str = "WARNING",
    verbose: bool = False,
) -> None:
    """CLI command implementation for showing parameters and service names."""
    with cli_error_handler("show", "Failed to show container"):
        setup_logging(log_level, verbose)
        container = load_container(container_file, root, cache, config_file, bundles)
        snapshot = container.show()

    if as_json:
        typer.echo(json.dumps(snapshot, indent=2, default=str))
        return
    _print_snapshot(snapshot)


def export_command(
    container_file: Path,
    output: Path,
    root: Path | None = None,
    config_file: Path | None = None,
    bundles: list[str] | None = None,
    log_level: str = "WARNING",
    verbose: bool = False,
) -> None:
    """CLI command implementation for writing the merged definitions as a cache file."""
    with cli_error_handler("export", "Failed to export container"):
        setup_logging(log_level, verbose)
        container = load_container(container_file, root, None, config_file, bundles)
        write_cache(container, output)

    console.print(f"[green]Container cache written to {output}[/green]")


def validate_command(
    container_file: Path,
    root: Path | None = None,
    config_file: Path | None = None,
    bundles: list[str] | None = None,
    log_level: str = "WARNING",
    verbose: bool = False,
) -> None:
    """CLI command implementation for validating container documents."""
    with cli_error_handler("validate", "Container validation failed"):
        setup_logging(log_level, verbose)
        container = load_container(container_file, root, None, config_file, bundles)
        snapshot = container.show()

    console.print(
        f"[green]Container is valid:[/green] {len(snapshot['parameters'])} parameter(s), "
        f"{len(snapshot['services'])} service(s)"
    )


def _print_snapshot(snapshot: ContainerSnapshot) -> None:
    parameters = Table(title="Parameters")
    parameters.add_column("Name", style="cyan")
    parameters.add_column("Value")
    for name, value in snapshot["parameters"].items():
        parameters.add_row(name, _format_value(value))
    console.print(parameters)

    services = Table(title="Services")
    services.add_column("#", justify="right", style="dim")
    services.add_column("Name", style="cyan")
    for position, name in enumerate(snapshot["services"], start=1):
        services.add_row(str(position), name)
    console.print(services)


def _format_value(value: Any) -> str:  # noqa: ANN401
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)
