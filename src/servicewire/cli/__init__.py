"""CLI command implementations for servicewire."""

from servicewire.cli.commands import export_command, show_command, validate_command

__all__ = [
    "export_command",
    "show_command",
    "validate_command",
]
