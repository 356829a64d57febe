"""CLI command handlers."""

from gesturebank.cli.commands.info import run_info
from gesturebank.cli.commands.export import run_export
from gesturebank.cli.commands.clear import run_clear

__all__ = [
    "run_info",
    "run_export",
    "run_clear",
]
