"""CLI commands for rclean.

This package contains all subcommand implementations.
"""

from rclean.cli.commands import clean, config, scan

__all__ = ["clean", "config", "scan"]
