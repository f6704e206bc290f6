"""CLI package for rclean.

This package contains the Typer application and all subcommands.
"""

from rclean.cli.main import app

__all__ = ["app"]
