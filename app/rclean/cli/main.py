"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from rclean import __version__
from rclean.cli.commands import clean, config, scan
from rclean.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="rclean",
    help="Reclaim disk space by removing build folders from Cargo projects.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rclean version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route package log records to stderr through Rich.

    Non-verbose runs only surface errors so that normal output stays
    limited to the summary line.
    """
    package_logger = logging.getLogger("rclean")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.ERROR)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Print matched projects, errors and debug logging.",
        ),
    ] = False,
) -> None:
    """rclean - Remove build artifacts from nested Cargo projects.

    Walks a directory tree, finds every folder holding a Cargo.toml,
    a src/ and a target/ folder, and deletes target/ in parallel.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
