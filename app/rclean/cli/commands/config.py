"""Configuration commands.

Show the effective configuration and write a default config file.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from rclean.core.config import ConfigError, RcleanConfig, require_config, save_config
from rclean.core.paths import ensure_config_dir, get_config_path
from rclean.projects.cleaner import default_worker_count
from rclean.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or initialise the rclean configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config_path = get_config_path()
    config = require_config(config_path)

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")

    workers = (
        str(config.workers)
        if config.workers is not None
        else f"auto ({default_worker_count()})"
    )
    table.add_row("workers", workers)
    table.add_row("interactive", str(config.interactive).lower())

    console.print(table)
    source = escape(str(config_path)) if config_path.exists() else "built-in defaults"
    console.print(f"\n[dim]Source: {source}[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        saved = save_config(RcleanConfig(), config_path)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
