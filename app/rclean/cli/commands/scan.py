"""Scan command implementation.

Lists Cargo projects whose build artifacts can be cleaned, without
touching the filesystem.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from rclean.cli.display import create_projects_table
from rclean.projects.matcher import find_matching_directories
from rclean.projects.rules import ARTIFACT_FOLDER_NAME, CARGO_PROJECT_RULES
from rclean.utils.formatting import console, print_info

app = typer.Typer(
    help="List Cargo projects with build artifacts.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan_projects(
    ctx: typer.Context,
    target: Annotated[
        Path | None,
        typer.Option(
            "--target",
            "-t",
            help="Directory to start from (default: current directory).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List Cargo projects under a directory that have a build folder."""
    if ctx.invoked_subcommand is not None:
        return

    root = target or Path.cwd()
    projects = find_matching_directories(root, CARGO_PROJECT_RULES)

    if output_format == OutputFormat.JSON:
        data = [
            {"project": str(p), "artifact": str(p / ARTIFACT_FOLDER_NAME)} for p in projects
        ]
        typer.echo(json.dumps(data, indent=2))
        return

    if not projects:
        print_info("Nothing to clean.")
        return

    console.print(create_projects_table(projects, ARTIFACT_FOLDER_NAME))
    console.print(f"\n[dim]Found {len(projects)} project(s) under {escape(str(root))}[/dim]")
