"""Clean command implementation.

Finds Cargo projects under a directory and removes their build
folders concurrently.
"""

from pathlib import Path
from typing import Annotated

import typer

from rclean.cli.display import create_failures_table, create_projects_table, print_clean_summary
from rclean.core.config import require_config
from rclean.projects.cleaner import ArtifactCleaner
from rclean.projects.matcher import find_matching_directories
from rclean.projects.rules import ARTIFACT_FOLDER_NAME, CARGO_PROJECT_RULES
from rclean.utils.formatting import console, print_info

app = typer.Typer(
    help="Remove build folders from Cargo projects.",
    invoke_without_command=True,
)


def _select_projects(projects: list[Path]) -> list[Path]:
    """Ask for confirmation for each project and keep the accepted ones."""
    selected: list[Path] = []
    for project in projects:
        if typer.confirm(f"Clean {project / ARTIFACT_FOLDER_NAME}?", default=False):
            selected.append(project)
    return selected


@app.callback(invoke_without_command=True)
def clean_projects(
    ctx: typer.Context,
    target: Annotated[
        Path | None,
        typer.Option(
            "--target",
            "-t",
            help="Directory to start from (default: current directory).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-d",
            help="List projects that would be cleaned without deleting anything.",
        ),
    ] = False,
    interactive: Annotated[
        bool | None,
        typer.Option(
            "--interactive/--no-interactive",
            "-i",
            help="Ask for confirmation before cleaning each project.",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            min=1,
            max=256,
            help="Number of deletion threads (default: from config or CPU count).",
        ),
    ] = None,
) -> None:
    """Remove the target/ folder from every Cargo project under a directory.

    A directory is a Cargo project when it contains a Cargo.toml file
    and both a src/ and a target/ folder. Nested projects are cleaned
    independently. Exits with status 1 if any project could not be
    cleaned.

    Examples:
        rclean clean                   # Clean below the current directory
        rclean clean -t ~/code -d      # Preview what would be cleaned
        rclean -v clean -i             # Confirm each project, show details
    """
    if ctx.invoked_subcommand is not None:
        return

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    config = require_config()

    root = target or Path.cwd()
    projects = find_matching_directories(root, CARGO_PROJECT_RULES)

    if not projects:
        print_info("Nothing to clean.")
        return

    if dry_run:
        if verbose:
            console.print(create_projects_table(projects, ARTIFACT_FOLDER_NAME, dry_run=True))
        print_info(f"Dry-run: {len(projects)} project(s) can be cleaned.")
        return

    if config.interactive if interactive is None else interactive:
        projects = _select_projects(projects)
        if not projects:
            print_info("No projects selected.")
            return

    if verbose:
        print_info(f"Going to clean {len(projects)} project(s)...")

    cleaner = ArtifactCleaner(workers=workers or config.workers)
    outcomes = cleaner.clean(projects)

    failed = [o for o in outcomes if o.failed]
    if verbose and failed:
        console.print(create_failures_table(failed))

    print_clean_summary(outcomes, verbose=verbose)

    if failed:
        raise typer.Exit(code=1)
