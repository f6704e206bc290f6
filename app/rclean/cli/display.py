"""Shared Rich display functions for matches and clean outcomes.

Provides table builders and summary printers used by the scan and
clean commands.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from rclean.projects.models import CleanOutcome, CleanStatus
from rclean.utils.formatting import console, print_success, print_warning


def create_projects_table(projects: list[Path], artifact_name: str, dry_run: bool = False) -> Table:
    """Create a Rich table listing matched projects.

    Args:
        projects: Matched project directories.
        artifact_name: Name of the artifact folder inside each project.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for project display.
    """
    title = "Can Clean (Dry Run)" if dry_run else "Cargo Projects"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Project", overflow="fold")
    table.add_column("Artifact", style="artifact", no_wrap=True)

    for project in projects:
        table.add_row(f"[project]{escape(str(project))}[/project]", artifact_name)

    return table


def create_failures_table(outcomes: list[CleanOutcome]) -> Table:
    """Create a Rich table listing failed removals.

    Args:
        outcomes: Clean outcomes; only failures are shown.

    Returns:
        Rich Table configured for failure display.
    """
    table = Table(
        title="Clean Failures",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Artifact", overflow="fold")
    table.add_column("Error")

    for outcome in outcomes:
        if not outcome.failed:
            continue
        table.add_row(
            "[error]FAIL[/error]",
            escape(str(outcome.artifact)),
            f"[muted]{escape(outcome.error or 'Unknown error')}[/muted]",
        )

    return table


def print_clean_summary(outcomes: list[CleanOutcome], verbose: bool = False) -> None:
    """Print pass/fail tallies for a clean run.

    Args:
        outcomes: Outcomes of every attempted project.
        verbose: Whether failure details were already shown.
    """
    removed = sum(1 for o in outcomes if o.status is CleanStatus.REMOVED)
    already_clean = sum(1 for o in outcomes if o.status is CleanStatus.ALREADY_CLEAN)
    failed = sum(1 for o in outcomes if o.failed)

    if failed == 0:
        message = f"Cleaned {removed} project(s)."
        if already_clean:
            message += f" {already_clean} already clean."
        print_success(message)
        return

    console.print(f"\n[success]{removed} cleaned[/success], [error]{failed} failed[/error]")
    hint = "" if verbose else " Run with --verbose for details."
    print_warning(f"{failed} project(s) could not be cleaned.{hint}")
