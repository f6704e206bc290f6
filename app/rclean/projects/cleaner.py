"""Concurrent artifact folder removal.

Removes the build artifact folder from each matched project on a
thread pool. Every project is attempted; a failure is recorded in its
outcome and never stops the rest of the batch.
"""

import logging
import os
import shutil
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from rclean.projects.models import CleanOutcome, CleanStatus
from rclean.projects.rules import ARTIFACT_FOLDER_NAME

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Thread pool size used when none is configured."""
    return min(32, (os.cpu_count() or 8) * 2)


class ArtifactCleaner:
    """Deletes the artifact folder of many projects in parallel.

    Artifact folders of distinct projects never overlap, so the tasks
    share no mutable state. An artifact folder that is already gone
    counts as clean rather than as a failure, which makes a second run
    over the same projects a no-op.

    Args:
        artifact_name: Name of the folder to remove inside each project.
        workers: Thread pool size. Defaults to default_worker_count().
    """

    def __init__(
        self,
        artifact_name: str = ARTIFACT_FOLDER_NAME,
        workers: int | None = None,
    ) -> None:
        if workers is not None and workers < 1:
            msg = f"Worker count must be at least 1, got {workers}"
            raise ValueError(msg)
        self._artifact_name = artifact_name
        self._workers = workers or default_worker_count()

    @property
    def workers(self) -> int:
        return self._workers

    def clean(self, directories: Iterable[Path]) -> list[CleanOutcome]:
        """Remove the artifact folder from every project directory.

        Args:
            directories: Project directories to clean.

        Returns:
            One CleanOutcome per input directory, in input order.
        """
        projects = list(directories)
        if not projects:
            return []

        # Projects that are, or live inside, another project's artifact folder
        # would be deleted twice at once; they run after the parallel phase.
        artifacts = {project / self._artifact_name for project in projects}
        nested = {p for p in projects if any(d in artifacts for d in (p, *p.parents))}
        independent = [p for p in projects if p not in nested]

        pool_size = min(self._workers, len(independent))
        logger.debug("Cleaning %d project(s) with %d worker(s)", len(independent), pool_size)
        with ThreadPoolExecutor(max_workers=pool_size) as pool:
            outcomes = dict(zip(independent, pool.map(self._clean_single, independent)))

        for project in projects:
            if project in nested:
                outcomes[project] = self._clean_single(project)

        return [outcomes[project] for project in projects]

    def _clean_single(self, project: Path) -> CleanOutcome:
        """Remove the artifact folder of a single project.

        Symlinked artifact folders are refused by shutil.rmtree, so a
        link never leads the cleaner outside the project.
        """
        artifact = project / self._artifact_name

        if not artifact.exists() and not artifact.is_symlink():
            logger.debug("Already clean: %s", project)
            return CleanOutcome(
                project=project,
                artifact=artifact,
                status=CleanStatus.ALREADY_CLEAN,
            )

        try:
            shutil.rmtree(artifact)
        except OSError as e:
            if isinstance(e, FileNotFoundError) and e.filename and Path(e.filename) == artifact:
                # Gone between the existence check and the removal.
                logger.debug("Already clean: %s", project)
                return CleanOutcome(
                    project=project,
                    artifact=artifact,
                    status=CleanStatus.ALREADY_CLEAN,
                )
            logger.warning("Failed to remove %s: %s", artifact, e)
            return CleanOutcome(
                project=project,
                artifact=artifact,
                status=CleanStatus.FAILED,
                error=str(e),
                error_type=type(e).__name__,
            )

        logger.debug("Removed %s", artifact)
        return CleanOutcome(project=project, artifact=artifact, status=CleanStatus.REMOVED)


def clean_artifacts(
    directories: Iterable[Path],
    artifact_name: str = ARTIFACT_FOLDER_NAME,
    workers: int | None = None,
) -> list[CleanOutcome]:
    """Clean every project and return only the failures.

    Successes are implied by their absence from the result.

    Args:
        directories: Project directories to clean.
        artifact_name: Name of the folder to remove inside each project.
        workers: Thread pool size. Defaults to default_worker_count().

    Returns:
        Failed outcomes, in input order.
    """
    cleaner = ArtifactCleaner(artifact_name=artifact_name, workers=workers)
    return [outcome for outcome in cleaner.clean(directories) if outcome.failed]
