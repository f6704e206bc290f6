"""Directory matcher for project detection.

Walks a directory tree and yields every directory whose immediate
children satisfy a rule set. The walk is read-only and never aborts
because of a single unreadable subtree.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from rclean.projects.models import RuleSet

logger = logging.getLogger(__name__)


class ProjectMatcher:
    """Finds directories that satisfy every rule of a rule set.

    Every real directory under the root is a candidate, the root
    included. Matching a directory does not stop the walk from
    descending into it, so nested projects are reported on their own.
    Symlinked directories are neither followed nor evaluated.

    Args:
        rules: Rules a directory must satisfy. An empty rule set matches
            every directory.
    """

    def __init__(self, rules: RuleSet) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def matches(self, directory: Path) -> bool:
        """Check a single directory against all rules.

        Stops at the first rule that is not satisfied.
        """
        return all(rule.is_satisfied_by(directory) for rule in self._rules)

    def iter_matches(self, root: Path) -> Iterator[Path]:
        """Walk ``root`` and yield matching directories in discovery order.

        A root that does not exist or is not a directory yields nothing.
        A directory that cannot be listed is still evaluated, since its
        children may be reachable by name, but its subtree is skipped.

        Args:
            root: Directory to start the walk from.

        Yields:
            Paths of matching directories, built by joining onto ``root``.
        """
        if not root.is_dir():
            logger.debug("Scan root is not a directory: %s", root)
            return

        unlisted: list[Path] = []

        def skip_subtree(error: OSError) -> None:
            logger.warning(
                "Skipping unreadable directory %s: %s", error.filename, error.strerror
            )
            if error.filename is not None:
                unlisted.append(Path(os.fsdecode(error.filename)))

        for dirpath, _dirnames, _filenames in os.walk(
            root, onerror=skip_subtree, followlinks=False
        ):
            yield from self._drain(unlisted)
            candidate = Path(dirpath)
            if self.matches(candidate):
                logger.debug("Matched project: %s", candidate)
                yield candidate
        yield from self._drain(unlisted)

    def find(self, root: Path) -> list[Path]:
        """Collect all matching directories under ``root``.

        Returns:
            Unique matching paths in discovery order.
        """
        return list(self.iter_matches(root))

    def _drain(self, unlisted: list[Path]) -> Iterator[Path]:
        while unlisted:
            directory = unlisted.pop(0)
            if directory.is_dir() and self.matches(directory):
                logger.debug("Matched unlistable project: %s", directory)
                yield directory


def find_matching_directories(root: Path, rules: RuleSet) -> list[Path]:
    """Find every directory under ``root`` satisfying all ``rules``.

    Args:
        root: Directory to start the walk from.
        rules: Required entries a directory must contain.

    Returns:
        Matching directories in discovery order.
    """
    return ProjectMatcher(rules).find(root)
