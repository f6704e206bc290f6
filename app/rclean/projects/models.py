"""Project domain models for matching and cleaning.

This module defines the rule model used to recognise a project
directory from its immediate children, and the per-project outcome
produced by the artifact cleaner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Type a required entry must have.

    Attributes:
        FILE: Regular file (symlinks to files are followed).
        FOLDER: Directory (symlinks to directories are followed).
    """

    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True, slots=True)
class RequiredEntry:
    """A named child that a project directory must contain.

    The name is joined against the candidate directory as-is, so it may
    be a single component or a simple relative path. There is no glob
    or wildcard handling.

    Attributes:
        kind: Whether the child must be a file or a folder.
        name: Relative path of the child.
    """

    kind: EntryKind
    name: str

    def __post_init__(self) -> None:
        """Validate the rule after initialization."""
        if not self.name:
            msg = "Entry name cannot be empty"
            raise ValueError(msg)
        if Path(self.name).is_absolute():
            msg = f"Entry name must be relative, got {self.name!r}"
            raise ValueError(msg)

    @classmethod
    def file(cls, name: str) -> RequiredEntry:
        return cls(EntryKind.FILE, name)

    @classmethod
    def folder(cls, name: str) -> RequiredEntry:
        return cls(EntryKind.FOLDER, name)

    def is_satisfied_by(self, directory: Path) -> bool:
        """Check whether ``directory`` contains this entry with the right type.

        A child that cannot be stat'ed counts as missing.

        Args:
            directory: Candidate directory.

        Returns:
            True if the joined path exists and has the required type.
        """
        candidate = directory / self.name
        try:
            if self.kind is EntryKind.FOLDER:
                return candidate.is_dir()
            return candidate.is_file()
        except OSError as e:
            logger.debug("Cannot stat %s: %s", candidate, e)
            return False


# Ordered, immutable collection of rules combined with logical AND.
RuleSet = tuple[RequiredEntry, ...]


class CleanStatus(str, Enum):
    """Result of cleaning one project.

    Attributes:
        REMOVED: The artifact folder was deleted.
        ALREADY_CLEAN: The artifact folder did not exist.
        FAILED: Deletion raised an error.
    """

    REMOVED = "removed"
    ALREADY_CLEAN = "already_clean"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CleanOutcome:
    """Result of removing the artifact folder from a single project.

    Attributes:
        project: Project directory that was processed.
        artifact: Artifact folder that was targeted.
        status: What happened.
        error: Error message if the removal failed, None otherwise.
        error_type: Exception class name if the removal failed.
    """

    project: Path
    artifact: Path
    status: CleanStatus
    error: str | None = None
    error_type: str | None = None

    @property
    def success(self) -> bool:
        return self.status is not CleanStatus.FAILED

    @property
    def failed(self) -> bool:
        return self.status is CleanStatus.FAILED
