"""Project matching and artifact cleanup.

This module provides the rule model for recognising project
directories, the tree matcher that finds them, and the concurrent
cleaner that removes their build artifacts.
"""

from rclean.projects.cleaner import ArtifactCleaner, clean_artifacts, default_worker_count
from rclean.projects.matcher import ProjectMatcher, find_matching_directories
from rclean.projects.models import CleanOutcome, CleanStatus, EntryKind, RequiredEntry, RuleSet
from rclean.projects.rules import ARTIFACT_FOLDER_NAME, CARGO_PROJECT_RULES

__all__ = [
    "ARTIFACT_FOLDER_NAME",
    "CARGO_PROJECT_RULES",
    "ArtifactCleaner",
    "CleanOutcome",
    "CleanStatus",
    "EntryKind",
    "ProjectMatcher",
    "RequiredEntry",
    "RuleSet",
    "clean_artifacts",
    "default_worker_count",
    "find_matching_directories",
]
