"""Fixed rule set identifying Cargo projects.

A Cargo project is recognised by its manifest, its source folder and
an existing build folder. Only the build folder is ever deleted.
"""

from rclean.projects.models import RequiredEntry, RuleSet

# Build output folder removed from every matched project
ARTIFACT_FOLDER_NAME = "target"

CARGO_PROJECT_RULES: RuleSet = (
    RequiredEntry.file("Cargo.toml"),
    RequiredEntry.folder("src"),
    RequiredEntry.folder(ARTIFACT_FOLDER_NAME),
)
