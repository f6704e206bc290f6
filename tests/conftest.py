"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

CargoProjectFactory = Callable[[Path], Path]


def make_cargo_project(path: Path) -> Path:
    """Create a minimal Cargo project with a populated target/ folder."""
    (path / "src").mkdir(parents=True)
    (path / "target" / "debug" / "deps").mkdir(parents=True)
    (path / "Cargo.toml").write_text('[package]\nname = "demo"\nversion = "0.1.0"\n')
    (path / "src" / "main.rs").write_text("fn main() {}\n")
    (path / "target" / "debug" / "demo.o").write_bytes(b"\x7fELF")
    (path / "target" / "debug" / "deps" / "libdemo.rlib").write_bytes(b"\x00" * 64)
    return path


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user files never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def cargo_project() -> CargoProjectFactory:
    """Factory creating a Cargo project at the given path."""
    return make_cargo_project


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A tree with two sibling projects, a nested project and unrelated folders.

    Layout::

        ws/
          alpha/            (project)
            crates/inner/   (project, nested)
          beta/             (project)
          notes/notes.txt
          half/             (Cargo.toml + src, but no target)
    """
    root = tmp_path / "ws"
    make_cargo_project(root / "alpha")
    make_cargo_project(root / "alpha" / "crates" / "inner")
    make_cargo_project(root / "beta")
    (root / "notes").mkdir(parents=True)
    (root / "notes" / "notes.txt").write_text("todo\n")
    (root / "half" / "src").mkdir(parents=True)
    (root / "half" / "Cargo.toml").write_text("[package]\n")
    return root
