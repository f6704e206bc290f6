"""Unit tests for RcleanConfig and config file I/O."""

import io
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from pydantic import ValidationError
from rclean.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    RcleanConfig,
    load_config,
    load_config_or_default,
    require_config,
    save_config,
)
from rclean.core.paths import get_config_path
from rclean.core.theme import get_theme
from rich.console import Console


class TestRcleanConfig:
    """Tests for the RcleanConfig Pydantic model."""

    def test_default_values(self) -> None:
        """Defaults are automatic workers and no prompts."""
        config = RcleanConfig()

        assert config.workers is None
        assert config.interactive is False

    def test_custom_values(self) -> None:
        """Explicit values are accepted."""
        config = RcleanConfig(workers=8, interactive=True)

        assert config.workers == 8
        assert config.interactive is True

    def test_workers_minimum(self) -> None:
        """At least one worker is required."""
        with pytest.raises(ValidationError):
            RcleanConfig(workers=0)

    def test_workers_maximum(self) -> None:
        """Worker count is capped."""
        with pytest.raises(ValidationError):
            RcleanConfig(workers=1000)

    def test_unknown_key_rejected(self) -> None:
        """Unknown keys are rejected instead of silently ignored."""
        with pytest.raises(ValidationError):
            RcleanConfig(rules=["Cargo.toml"])  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config and load_config_or_default."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "config.toml")

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """load_config_or_default falls back to defaults."""
        assert load_config_or_default(tmp_path / "config.toml") == RcleanConfig()

    def test_load_valid_file(self, tmp_path: Path) -> None:
        """Values from the file are loaded."""
        path = tmp_path / "config.toml"
        path.write_text("workers = 4\ninteractive = true\n")

        config = load_config(path)

        assert config.workers == 4
        assert config.interactive is True

    def test_partial_file(self, tmp_path: Path) -> None:
        """Keys left out keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text("interactive = true\n")

        assert load_config(path).workers is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("workers = [\n")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("workers = -1\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path_uses_xdg(self, isolated_config_home: Path) -> None:
        """Without an explicit path the XDG config location is used."""
        path = isolated_config_home / "rclean" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text("workers = 2\n")

        assert get_config_path() == path
        assert load_config().workers == 2

    def test_or_default_propagates_errors(self, tmp_path: Path) -> None:
        """An existing but invalid file is not masked by defaults."""
        path = tmp_path / "config.toml"
        path.write_text("nope = 1\n")

        with pytest.raises(ConfigError):
            load_config_or_default(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = RcleanConfig(workers=6, interactive=True)

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_unset_workers_omitted(self, tmp_path: Path) -> None:
        """TOML has no null, so unset workers are left out of the file."""
        path = tmp_path / "config.toml"

        save_config(RcleanConfig(), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data == {"interactive": False}

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves only the final file behind."""
        save_config(RcleanConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]


class TestRequireConfig:
    """Tests for require_config."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """No file means defaults, not an exit."""
        assert require_config(tmp_path / "config.toml") == RcleanConfig()

    def test_exits_on_broken_file(self, tmp_path: Path) -> None:
        """A broken file stops the command with exit code 1."""
        path = tmp_path / "config.toml"
        path.write_text("workers = \n")

        with pytest.raises(typer.Exit) as exc_info:
            require_config(path)

        assert exc_info.value.exit_code == 1

    def test_markup_in_path_is_shown_literally(self, tmp_path: Path) -> None:
        """Brackets in the config path are not swallowed as Rich markup."""
        path = tmp_path / "[red]cfg" / "config.toml"
        path.parent.mkdir()
        path.write_text("workers = \n")
        buf = io.StringIO()

        with (
            patch(
                "rclean.utils.formatting.console",
                Console(theme=get_theme(), file=buf, color_system=None, width=500),
            ),
            pytest.raises(typer.Exit),
        ):
            require_config(path)

        assert f"Fix or remove {path} to continue." in buf.getvalue()
