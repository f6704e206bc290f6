"""User configuration for rclean.

Configuration is stored in ~/.config/rclean/config.toml. Every key is
optional; a missing file means defaults. Command-line flags always take
precedence over configured values.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.markup import escape

from rclean.core.paths import get_config_path


class RcleanConfig(BaseModel):
    """Configuration for the cleanup sweep.

    Attributes:
        workers: Size of the deletion thread pool. None picks a size from
            the CPU count.
        interactive: Ask for confirmation before cleaning each project.
    """

    model_config = ConfigDict(extra="forbid")

    workers: Annotated[
        int | None,
        Field(ge=1, le=256, description="Deletion worker threads (None = automatic)"),
    ] = None
    interactive: Annotated[
        bool,
        Field(description="Confirm each project before cleaning"),
    ] = False


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> RcleanConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated RcleanConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return RcleanConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> RcleanConfig:
    """Load configuration, falling back to defaults if no file exists.

    Raises:
        ConfigError: If the file exists but cannot be read or validated.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return RcleanConfig()


def save_config(config: RcleanConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The RcleanConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Cannot create config directory: {e}") from e

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: RcleanConfig) -> dict[str, object]:
    """Convert RcleanConfig to a dictionary for TOML serialization.

    TOML has no null, so unset values are left out.
    """
    result: dict[str, object] = {"interactive": config.interactive}
    if config.workers is not None:
        result["workers"] = config.workers
    return result


def require_config(path: Path | None = None) -> RcleanConfig:
    """Load configuration or exit with a helpful error message.

    A missing file yields defaults; a broken one stops the command.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer

    from rclean.utils.formatting import print_error, print_info

    config_path = path or get_config_path()
    try:
        return load_config_or_default(config_path)
    except ConfigError as e:
        print_error(f"Failed to load config: {escape(str(e))}")
        print_info(f"Fix or remove {escape(str(config_path))} to continue.")
        raise typer.Exit(code=1) from e
