"""fskit configuration and settings.

Configuration is stored in ~/.config/fskit/config.toml and controls
the defaults used by the Filesystem facade and the CLI.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fskit.core.paths import get_config_path
from fskit.exceptions import ConfigError, ConfigParseError

logger = logging.getLogger(__name__)


class FskitConfig(BaseModel):
    """Configuration for fskit.

    Attributes:
        default_properties: Property returned by listings when none is requested.
        directory_mode: Permission bits for directories created by make_directory.
        ignore_dot_files: Skip entries whose name starts with a dot while searching.
        follow_links: Descend into symlinked directories while searching.
    """

    model_config = ConfigDict(extra="forbid")

    default_properties: Annotated[
        str | list[str],
        Field(description="Property (or properties) returned by listings"),
    ] = "pathname"
    directory_mode: Annotated[
        int,
        Field(ge=0, le=0o7777, description="Mode for created directories"),
    ] = 0o755
    ignore_dot_files: Annotated[
        bool,
        Field(description="Skip dot files while searching"),
    ] = False
    follow_links: Annotated[
        bool,
        Field(description="Descend into symlinked directories"),
    ] = False


def load_config(path: Path | None = None) -> FskitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FskitConfig object.

    Raises:
        ConfigError: If the file cannot be read or the content doesn't match the schema.
        ConfigParseError: If the TOML syntax is invalid.
    """
    config_path = path or get_config_path()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config not found: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FskitConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def get_config(path: Path | None = None) -> FskitConfig:
    """Load configuration, falling back to defaults if no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        The loaded configuration, or defaults when the file is missing.

    Raises:
        ConfigError: If an existing file is invalid.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return FskitConfig()
    return load_config(config_path)


def save_config(config: FskitConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The FskitConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
