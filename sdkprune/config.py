"""
Configuration for sdkprune.

Settings are layered: built-in defaults, then an optional YAML file, then
command-line flags. The YAML file looks like:

    min_minor: 21
    bootstrap_go: /usr/local/go/bin/go
    parallel: 4
    sdk_root: ~/sdk
    bin_dir: ~/go/bin
    releases_url: https://go.dev/dl/?mode=json&include=all
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core.exceptions import ConfigurationError
from .releases.reducer import DEFAULT_MIN_MINOR
from .releases.source import RELEASES_URL
from .sdk.bootstrap import DEFAULT_BOOTSTRAP_GO
from .sdk.installer import DEFAULT_PARALLEL

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SDKPRUNE_CONFIG"


def default_sdk_root() -> Path:
    """Return the directory golang.org/dl launchers download SDKs into."""
    return Path.home() / "sdk"


def default_config_path() -> Path:
    """Return the config file used when none is given explicitly."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "sdkprune.yaml"


@dataclass
class SyncConfig:
    """Tunables for one sync run."""

    min_minor: int = DEFAULT_MIN_MINOR
    """Earliest minor version to keep"""

    bootstrap_go: Path = DEFAULT_BOOTSTRAP_GO
    """Path to the go used for installing versions"""

    parallel: int = DEFAULT_PARALLEL
    """Number of versions installed at once"""

    sdk_root: Path = field(default_factory=default_sdk_root)
    """Directory holding downloaded SDKs"""

    bin_dir: Optional[Path] = None
    """Launcher directory; resolved from the bootstrap go when None"""

    releases_url: str = RELEASES_URL
    """Go download index"""

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ConfigurationError: If a value is out of range
        """
        if isinstance(self.min_minor, bool) or not isinstance(self.min_minor, int):
            raise ConfigurationError(f"min_minor must be an integer: {self.min_minor!r}")
        if self.min_minor < 0:
            raise ConfigurationError(f"min_minor must not be negative: {self.min_minor}")
        if isinstance(self.parallel, bool) or not isinstance(self.parallel, int):
            raise ConfigurationError(f"parallel must be an integer: {self.parallel!r}")
        if self.parallel < 1:
            raise ConfigurationError(f"parallel must be at least 1: {self.parallel}")
        if not self.releases_url:
            raise ConfigurationError("releases_url must not be empty")


_PATH_FIELDS = {"bootstrap_go", "sdk_root", "bin_dir"}


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, or is not a YAML mapping
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Expected a mapping in {config_file}")
    return config


def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(SyncConfig)}
    result = {}
    for key, value in values.items():
        if key not in known:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue
        if value is None:
            continue
        if key in _PATH_FIELDS:
            value = Path(str(value)).expanduser()
        result[key] = value
    return result


def build_config(
    config_file: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None
) -> SyncConfig:
    """
    Build the effective configuration.

    Args:
        config_file: Explicit config file (must exist); default location otherwise
        overrides: Values from the command line; None values are ignored

    Returns:
        Validated SyncConfig

    Raises:
        ConfigurationError: If the file or a value is invalid
    """
    if config_file is not None:
        file_values = load_yaml_config(Path(config_file), required=True)
    else:
        file_values = load_yaml_config(default_config_path(), required=False)

    config = replace(SyncConfig(), **_coerce(file_values))
    config = replace(config, **_coerce(overrides or {}))
    config.validate()
    return config
