"""Configuration loading for chromedriver-installer.

Configuration comes from the host project's package metadata (a YAML or JSON
document such as ``composer.json``), the environment and explicit overrides,
in increasing order of precedence:

    defaults < package metadata < environment < overrides

Recognized package metadata keys::

    config:
      bin-dir: vendor/bin
      cache-dir: /tmp/cache
    extra:
      lbaey/chromedriver:
        chromedriver-version: "2.41"   # wins over the legacy key
        version: "2.40"                # legacy
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from chromedriver_installer.core.directory import get_default_bin_dir, get_default_cache_dir
from chromedriver_installer.core.exceptions import ConfigError
from chromedriver_installer.core.version import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

EXTRA_KEY = "lbaey/chromedriver"
DEFAULT_METADATA_FILE = "composer.json"

ENV_VERSION = "CHROMEDRIVER_VERSION"
ENV_BIN_DIR = "CHROMEDRIVER_BIN_DIR"
ENV_CACHE_DIR = "CHROMEDRIVER_CACHE_DIR"
ENV_NO_CACHE = "CHROMEDRIVER_NO_CACHE"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class InstallerConfig:
    """Settings for one installation run."""

    version: Optional[str] = None  # None resolves the latest release
    bin_dir: Path = field(default_factory=get_default_bin_dir)
    cache_dir: Path = field(default_factory=get_default_cache_dir)
    cache_enabled: bool = True
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_package(
        cls, data: Mapping[str, Any], project_root: Optional[Path] = None
    ) -> "InstallerConfig":
        """
        Build configuration from a package metadata mapping.

        Args:
            data: Parsed package metadata
            project_root: Base for relative directories (defaults to cwd)

        Returns:
            InstallerConfig

        Raises:
            ConfigError: If a section has the wrong type
        """
        project_root = Path(project_root or Path.cwd())
        config = cls(bin_dir=get_default_bin_dir(project_root))

        extra = _section(data, "extra")
        options = _section(extra, EXTRA_KEY)
        settings = _section(data, "config")

        config.version = _version_from_options(options)

        if settings.get("bin-dir"):
            config.bin_dir = _resolve(settings["bin-dir"], project_root)
        if settings.get("cache-dir"):
            config.cache_dir = _resolve(settings["cache-dir"], project_root)
        if "cache" in options:
            config.cache_enabled = bool(options["cache"])
        if options.get("base-url"):
            config.base_url = str(options["base-url"]).rstrip("/")

        return config


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _version_from_options(options: Mapping[str, Any]) -> Optional[str]:
    # 'chromedriver-version' overrides the legacy 'version' key
    version = options.get("chromedriver-version") or options.get("version")
    if version is None or version == "":
        return None
    return str(version)


def _resolve(path: Any, project_root: Path) -> Path:
    path = Path(os.path.expanduser(str(path)))
    if not path.is_absolute():
        path = project_root / path
    return path


def load_package_metadata(path: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load a package metadata document (YAML, or JSON as a YAML subset).

    Args:
        path: Path to the document
        required: If True, raise error if file doesn't exist

    Returns:
        Metadata dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigError: If the file is required and missing, is not valid
            YAML/JSON, or is not a mapping
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug(f"Package metadata not found (optional): {path}")
        return {}

    logger.debug(f"Loading package metadata from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Package metadata in {path} must be a mapping")

    return data


def apply_environment(
    config: InstallerConfig, environ: Optional[Mapping[str, str]] = None
) -> InstallerConfig:
    """Apply CHROMEDRIVER_* environment variables on top of a configuration."""
    environ = os.environ if environ is None else environ

    if environ.get(ENV_VERSION):
        config.version = environ[ENV_VERSION]
    if environ.get(ENV_BIN_DIR):
        config.bin_dir = Path(environ[ENV_BIN_DIR])
    if environ.get(ENV_CACHE_DIR):
        config.cache_dir = Path(environ[ENV_CACHE_DIR])
    if environ.get(ENV_NO_CACHE, "").lower() in _TRUE_VALUES:
        config.cache_enabled = False

    return config


def load_config(
    config_path: Optional[Path] = None,
    project_root: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InstallerConfig:
    """
    Load the layered installer configuration.

    Args:
        config_path: Package metadata file; defaults to
            <project_root>/composer.json and is optional in that case
        project_root: Project root directory (defaults to cwd)
        overrides: Explicit values keyed by InstallerConfig field name;
            None values are ignored
        environ: Environment mapping (defaults to os.environ)

    Returns:
        InstallerConfig

    Raises:
        ConfigError: If the metadata file is invalid or an override is unknown
    """
    project_root = Path(project_root or Path.cwd())

    if config_path is None:
        data = load_package_metadata(project_root / DEFAULT_METADATA_FILE)
    else:
        data = load_package_metadata(Path(config_path), required=True)

    config = InstallerConfig.from_package(data, project_root)
    apply_environment(config, environ)

    for key, value in (overrides or {}).items():
        if not hasattr(config, key):
            raise ConfigError(f"Unknown configuration option: {key}")
        if value is not None:
            setattr(config, key, value)

    return config


__all__ = [
    "InstallerConfig",
    "load_package_metadata",
    "apply_environment",
    "load_config",
]
