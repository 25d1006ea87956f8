"""Configuration for chromedriver-installer."""

from .parser import (
    InstallerConfig,
    load_package_metadata,
    apply_environment,
    load_config,
)

__all__ = [
    "InstallerConfig",
    "load_package_metadata",
    "apply_environment",
    "load_config",
]
