"""
ChromeDriver installation.

This package provides the installation workflow, the installed-binary check
and the host lifecycle hooks.
"""

from .checker import is_up_to_date
from .installer import (
    InstallState,
    ArtifactDescriptor,
    InstallResult,
    Installer,
    install_driver,
)
from .hooks import ScriptEvents, Event, ChromeDriverPlugin, dispatch

__all__ = [
    "is_up_to_date",
    "InstallState",
    "ArtifactDescriptor",
    "InstallResult",
    "Installer",
    "install_driver",
    "ScriptEvents",
    "Event",
    "ChromeDriverPlugin",
    "dispatch",
]
