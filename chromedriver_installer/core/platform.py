"""
Platform detection for chromedriver-installer.

Maps the running host onto one of the platforms ChromeDriver is published
for, and derives the platform-specific archive and executable names.

Usage:
    from chromedriver_installer.core.platform import (
        detect_platform,
        remote_file_name,
    )

    platform_id = detect_platform()
    print(remote_file_name(platform_id))  # chromedriver_linux64.zip
"""

import functools
import logging
import platform
import struct
from enum import Enum

from chromedriver_installer.core.exceptions import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class PlatformId(Enum):
    """Platforms ChromeDriver archives are published for."""

    LINUX32 = "linux32"
    LINUX64 = "linux64"
    MAC64 = "mac64"
    WIN32 = "win32"
    UNKNOWN = "unknown"


_REMOTE_FILE_NAMES = {
    PlatformId.LINUX32: "chromedriver_linux32.zip",
    PlatformId.LINUX64: "chromedriver_linux64.zip",
    PlatformId.MAC64: "chromedriver_mac64.zip",
    PlatformId.WIN32: "chromedriver_win32.zip",
}

_EXECUTABLE_FILE_NAMES = {
    PlatformId.LINUX32: "chromedriver",
    PlatformId.LINUX64: "chromedriver",
    PlatformId.MAC64: "chromedriver",
    PlatformId.WIN32: "chromedriver.exe",
}

_DISPLAY_NAMES = {
    PlatformId.LINUX32: "Linux 32Bits",
    PlatformId.LINUX64: "Linux 64Bits",
    PlatformId.MAC64: "Mac OS X",
    PlatformId.WIN32: "Windows",
}


def resolve_platform(os_name: str, pointer_width: int) -> PlatformId:
    """
    Map an OS name and pointer width to a platform identifier.

    Matching is a case-insensitive prefix match on the OS name. An
    unrecognized OS is not an error here; it yields ``PlatformId.UNKNOWN``
    and a warning, and fails later when a platform-specific name is needed.

    Args:
        os_name: OS name as reported by the host (e.g. 'Linux', 'Darwin')
        pointer_width: Size of a pointer in bytes (4 or 8)

    Returns:
        Resolved PlatformId

    Example:
        >>> resolve_platform("Linux", 8)
        <PlatformId.LINUX64: 'linux64'>
    """
    name = (os_name or "").lower()

    if name.startswith("win"):
        return PlatformId.WIN32
    elif name.startswith("darwin"):
        return PlatformId.MAC64
    elif name.startswith("linux"):
        if pointer_width == 8:
            return PlatformId.LINUX64
        return PlatformId.LINUX32

    logger.warning("Could not guess your platform, download chromedriver manually.")
    return PlatformId.UNKNOWN


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformId:
    """
    Detect the platform of the running host.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformId of the current host
    """
    return resolve_platform(platform.system(), struct.calcsize("P"))


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


def _lookup(table: dict, platform_id: PlatformId) -> str:
    try:
        return table[platform_id]
    except KeyError:
        raise UnsupportedPlatformError("Platform is not set.") from None


def remote_file_name(platform_id: PlatformId) -> str:
    """
    Get the name of the release archive for a platform.

    Raises:
        UnsupportedPlatformError: If the platform is unknown
    """
    return _lookup(_REMOTE_FILE_NAMES, platform_id)


def executable_file_name(platform_id: PlatformId) -> str:
    """
    Get the name of the driver executable inside the archive.

    Raises:
        UnsupportedPlatformError: If the platform is unknown
    """
    return _lookup(_EXECUTABLE_FILE_NAMES, platform_id)


def platform_display_name(platform_id: PlatformId) -> str:
    """Human readable platform name, used in progress messages."""
    return _lookup(_DISPLAY_NAMES, platform_id)


__all__ = [
    "PlatformId",
    "resolve_platform",
    "detect_platform",
    "clear_platform_cache",
    "remote_file_name",
    "executable_file_name",
    "platform_display_name",
]
