"""
Core functionality for chromedriver-installer.

This package contains the foundational modules the installer depends on.
"""

from .platform import (
    PlatformId,
    resolve_platform,
    detect_platform,
    clear_platform_cache,
    remote_file_name,
    executable_file_name,
    platform_display_name,
)

from .version import (
    DEFAULT_BASE_URL,
    resolve_version,
    validate_version,
    parse_constraints,
)

from .download import (
    substitute,
    fetch_headers,
    get_integrity_tag,
    download_file,
)

from .cache import CacheStore

from .exceptions import (
    ChromeDriverInstallerError,
    InvalidVersionError,
    UnsupportedPlatformError,
    DownloadError,
    MissingIntegrityHeaderError,
    IntegrityMismatchError,
    FilesystemError,
    ArchiveError,
    InsecureArchiveError,
    ConfigError,
)

__all__ = [
    "PlatformId",
    "resolve_platform",
    "detect_platform",
    "clear_platform_cache",
    "remote_file_name",
    "executable_file_name",
    "platform_display_name",
    "DEFAULT_BASE_URL",
    "resolve_version",
    "validate_version",
    "parse_constraints",
    "substitute",
    "fetch_headers",
    "get_integrity_tag",
    "download_file",
    "CacheStore",
    "ChromeDriverInstallerError",
    "InvalidVersionError",
    "UnsupportedPlatformError",
    "DownloadError",
    "MissingIntegrityHeaderError",
    "IntegrityMismatchError",
    "FilesystemError",
    "ArchiveError",
    "InsecureArchiveError",
    "ConfigError",
]
