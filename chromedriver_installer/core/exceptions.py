"""
Centralized exception hierarchy for chromedriver-installer.

Every failure of an installation run is reported with one of these
exceptions. None of them is retried: a later run is the retry mechanism.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ChromeDriverInstallerError(Exception):
    """Base exception for all chromedriver-installer errors."""

    pass


# ============================================================================
# Version and Platform Exceptions
# ============================================================================


class InvalidVersionError(ChromeDriverInstallerError):
    """Version string cannot be parsed as a version constraint."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f'Incorrect version string: "{version}"')


class UnsupportedPlatformError(ChromeDriverInstallerError):
    """Host platform is unknown when a platform-specific name is required."""

    pass


# ============================================================================
# Remote Artifact Exceptions
# ============================================================================


class DownloadError(ChromeDriverInstallerError):
    """Network request for headers or archive bytes failed."""

    pass


class MissingIntegrityHeaderError(ChromeDriverInstallerError):
    """Remote response carries no entity tag to verify the archive against."""

    pass


class IntegrityMismatchError(ChromeDriverInstallerError):
    """Checksum of the downloaded archive differs from the remote tag."""

    def __init__(self, local_tag: str, remote_tag: str):
        self.local_tag = local_tag
        self.remote_tag = remote_tag
        super().__init__(f"File validation failed: {local_tag} != {remote_tag}")


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class FilesystemError(ChromeDriverInstallerError):
    """Base exception for filesystem operations."""

    pass


class ArchiveError(FilesystemError):
    """Failed to open or extract an archive."""

    pass


class InsecureArchiveError(ArchiveError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(ChromeDriverInstallerError):
    """Configuration parsing or validation error."""

    pass
