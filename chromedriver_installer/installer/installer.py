"""
ChromeDriver installation orchestrator.

This module sequences version resolution, the installed-binary check, the
archive cache, download and verification, extraction and permissions. The
workflow is an explicit state machine driven by :meth:`Installer.run`:

    RESOLVING_VERSION -> CHECKING_INSTALLED -> DONE
                                            -> RESOLVING_CACHE
    RESOLVING_CACHE -> USING_CACHED_ARCHIVE -> EXTRACTING
                    -> DOWNLOADING -> VERIFYING -> EXTRACTING
                                               -> FAILED_VERIFICATION
    EXTRACTING -> SETTING_PERMISSIONS -> DONE

Each state has one handler that performs its work and returns the next
state. Failures are raised from the handler of the state they occur in.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

import requests

from chromedriver_installer.config.parser import InstallerConfig, load_config
from chromedriver_installer.core.cache import CacheStore
from chromedriver_installer.core.download import (
    DOWNLOAD_URL_TEMPLATE,
    download_file,
    fetch_headers,
    get_integrity_tag,
    substitute,
)
from chromedriver_installer.core.exceptions import IntegrityMismatchError
from chromedriver_installer.core.filesystem import (
    ensure_directory,
    extract_archive,
    make_executable,
)
from chromedriver_installer.core.platform import (
    PlatformId,
    detect_platform,
    executable_file_name,
    platform_display_name,
    remote_file_name,
)
from chromedriver_installer.core.version import (
    DEFAULT_BASE_URL,
    resolve_version,
    validate_version,
)
from chromedriver_installer.installer.checker import is_up_to_date

logger = logging.getLogger(__name__)


class InstallState(Enum):
    """States of the installation workflow."""

    RESOLVING_VERSION = "resolving_version"
    CHECKING_INSTALLED = "checking_installed"
    RESOLVING_CACHE = "resolving_cache"
    USING_CACHED_ARCHIVE = "using_cached_archive"
    DOWNLOADING = "downloading"
    VERIFYING = "verifying"
    FAILED_VERIFICATION = "failed_verification"
    EXTRACTING = "extracting"
    SETTING_PERMISSIONS = "setting_permissions"
    DONE = "done"


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Names and location of the release archive for one platform and version."""

    platform: PlatformId
    version: str
    remote_file_name: str
    executable_file_name: str
    download_url: str

    @classmethod
    def for_platform(
        cls, platform: PlatformId, version: str, base_url: str = DEFAULT_BASE_URL
    ) -> "ArtifactDescriptor":
        """
        Derive the artifact names for a platform.

        Raises:
            UnsupportedPlatformError: If the platform is unknown
        """
        archive = remote_file_name(platform)
        return cls(
            platform=platform,
            version=version,
            remote_file_name=archive,
            executable_file_name=executable_file_name(platform),
            download_url=substitute(
                DOWNLOAD_URL_TEMPLATE,
                {"base": base_url, "version": version, "file": archive},
            ),
        )


@dataclass
class InstallResult:
    """Result of an installation run."""

    version: str
    """Resolved driver version"""

    platform: PlatformId
    """Platform the driver was installed for"""

    executable_path: Path
    """Path of the installed executable"""

    already_installed: bool = False
    """Whether the installed binary already had the requested version"""

    used_cache: bool = False
    """Whether the archive came from the local cache"""

    states: List[InstallState] = field(default_factory=list)
    """States visited, in order"""


class Installer:
    """
    Installs ChromeDriver into a bin directory.

    Example:
        >>> config = InstallerConfig(version="2.41", bin_dir=Path("bin"))
        >>> result = Installer(config).run()
        >>> print(result.executable_path)
        bin/chromedriver
    """

    def __init__(
        self,
        config: InstallerConfig,
        platform: Optional[PlatformId] = None,
        cache: Optional[CacheStore] = None,
        session: Optional[requests.Session] = None,
        checker: Callable[[Path, str], bool] = is_up_to_date,
    ):
        """
        Initialize installer.

        Args:
            config: Installation settings
            platform: Target platform (detected from the host if None)
            cache: Archive cache (built from config.cache_dir if None)
            session: Optional requests session used for all HTTP calls
            checker: Predicate telling whether an installed binary is current
        """
        self.config = config
        self.platform = platform
        self.cache = cache or CacheStore.from_cache_dir(
            config.cache_dir, enabled=config.cache_enabled
        )
        self.session = session
        self.checker = checker

        self._handlers = {
            InstallState.RESOLVING_VERSION: self._resolve_version,
            InstallState.CHECKING_INSTALLED: self._check_installed,
            InstallState.RESOLVING_CACHE: self._resolve_cache,
            InstallState.USING_CACHED_ARCHIVE: self._use_cached_archive,
            InstallState.DOWNLOADING: self._download,
            InstallState.VERIFYING: self._verify,
            InstallState.FAILED_VERIFICATION: self._fail_verification,
            InstallState.EXTRACTING: self._extract,
            InstallState.SETTING_PERMISSIONS: self._set_permissions,
        }
        self._reset()

    def _reset(self):
        self.states: List[InstallState] = []
        self.version: Optional[str] = None
        self.artifact: Optional[ArtifactDescriptor] = None
        self.executable_path: Optional[Path] = None
        self.archive_path: Optional[Path] = None
        self.remote_tag: Optional[str] = None
        self.local_tag: Optional[str] = None
        self.already_installed = False
        self.used_cache = False

    def run(self) -> InstallResult:
        """
        Run the installation workflow to completion.

        Returns:
            InstallResult describing what was done

        Raises:
            InvalidVersionError: If the version cannot be parsed
            UnsupportedPlatformError: If the platform is unknown
            DownloadError: If a network request fails
            MissingIntegrityHeaderError: If the remote sends no ETag
            IntegrityMismatchError: If the download does not match its ETag
            ArchiveError: If extraction fails
            FilesystemError: If a directory cannot be created
        """
        self._reset()
        state = InstallState.RESOLVING_VERSION

        while True:
            self.states.append(state)
            if state is InstallState.DONE:
                break
            logger.debug(f"Installer state: {state.value}")
            state = self._handlers[state]()

        return InstallResult(
            version=self.version,
            platform=self.artifact.platform,
            executable_path=self.executable_path,
            already_installed=self.already_installed,
            used_cache=self.used_cache,
            states=list(self.states),
        )

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _resolve_version(self) -> InstallState:
        version = resolve_version(
            self.config.version, base_url=self.config.base_url, session=self.session
        )
        validate_version(version)

        logger.info(f"Using version {version}")
        self.version = version
        return InstallState.CHECKING_INSTALLED

    def _check_installed(self) -> InstallState:
        platform = self.platform or detect_platform()
        self.artifact = ArtifactDescriptor.for_platform(
            platform, self.version, self.config.base_url
        )
        self.executable_path = Path(self.config.bin_dir) / self.artifact.executable_file_name

        if self.checker(self.executable_path, self.version):
            logger.info(
                f"The right version {self.version} of ChromeDriver is already installed"
            )
            self.already_installed = True
            return InstallState.DONE

        return InstallState.RESOLVING_CACHE

    def _resolve_cache(self) -> InstallState:
        self.archive_path = self.cache.path(self.version, self.artifact.remote_file_name)
        ensure_directory(self.config.bin_dir)

        if self.cache.enabled and self.cache.exists(self.archive_path):
            return InstallState.USING_CACHED_ARCHIVE
        return InstallState.DOWNLOADING

    def _use_cached_archive(self) -> InstallState:
        # Cached archives were verified when downloaded and are not re-checked
        logger.info(f"Using cached version of {self.artifact.remote_file_name}")
        self.used_cache = True
        return InstallState.EXTRACTING

    def _download(self) -> InstallState:
        url = self.artifact.download_url
        self.remote_tag = get_integrity_tag(fetch_headers(url, session=self.session))

        logger.info(
            f"Downloading ChromeDriver version {self.version} for "
            f"{platform_display_name(self.artifact.platform)} ({self.remote_tag})"
        )
        self.local_tag = download_file(url, self.archive_path, session=self.session)
        return InstallState.VERIFYING

    def _verify(self) -> InstallState:
        if self.local_tag != self.remote_tag:
            return InstallState.FAILED_VERIFICATION
        return InstallState.EXTRACTING

    def _fail_verification(self) -> InstallState:
        self.cache.remove(self.archive_path)
        raise IntegrityMismatchError(self.local_tag, self.remote_tag)

    def _extract(self) -> InstallState:
        logger.debug(f"Extracting {self.archive_path} to {self.config.bin_dir}")
        extract_archive(self.archive_path, self.config.bin_dir)
        return InstallState.SETTING_PERMISSIONS

    def _set_permissions(self) -> InstallState:
        if self.artifact.platform is not PlatformId.WIN32:
            make_executable(self.executable_path)
        return InstallState.DONE


def install_driver(
    config: Optional[InstallerConfig] = None,
    platform: Optional[PlatformId] = None,
    session: Optional[requests.Session] = None,
) -> InstallResult:
    """
    Install ChromeDriver (convenience function).

    Args:
        config: Installation settings (loaded from the current project if None)
        platform: Target platform (detected if None)
        session: Optional requests session

    Returns:
        InstallResult

    Example:
        >>> from chromedriver_installer.installer import install_driver
        >>> result = install_driver(InstallerConfig(version="2.41"))
    """
    return Installer(config or load_config(), platform=platform, session=session).run()


__all__ = [
    "InstallState",
    "ArtifactDescriptor",
    "InstallResult",
    "Installer",
    "install_driver",
]
