"""
Local cache of downloaded ChromeDriver archives.

Archives are stored per version under the cache root:

    {root}/{version}/{archive}

An entry is created on the first verified download and reused afterwards.
Entries are never modified in place; a failed verification deletes the file
so the next run downloads it again.
"""

import logging
from pathlib import Path
from typing import Union

from chromedriver_installer.core.directory import get_cache_root, verify_directory_writable
from chromedriver_installer.core.exceptions import FilesystemError
from chromedriver_installer.core.filesystem import ensure_directory

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Version-keyed store for downloaded archives.

    Example:
        >>> cache = CacheStore.from_cache_dir(Path("~/.cache/chromedriver-installer"))
        >>> archive = cache.path("2.41", "chromedriver_linux64.zip")
        >>> cache.exists(archive)
        False
    """

    def __init__(self, root: Union[str, Path], enabled: bool = True):
        """
        Initialize cache store.

        Args:
            root: Cache root directory (version directories live below it)
            enabled: Global cache switch
        """
        self.root = Path(root)
        self._switch = enabled
        self._enabled = None

    @classmethod
    def from_cache_dir(cls, cache_dir: Union[str, Path], enabled: bool = True) -> "CacheStore":
        """Create a store rooted at the archive cache inside ``cache_dir``."""
        return cls(get_cache_root(Path(cache_dir)), enabled=enabled)

    @property
    def enabled(self) -> bool:
        """
        Whether cached archives may be reused.

        False when the switch is off, or when the root is not a usable,
        writable directory.
        """
        if self._enabled is None:
            self._enabled = self._switch and self._is_usable()
            if self._switch and not self._enabled:
                logger.warning(f"Cache directory {self.root} is not writable, cache disabled")
        return self._enabled

    def _is_usable(self) -> bool:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return verify_directory_writable(self.root)

    def version_dir(self, version: str) -> Path:
        """Directory holding the archives of one version."""
        return self.root / version

    def path(self, version: str, filename: str) -> Path:
        """
        Get the cache path of an archive, creating the version directory.

        Args:
            version: Driver version
            filename: Archive file name

        Returns:
            Path of the archive inside the cache

        Raises:
            FilesystemError: If the version directory cannot be created
        """
        return ensure_directory(self.version_dir(version)) / filename

    def exists(self, path: Union[str, Path]) -> bool:
        """Check whether a cached file exists."""
        return Path(path).is_file()

    def remove(self, path: Union[str, Path]) -> None:
        """
        Delete a cached file. A missing file is not an error.

        Raises:
            FilesystemError: If the file exists but cannot be deleted
        """
        try:
            Path(path).unlink()
            logger.debug(f"Removed cached file {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            raise FilesystemError(f"Failed to remove cached file '{path}': {e}") from e


__all__ = ["CacheStore"]
