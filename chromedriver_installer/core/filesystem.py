"""
File system utilities for chromedriver-installer.

This module provides:
- Safe ZIP extraction (with directory traversal protection)
- Directory creation that reports failures as FilesystemError
- Executable permission handling
"""

import logging
import os
import zipfile
from pathlib import Path
from typing import Union

from chromedriver_installer.core.exceptions import (
    ArchiveError,
    FilesystemError,
    InsecureArchiveError,
)

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Example:
        >>> is_relative_to(Path("/home/user/project/file.txt"), Path("/home/user"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object

    Raises:
        FilesystemError: If the directory cannot be created
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to create directory '{path}': {e}") from e
    return path


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(archive_path: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Extract every entry of a ZIP archive into a destination directory.

    Existing files with the same name are overwritten.

    Args:
        archive_path: Path to the ZIP archive
        destination: Directory to extract to

    Raises:
        ArchiveError: If the archive cannot be opened or extracted
        InsecureArchiveError: If the archive contains malicious paths

    Example:
        >>> extract_archive('chromedriver_linux64.zip', 'bin')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveError(f"Archive not found: {archive_path}")

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.namelist()

            # Validate all paths first
            for member in members:
                _validate_archive_path(member, destination)

            zf.extractall(destination)
    except InsecureArchiveError:
        raise
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"Failed to extract {archive_path}: {e}") from e

    logger.debug(f"Extracted {len(members)} file(s) to {destination}")


# ============================================================================
# Permissions
# ============================================================================


def make_executable(path: Union[str, Path], mode: int = EXECUTABLE_MODE) -> None:
    """
    Set the mode of an extracted executable (rwxr-xr-x by default).

    Raises:
        FilesystemError: If the mode cannot be changed
    """
    try:
        os.chmod(path, mode)
    except OSError as e:
        raise FilesystemError(f"Failed to set permissions on '{path}': {e}") from e


__all__ = [
    "EXECUTABLE_MODE",
    "is_relative_to",
    "ensure_directory",
    "extract_archive",
    "make_executable",
]
