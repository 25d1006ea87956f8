"""
Default directory locations for chromedriver-installer.

Directory Structure:
    Cache dir (~/.cache/chromedriver-installer or %LOCALAPPDATA%\\chromedriver-installer):
        - files/lbaey-chromedriver/downloaded-bin/{version}/{archive}

    Bin dir (<project-root>/bin by default):
        - chromedriver (chromedriver.exe on Windows)
"""

import os
from pathlib import Path
from typing import Optional

CACHE_DIR_NAME = "chromedriver-installer"
CACHE_SUBDIRECTORY = ("files", "lbaey-chromedriver", "downloaded-bin")
DEFAULT_BIN_DIR_NAME = "bin"


def get_default_cache_dir() -> Path:
    """
    Get the platform-specific default cache directory.

    Returns:
        Path: The cache directory path.
            - Windows: %LOCALAPPDATA%\\chromedriver-installer
            - Linux/macOS: $XDG_CACHE_HOME/chromedriver-installer
              (~/.cache/chromedriver-installer when unset)
    """
    if os.name == "nt":
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / CACHE_DIR_NAME
        return Path.home() / "AppData" / "Local" / CACHE_DIR_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / CACHE_DIR_NAME
    return Path.home() / ".cache" / CACHE_DIR_NAME


def get_default_bin_dir(project_root: Optional[Path] = None) -> Path:
    """
    Get the default bin directory for a project.

    Args:
        project_root: Root directory of the project (defaults to cwd)

    Returns:
        Path: <project_root>/bin
    """
    return Path(project_root or Path.cwd()) / DEFAULT_BIN_DIR_NAME


def get_cache_root(cache_dir: Path) -> Path:
    """
    Get the root of the downloaded archive cache inside a cache directory.

    Example:
        >>> get_cache_root(Path("/home/user/.cache/chromedriver-installer"))
        PosixPath('/home/user/.cache/chromedriver-installer/files/lbaey-chromedriver/downloaded-bin')
    """
    return Path(cache_dir).joinpath(*CACHE_SUBDIRECTORY)


def verify_directory_writable(path: Path) -> bool:
    """
    Verify that a directory exists and is writable.

    Args:
        path: Directory path to verify.

    Returns:
        bool: True if directory exists and is writable, False otherwise.
    """
    if not path.exists():
        return False

    if not path.is_dir():
        return False

    # Try to create a temporary file to test write permissions
    try:
        test_file = path / ".write_test"
        test_file.touch()
        test_file.unlink()
        return True
    except OSError:
        return False


__all__ = [
    "get_default_cache_dir",
    "get_default_bin_dir",
    "get_cache_root",
    "verify_directory_writable",
]
