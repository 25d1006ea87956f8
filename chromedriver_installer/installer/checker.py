"""
Detection of an already-installed ChromeDriver.

The installed binary is asked for its version (``chromedriver --version``).
Any failure of that probe means "not up to date": the probe only gates the
skip-reinstall shortcut, so the installer simply reinstalls.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PRODUCT_NAME = "ChromeDriver"
VERSION_FLAG = "--version"
PROBE_TIMEOUT = 10  # seconds


def _probe(path: Path, timeout: float) -> Optional[str]:
    """Run the version query and return stdout, or None on any failure."""
    if not path.is_file() or not os.access(path, os.X_OK):
        return None

    try:
        result = subprocess.run(
            [str(path), VERSION_FLAG],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Version probe of {path} failed: {e}")
        return None

    return result.stdout


def is_up_to_date(
    path: Union[str, Path], expected_version: str, timeout: float = PROBE_TIMEOUT
) -> bool:
    """
    Check whether the executable at ``path`` is the expected version.

    Args:
        path: Installed executable
        expected_version: Version that should be installed
        timeout: Probe timeout in seconds

    Returns:
        True iff the probe output starts with "ChromeDriver <expected_version>"

    Example:
        >>> is_up_to_date(Path("bin/chromedriver"), "2.41")
        True
    """
    output = _probe(Path(path), timeout)
    if output is None:
        return False
    return output.startswith(f"{PRODUCT_NAME} {expected_version}")


__all__ = ["PRODUCT_NAME", "PROBE_TIMEOUT", "is_up_to_date"]
