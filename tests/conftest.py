"""
Pytest configuration and shared fixtures for chromedriver-installer tests.
"""

import io
import zipfile
from pathlib import Path
from typing import Dict

import pytest

from chromedriver_installer.config.parser import InstallerConfig

BASE_URL = "https://chromedriver.storage.googleapis.com"

DRIVER_SCRIPT = b'#!/bin/sh\necho "ChromeDriver 2.41.578700 (2f1ed5f9343c13f73144538f15c00b370eda6706)"\n'


def build_zip(files: Dict[str, bytes]) -> bytes:
    """Build an in-memory ZIP archive from name -> content."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def zip_builder():
    """Factory building ZIP archive bytes from a name -> content mapping."""
    return build_zip


@pytest.fixture
def driver_zip() -> bytes:
    """Linux/Mac release archive containing a fake chromedriver."""
    return build_zip({"chromedriver": DRIVER_SCRIPT})


@pytest.fixture
def windows_driver_zip() -> bytes:
    """Windows release archive containing a fake chromedriver.exe."""
    return build_zip({"chromedriver.exe": b"MZ fake executable"})


@pytest.fixture
def installer_config(tmp_path: Path) -> InstallerConfig:
    """Configuration with bin and cache directories inside tmp_path."""
    return InstallerConfig(
        version="2.41",
        bin_dir=tmp_path / "bin",
        cache_dir=tmp_path / "cache",
        base_url=BASE_URL,
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove CHROMEDRIVER_* variables that would leak into configuration."""
    for name in (
        "CHROMEDRIVER_VERSION",
        "CHROMEDRIVER_BIN_DIR",
        "CHROMEDRIVER_CACHE_DIR",
        "CHROMEDRIVER_NO_CACHE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches between tests."""
    from chromedriver_installer.core import platform

    platform.clear_platform_cache()
    yield
    platform.clear_platform_cache()
