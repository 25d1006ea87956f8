"""
chromedriver-installer: download, verify, cache and install ChromeDriver.
"""

from chromedriver_installer.config.parser import InstallerConfig, load_config
from chromedriver_installer.installer.installer import Installer, install_driver

__all__ = ["InstallerConfig", "load_config", "Installer", "install_driver"]
