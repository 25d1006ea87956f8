"""
Install command implementation.

Serves ``install`` as well as the ``post-install`` and ``post-update``
lifecycle events.
"""

import logging

from chromedriver_installer.cli.utils import print_error, safe_print
from chromedriver_installer.config.parser import load_config
from chromedriver_installer.core.exceptions import ChromeDriverInstallerError
from chromedriver_installer.installer.hooks import dispatch
from chromedriver_installer.installer.installer import install_driver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments with:
            - command: 'install', 'post-install' or 'post-update'
            - config / project_root: Where to read package metadata from
            - driver_version, bin_dir, cache_dir, no_cache, base_url: Overrides

    Returns:
        Exit code (0 for success, 1 on a reported error)
    """
    overrides = {
        "version": args.driver_version,
        "bin_dir": args.bin_dir,
        "cache_dir": args.cache_dir,
        "base_url": args.base_url.rstrip("/") if args.base_url else None,
        "cache_enabled": False if args.no_cache else None,
    }

    try:
        config = load_config(
            config_path=args.config,
            project_root=args.project_root,
            overrides=overrides,
        )

        if args.command == "install":
            result = install_driver(config)
        else:
            result = dispatch(args.command, config)
    except ChromeDriverInstallerError as e:
        print_error(str(e))
        if args.verbose:
            logger.exception("Installation failed")
        return 1

    if not result.already_installed:
        safe_print(f"ChromeDriver {result.version} installed at {result.executable_path}")

    return 0
