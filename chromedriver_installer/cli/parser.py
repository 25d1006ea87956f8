"""
chromedriver-installer CLI argument parser.

This module implements the command-line interface using argparse. The CLI
plays the host's role: it loads the project configuration and either runs
the installation directly or fires one of the lifecycle events.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("chromedriver-installer")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """chromedriver-installer command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="chromedriver-installer",
            description="Download, verify and install ChromeDriver",
            epilog='Use "chromedriver-installer COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version",
            action="version",
            version=f"chromedriver-installer {__version__}",
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to package metadata file (default: ./composer.json)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(
            subparsers,
            "install",
            help="Install ChromeDriver",
            description="Install ChromeDriver into the bin directory",
        )
        self._add_install_command(
            subparsers,
            "post-install",
            help="Run the post-install hook",
            description="Fire the post-install event (installs ChromeDriver)",
        )
        self._add_install_command(
            subparsers,
            "post-update",
            help="Run the post-update hook",
            description="Fire the post-update event (installs ChromeDriver)",
        )

        return parser

    def _add_install_command(self, subparsers, name: str, **kwargs):
        """Add a subcommand taking the installation options."""
        parser = subparsers.add_parser(name, **kwargs)
        parser.add_argument(
            "--driver-version",
            metavar="VERSION",
            help="ChromeDriver version or constraint (default: latest release)",
        )
        parser.add_argument(
            "--bin-dir",
            type=Path,
            metavar="PATH",
            help="Directory to install the executable into",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Directory for downloaded archives",
        )
        parser.add_argument(
            "--no-cache",
            action="store_true",
            help="Do not reuse cached archives",
        )
        parser.add_argument(
            "--base-url",
            metavar="URL",
            help="Base URL of the ChromeDriver release storage",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            from chromedriver_installer.cli.commands import install

            return install.run(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
