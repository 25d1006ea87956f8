"""
Entry point for running chromedriver-installer as a module.

Usage: python -m chromedriver_installer [command] [options]
"""

from chromedriver_installer.cli.parser import main

if __name__ == "__main__":
    main()
