"""
Lifecycle hooks of the host dependency manager.

The host fires ``post-install`` and ``post-update`` after resolving the
project's dependencies. Both run the same driver installation.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from chromedriver_installer.config.parser import InstallerConfig, load_config
from chromedriver_installer.installer.installer import InstallResult, install_driver

logger = logging.getLogger(__name__)


class ScriptEvents:
    """Names of the host events the plugin subscribes to."""

    POST_INSTALL = "post-install"
    POST_UPDATE = "post-update"


@dataclass
class Event:
    """A lifecycle event fired by the host."""

    name: str


class ChromeDriverPlugin:
    """Subscribes the driver installation to the host's lifecycle events."""

    def __init__(self):
        self.config: Optional[InstallerConfig] = None

    @staticmethod
    def get_subscribed_events() -> Dict[str, str]:
        """Map event names to handler method names."""
        return {
            ScriptEvents.POST_INSTALL: "on_post_install",
            ScriptEvents.POST_UPDATE: "on_post_update",
        }

    def activate(self, config: InstallerConfig):
        """Bind the plugin to the host project's configuration."""
        self.config = config

    def on_post_install(self, event: Event) -> InstallResult:
        """Handle post install events."""
        return self.install_driver(event)

    def on_post_update(self, event: Event) -> InstallResult:
        """Handle post update events."""
        return self.install_driver(event)

    def install_driver(self, event: Event) -> InstallResult:
        logger.debug(f"Installing ChromeDriver on {event.name}")
        return install_driver(self.config or load_config())

    def handle(self, event: Event) -> InstallResult:
        """
        Run the handler subscribed to an event.

        Raises:
            ValueError: If the plugin does not subscribe to the event
        """
        handler_name = self.get_subscribed_events().get(event.name)
        if handler_name is None:
            raise ValueError(f"Unknown event: {event.name}")
        return getattr(self, handler_name)(event)


def dispatch(event_name: str, config: Optional[InstallerConfig] = None) -> InstallResult:
    """
    Fire a lifecycle event at a freshly activated plugin.

    Args:
        event_name: 'post-install' or 'post-update'
        config: Installation settings (loaded from the current project if None)

    Returns:
        InstallResult of the triggered installation
    """
    plugin = ChromeDriverPlugin()
    plugin.activate(config or load_config())
    return plugin.handle(Event(event_name))


__all__ = ["ScriptEvents", "Event", "ChromeDriverPlugin", "dispatch"]
