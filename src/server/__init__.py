"""UI server module for the static timer page and websocket streaming."""

from .config import ServerConfigurationError, UIServerConfig
from .events import InvalidCommandMessage
from .service import UIServer

__all__ = [
    "InvalidCommandMessage",
    "ServerConfigurationError",
    "UIServerConfig",
    "UIServer",
]
