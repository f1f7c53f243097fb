"""Widget-Relay: branded chat widget configuration and workflow relay."""

from widget_relay.client import ChatClient, ChatClientError, ChatReply
from widget_relay.relay.normalize import extract_reply

__all__ = [
    "ChatClient",
    "ChatClientError",
    "ChatReply",
    "extract_reply",
]
__version__ = "0.1.0"
