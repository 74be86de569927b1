"""
Messenger service for Facebook Messenger integration
"""

from page_relay.config import Settings
from .message_sender import MessageSender
from .mock_message_sender import MockMessageSender


def get_message_sender(settings: Settings):
    """
    Get the appropriate message sender based on configuration.
    Uses the mock sender in dry-run mode to avoid Facebook API calls.
    """
    if settings.dry_run:
        return MockMessageSender()
    return MessageSender(settings)


__all__ = ["MessageSender", "MockMessageSender", "get_message_sender"]
