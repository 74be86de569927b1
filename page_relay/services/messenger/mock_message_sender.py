"""
Mock message sender for local testing without Facebook API calls

Selected when MESSENGER_DRY_RUN is enabled, so the webhook flow can be
exercised end to end without valid Facebook credentials.
"""

from datetime import datetime, timezone
from typing import List, Dict, Any

from page_relay.utils.logging_config import get_logger

logger = get_logger("messenger")


class MockMessageSender:
    """Mock message sender that logs messages instead of sending to Facebook"""

    def __init__(self):
        self.sent_messages: List[Dict[str, Any]] = []
        logger.info("MockMessageSender initialized for local testing")

    def send_text_message(self, recipient_id: str, text: str) -> bool:
        """Record the message instead of sending it. Always succeeds."""
        self.sent_messages.append({
            "recipient_id": recipient_id,
            "text": text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        logger.info(f"[MOCK] Message sent to {recipient_id}: {text}")
        return True

    def get_sent_messages(self) -> List[Dict[str, Any]]:
        """Get all sent messages for testing verification"""
        return self.sent_messages.copy()

    def clear_sent_messages(self):
        self.sent_messages.clear()
