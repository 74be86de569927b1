"""
Message sender for Facebook Messenger
"""

import requests
from page_relay.config import Settings
from page_relay.schemas import OutboundReply
from page_relay.utils.logging_config import get_logger

logger = get_logger("messenger")


class MessageSender:
    """Sends messages to Facebook Messenger users through the Graph API Send endpoint"""

    def __init__(self, settings: Settings):
        self.page_access_token = settings.page_access_token
        self.api_url = settings.send_api_url
        self.timeout = settings.graph_api_timeout

    def send_text_message(self, recipient_id: str, text: str) -> bool:
        """
        Send a text message to a user

        Args:
            recipient_id: The recipient's Page-scoped ID
            text: The message text to send

        Returns:
            True if message was sent successfully, False otherwise
        """
        if not self.page_access_token:
            logger.error("No Facebook page access token configured")
            return False

        reply = OutboundReply(recipient_id=recipient_id, text=text)
        return self._send_message(reply)

    def _send_message(self, reply: OutboundReply) -> bool:
        """
        Send a message to Facebook Messenger API. Failures are logged, never retried.
        """
        try:
            response = requests.post(
                self.api_url,
                json=reply.to_send_api(),
                params={"access_token": self.page_access_token},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Unable to send message to {reply.recipient_id}: {e}")
            return False

        if response.ok:
            logger.info(f"Reply sent successfully to {reply.recipient_id}")
            return True

        logger.error(f"Unable to send message to {reply.recipient_id}: {response.status_code} - {response.text}")
        return False
