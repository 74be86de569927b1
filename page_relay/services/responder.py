"""
Message responder: asks Gemini for a reply and relays it to the sender.

Runs as a background task after the webhook has already acknowledged the
event, so nothing here is ever reported back to the platform.
"""

from page_relay.utils.logging_config import get_logger

logger = get_logger("responder")

FALLBACK_MESSAGE = "Sorry, I'm having a little trouble right now. Please try again later."

PROMPT_TEMPLATE = (
    "You are a helpful assistant for our Facebook Page. "
    "Please answer the following question concisely and friendly:\n\n"
    "User: {message_text}\nAssistant:"
)


def build_prompt(message_text: str) -> str:
    """Wrap the user's text in the static instruction template"""
    return PROMPT_TEMPLATE.format(message_text=message_text)


class MessageResponder:
    """Generates a reply for an inbound message and delivers it"""

    def __init__(self, gemini_client, message_sender):
        self.gemini_client = gemini_client
        self.message_sender = message_sender

    def respond(self, sender_id: str, message_text: str) -> None:
        """
        Generate a reply for message_text and send it to sender_id.

        Any generation failure is replaced by FALLBACK_MESSAGE; delivery is
        still attempted.
        """
        try:
            logger.info(f"Asking Gemini for a response to {sender_id}...")
            reply_text = self.gemini_client.generate_response(build_prompt(message_text))
            logger.info(f"Gemini responded to {sender_id} ({len(reply_text)} characters)")
            logger.debug(f"Gemini reply for {sender_id}: \"{reply_text}\"")
        except Exception as e:
            logger.error(f"Error handling message from {sender_id}: {e}", exc_info=True)
            reply_text = FALLBACK_MESSAGE

        self.deliver(sender_id, reply_text)

    def deliver(self, recipient_id: str, text: str) -> bool:
        """Send text to recipient_id. Returns the sender's success flag."""
        success = self.message_sender.send_text_message(recipient_id, text)
        if not success:
            logger.error(f"Reply to {recipient_id} was not delivered")
        return success
