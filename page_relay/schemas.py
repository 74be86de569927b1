"""
Pydantic schemas for Messenger webhook payloads

These mirror the subset of the Messenger Platform webhook format the relay
reads. Unknown fields are ignored so new platform fields never break parsing.
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional


class _PlatformModel(BaseModel):
    # Platform IDs occasionally arrive as JSON numbers
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Participant(_PlatformModel):
    """Sender or recipient of a messaging event"""

    id: Optional[str] = None


class MessageContent(_PlatformModel):
    """The message object of a messaging event"""

    mid: Optional[str] = None
    text: Optional[str] = None


class MessagingEvent(_PlatformModel):
    """A single messaging event inside a webhook entry"""

    sender: Optional[Participant] = None
    recipient: Optional[Participant] = None
    timestamp: Optional[int] = None
    message: Optional[MessageContent] = None


class WebhookEntry(_PlatformModel):
    """One entry of a (possibly batched) webhook delivery"""

    id: Optional[str] = None
    time: Optional[int] = None
    messaging: List[MessagingEvent] = []


class InboundEvent(BaseModel):
    """Sender and text extracted from a messaging event"""

    sender_id: str
    text: Optional[str] = None

    @property
    def has_text(self) -> bool:
        return bool(self.text)


class OutboundReply(BaseModel):
    """A reply addressed to a single Messenger user"""

    recipient_id: str
    text: str

    def to_send_api(self) -> Dict[str, Any]:
        """Request body for the Graph API Send endpoint"""
        return {
            "recipient": {"id": self.recipient_id},
            "message": {"text": self.text},
        }
