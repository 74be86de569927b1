"""
Facebook Messenger webhook endpoints

GET /webhook answers the subscription handshake, POST /webhook acknowledges
page events and hands each message to the responder as a background task.
"""

from typing import Any, List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from page_relay.config import Settings
from page_relay.dependencies.app_state import get_responder, get_settings
from page_relay.schemas import InboundEvent, WebhookEntry
from page_relay.services.responder import MessageResponder
from page_relay.utils.logging_config import get_api_logger

logger = get_api_logger()

EVENT_RECEIVED = "EVENT_RECEIVED"

webhook_router = APIRouter(prefix="", tags=["webhook"])


# ---- Helpers ----

def extract_inbound_events(entries: Any) -> List[InboundEvent]:
    """
    Pull the sender and text out of each raw webhook entry.

    Entries are validated one at a time so a malformed entry is skipped
    without losing the rest of the batch. Only the first messaging event of
    an entry is read; any further events in the same entry are dropped.
    """
    if not isinstance(entries, list):
        logger.warning(f"Webhook entry field is not a list: {type(entries).__name__}")
        return []

    events = []
    for index, raw_entry in enumerate(entries):
        try:
            entry = WebhookEntry.model_validate(raw_entry)
        except ValidationError as e:
            logger.warning(f"Skipping malformed webhook entry {index}: {e.error_count()} validation error(s)")
            continue

        event = _first_messaging_event(entry)
        if event is not None:
            events.append(event)
    return events


def _first_messaging_event(entry: WebhookEntry) -> Optional[InboundEvent]:
    if not entry.messaging:
        logger.warning(f"Entry {entry.id} has no messaging events")
        return None

    if len(entry.messaging) > 1:
        logger.warning(f"Entry {entry.id} has {len(entry.messaging)} messaging events, only the first is handled")

    messaging_event = entry.messaging[0]
    sender_id = messaging_event.sender.id if messaging_event.sender else None
    if not sender_id:
        logger.warning("No sender ID in messaging event")
        return None

    text = messaging_event.message.text if messaging_event.message else None
    return InboundEvent(sender_id=sender_id, text=text)


# ---- Routes ----

@webhook_router.get("/webhook")
async def verify_webhook(
    mode: Optional[str] = Query(None, alias="hub.mode"),
    verify_token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
):
    """
    Facebook webhook verification endpoint

    Facebook sends hub.mode=subscribe, hub.verify_token and hub.challenge;
    the challenge is echoed back when the token matches.
    """
    if not mode or not verify_token:
        logger.warning("Webhook verification request missing hub.mode or hub.verify_token")
        return Response(status_code=400)

    if not settings.verify_token:
        logger.error("WEBHOOK_VERIFY_TOKEN not configured")
        return Response(status_code=403)

    if mode == "subscribe" and verify_token == settings.verify_token:
        logger.info("WEBHOOK_VERIFIED")
        return PlainTextResponse(challenge or "", status_code=200)

    logger.warning(f"Webhook verification failed: mode={mode}, token_match={verify_token == settings.verify_token}")
    return Response(status_code=403)


@webhook_router.post("/webhook")
async def handle_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    responder: MessageResponder = Depends(get_responder),
):
    """
    Facebook webhook message handling endpoint

    Replies are generated after the response is sent; the platform only ever
    learns that the event was received.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        return Response(status_code=400)

    webhook_object = body.get("object") if isinstance(body, dict) else None
    if webhook_object != "page":
        logger.warning(f"Invalid webhook object: {webhook_object!r}")
        return Response(status_code=404)

    for event in extract_inbound_events(body.get("entry", [])):
        if not event.has_text:
            logger.info(f"Received non-text message from {event.sender_id}")
            continue

        logger.info(f"Received message from {event.sender_id} ({len(event.text)} characters)")
        logger.debug(f"Message text from {event.sender_id}: \"{event.text}\"")
        background_tasks.add_task(responder.respond, event.sender_id, event.text)

    return PlainTextResponse(EVENT_RECEIVED, status_code=200)
