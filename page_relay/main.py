"""
Page Relay API

Receives Facebook Messenger webhook events, asks Google Gemini for a reply
and sends it back to the user. API documentation available at /docs.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from page_relay.config import Settings
from page_relay.middleware import setup_middleware
from page_relay.routers.health import health_router
from page_relay.routers.webhook import webhook_router
from page_relay.services.gemini_client import GeminiClient
from page_relay.services.messenger import get_message_sender
from page_relay.services.responder import MessageResponder
from page_relay.utils.logging_config import get_logger, get_log_file_path

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    settings: Settings = app.state.settings

    logger.info("🚀 Starting Page Relay")
    logger.info("-" * 50)
    logger.info(f"- ENVIRONMENT={settings.environment}")
    logger.info(f"- PORT={settings.port}")
    logger.info(f"- GEMINI_MODEL={settings.gemini_model}")
    logger.info(f"- SEND_API_URL={settings.send_api_url}")
    logger.info(f"- DRY_RUN={settings.dry_run}")
    logger.info(f"- LOGS={get_log_file_path()}")
    logger.info("-" * 50)
    logger.info(f"Webhook server is listening on port {settings.port}")

    yield

    logger.info("Shutting down Page Relay...")


def create_app(
    settings: Optional[Settings] = None,
    responder: Optional[MessageResponder] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted
        responder: Message responder; built from settings when omitted

    Raises:
        ValueError: If required configuration is missing in production
    """
    if settings is None:
        settings = Settings.from_env()
    settings.validate()

    if responder is None:
        responder = MessageResponder(
            gemini_client=GeminiClient(settings),
            message_sender=get_message_sender(settings),
        )

    app = FastAPI(
        title="Page Relay",
        description="Facebook Messenger to Google Gemini webhook relay",
        version=settings.version,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.responder = responder

    setup_middleware(app, include_traceback=not settings.is_production)

    app.include_router(webhook_router)
    app.include_router(health_router)

    return app


def run() -> None:
    """Console entry point: serve the app on the configured port"""
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
