import logging
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from page_relay.config import Settings
from page_relay.main import create_app
from page_relay.services.messenger import MockMessageSender
from page_relay.services.responder import MessageResponder

VERIFY_TOKEN = "test_verify_token"


@pytest.fixture
def settings():
    return Settings(
        verify_token=VERIFY_TOKEN,
        page_access_token="test_page_token",
        gemini_api_key="test_gemini_key",
        environment="test",
        dry_run=True,
    )


@pytest.fixture
def gemini_client():
    client = MagicMock()
    client.generate_response.return_value = "Hello from Gemini!"
    return client


@pytest.fixture
def message_sender():
    return MockMessageSender()


@pytest.fixture
def responder(gemini_client, message_sender):
    return MessageResponder(gemini_client=gemini_client, message_sender=message_sender)


@pytest.fixture
def client(settings, responder):
    app = create_app(settings, responder=responder)

    # Use TestClient as a context manager to trigger `lifespan`
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True, scope="session")
def enable_logging_for_tests():
    # Make sure component loggers reach pytest's caplog
    for logger_name in ["app", "api", "responder", "messenger", "gemini", "main",
                        "logging_middleware", "error_handling"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = True
