"""
Tests for the Graph API message sender
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from page_relay.config import Settings
from page_relay.services.messenger import MessageSender, MockMessageSender, get_message_sender


@pytest.fixture
def sender():
    return MessageSender(Settings(page_access_token="page_token", graph_api_version="v19.0"))


def ok_response():
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {"recipient_id": "U1", "message_id": "m_1"}
    return response


class TestMessageSender:

    def test_send_text_message_posts_send_api_payload(self, sender):
        with patch("page_relay.services.messenger.message_sender.requests.post", return_value=ok_response()) as mock_post:
            assert sender.send_text_message("U1", "Hello") is True

        mock_post.assert_called_once_with(
            "https://graph.facebook.com/v19.0/me/messages",
            json={"recipient": {"id": "U1"}, "message": {"text": "Hello"}},
            params={"access_token": "page_token"},
            timeout=10.0,
        )

    def test_api_error_returns_false(self, sender, caplog):
        error = MagicMock()
        error.ok = False
        error.status_code = 400
        error.text = '{"error": {"message": "Invalid OAuth access token"}}'

        with patch("page_relay.services.messenger.message_sender.requests.post", return_value=error) as mock_post:
            assert sender.send_text_message("U1", "Hello") is False

        mock_post.assert_called_once()
        assert any("Invalid OAuth access token" in record.getMessage() for record in caplog.records)

    def test_request_exception_returns_false(self, sender):
        with patch(
            "page_relay.services.messenger.message_sender.requests.post",
            side_effect=requests.exceptions.ConnectionError("unreachable"),
        ) as mock_post:
            assert sender.send_text_message("U1", "Hello") is False

        # No retry
        assert mock_post.call_count == 1

    def test_missing_access_token_skips_request(self):
        sender = MessageSender(Settings())

        with patch("page_relay.services.messenger.message_sender.requests.post") as mock_post:
            assert sender.send_text_message("U1", "Hello") is False

        mock_post.assert_not_called()

    def test_graph_api_version_is_configurable(self):
        sender = MessageSender(Settings(page_access_token="t", graph_api_version="v21.0"))

        assert sender.api_url == "https://graph.facebook.com/v21.0/me/messages"


class TestMockMessageSender:

    def test_records_messages(self):
        sender = MockMessageSender()

        assert sender.send_text_message("U1", "Hello") is True
        assert sender.get_sent_messages()[0]["recipient_id"] == "U1"
        assert sender.get_sent_messages()[0]["text"] == "Hello"

        sender.clear_sent_messages()
        assert sender.get_sent_messages() == []


def test_get_message_sender_uses_mock_in_dry_run():
    assert isinstance(get_message_sender(Settings(dry_run=True)), MockMessageSender)


def test_get_message_sender_uses_graph_api_otherwise():
    assert isinstance(get_message_sender(Settings(page_access_token="t")), MessageSender)
