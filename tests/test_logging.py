"""
Tests for the logging configuration
"""

import logging

from page_relay.utils import logging_config
from page_relay.utils.logging_config import AccessTokenFilter, get_logger, mask_access_tokens


def test_get_logger_returns_named_logger():
    logger = get_logger("test_component")

    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_component"


def test_get_logger_is_idempotent():
    first = get_logger("test_idempotent")
    handler_count = len(first.handlers)

    second = get_logger("test_idempotent")

    assert first is second
    assert len(second.handlers) == handler_count


def test_log_file_path_uses_unified_file(monkeypatch):
    monkeypatch.setattr(logging_config, "SEPARATE_LOG_FILES", False)

    path = logging_config.get_log_file_path("responder")

    if logging_config.LOGS_DIR is not None:
        assert path.endswith("app.log")


def test_log_file_path_per_component(monkeypatch):
    monkeypatch.setattr(logging_config, "SEPARATE_LOG_FILES", True)

    path = logging_config.get_log_file_path("responder")

    if logging_config.LOGS_DIR is not None:
        assert path.endswith("responder.log")


def test_log_file_path_without_logs_dir(monkeypatch):
    monkeypatch.setattr(logging_config, "LOGS_DIR", None)

    assert logging_config.get_log_file_path() is None


def test_env_int_falls_back_when_out_of_range(monkeypatch):
    monkeypatch.setenv("X_INT", "500")
    monkeypatch.setenv("X_BAD", "ten")

    assert logging_config._env_int("X_INT", 20, 0, 50) == 20
    assert logging_config._env_int("X_BAD", 20, 0, 50) == 20


def test_mask_access_tokens():
    url = "https://graph.facebook.com/v19.0/me/messages?access_token=EAAB123&x=1"

    assert mask_access_tokens(url) == "https://graph.facebook.com/v19.0/me/messages?access_token=***&x=1"


def test_access_token_filter_rewrites_record():
    record = logging.LogRecord(
        "messenger", logging.ERROR, __file__, 1,
        "Unable to send: %s", ("HTTPSConnectionPool url: /me/messages?access_token=SECRET",), None,
    )

    assert AccessTokenFilter().filter(record) is True
    assert "SECRET" not in record.getMessage()
    assert "access_token=***" in record.getMessage()
