"""
FastAPI dependencies that expose objects built once by the app factory
"""

from fastapi import Request

from page_relay.config import Settings
from page_relay.services.responder import MessageResponder


def get_settings(request: Request) -> Settings:
    """Settings constructed at process start"""
    return request.app.state.settings


def get_responder(request: Request) -> MessageResponder:
    """Shared message responder"""
    return request.app.state.responder
