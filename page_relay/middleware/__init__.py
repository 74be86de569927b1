"""
Middleware Package

Centralized middleware setup for the Page Relay application.
"""

from fastapi import FastAPI
from .logging_middleware import LoggingMiddleware
from .error_handling import ErrorHandlingMiddleware


def setup_middleware(app: FastAPI, include_traceback: bool = False) -> None:
    """
    Setup all middleware for the application

    Starlette runs the last added middleware first, so logging wraps error
    handling and every error response still carries X-Request-ID.
    """
    app.add_middleware(ErrorHandlingMiddleware, include_traceback=include_traceback)
    app.add_middleware(LoggingMiddleware)

    from page_relay.utils.logging_config import get_logger
    logger = get_logger("middleware")
    logger.info("✅ Middleware configured")
