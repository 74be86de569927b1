"""
Error Handling Middleware

Catches unhandled exceptions and returns a consistent JSON error envelope.
"""

import traceback
from typing import Callable, Dict, Any
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from page_relay.utils.logging_config import get_logger

logger = get_logger("error_handling")

# Anything not listed here is a 500
ERROR_STATUS_MAP = {
    "ConnectionError": status.HTTP_503_SERVICE_UNAVAILABLE,
    "TimeoutError": status.HTTP_504_GATEWAY_TIMEOUT,
}


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for handling unhandled exceptions"""

    def __init__(self, app, include_traceback: bool = False):
        super().__init__(app)
        self.include_traceback = include_traceback

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return self._handle_unexpected_error(request, e)

    def _handle_unexpected_error(self, request: Request, error: Exception) -> JSONResponse:
        method = request.method
        path = request.url.path
        request_id = getattr(request.state, "request_id", "unknown")

        logger.error(
            f"❌ Unhandled exception | ID: {request_id} | {method} {path}",
            extra={
                "request_id": request_id,
                "error": str(error),
                "error_type": type(error).__name__,
            },
            exc_info=True
        )

        error_response: Dict[str, Any] = {
            "error": {
                "type": "internal_server_error",
                "message": "An unexpected error occurred",
                "request_id": request_id,
                "path": path,
                "method": method
            }
        }

        if self.include_traceback:
            error_response["error"]["details"] = {
                "error_type": type(error).__name__,
                "error_message": str(error),
                "traceback": traceback.format_exc()
            }

        return JSONResponse(
            status_code=ERROR_STATUS_MAP.get(type(error).__name__, status.HTTP_500_INTERNAL_SERVER_ERROR),
            content=error_response
        )
