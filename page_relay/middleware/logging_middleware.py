"""
Logging Middleware

Logs each request with a short request ID, its response status and timing.
"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from page_relay.utils.logging_config import get_logger

logger = get_logger("logging_middleware")

# Query parameters never written to the log
SENSITIVE_QUERY_PARAMS = ("hub.verify_token", "access_token")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging

    This middleware:
    1. Assigns a request ID and returns it as X-Request-ID
    2. Logs the request line with sensitive query parameters masked
    3. Logs the response status and duration at a status-based level
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        request_id = self._generate_request_id()
        request.state.request_id = request_id

        method = request.method
        path = request.url.path
        logger.info(
            f"📥 Request started | ID: {request_id} | {method} {path}",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "query_params": self._masked_query_params(request),
                "client_ip": self._get_client_ip(request),
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"❌ Request failed | ID: {request_id} | {method} {path} | {duration:.3f}s | Error: {str(e)}",
                exc_info=True
            )
            raise

        response.headers["X-Request-ID"] = request_id

        duration = time.time() - start_time
        status_code = response.status_code
        if status_code >= 500:
            log_level = logger.error
        elif status_code >= 400:
            log_level = logger.warning
        else:
            log_level = logger.info

        log_level(
            f"📤 Request completed | ID: {request_id} | {method} {path} | {status_code} | {duration:.3f}s",
            extra={
                "request_id": request_id,
                "status_code": status_code,
                "duration": duration,
            }
        )
        return response

    def _generate_request_id(self) -> str:
        return str(uuid.uuid4())[:8]

    def _masked_query_params(self, request: Request) -> dict:
        params = dict(request.query_params)
        for key in SENSITIVE_QUERY_PARAMS:
            if key in params:
                params[key] = "***"
        return params

    def _get_client_ip(self, request: Request) -> str:
        """Client IP address, honouring proxy headers"""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"
