"""Logging middleware for API requests."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...utils.logging import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging API requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request, log request and response details.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            The response from the next middleware or route handler
        """
        start_time = time.time()
        method = request.method
        path = request.url.path

        logger.debug("request_started", method=method, path=path)

        response = await call_next(request)
        process_time = round((time.time() - start_time) * 1000, 2)

        logger.debug(
            "request_finished",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=process_time,
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response
