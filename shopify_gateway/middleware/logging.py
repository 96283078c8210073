"""
Request logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log how it went."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        start_time = time.time()

        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} failed: {type(e).__name__} "
                f"({duration * 1000:.1f}ms) [{request_id}]"
            )
            raise

        duration = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration * 1000:.1f}ms) [{request_id}]"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.4f}"

        return response
