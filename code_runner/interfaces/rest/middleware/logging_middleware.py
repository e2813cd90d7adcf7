"""
Request logging middleware.

Binds a request_id into the structlog context for every log line emitted while
serving the request. The execution actor runs in its own task and logs with
execution_id instead.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from code_runner.infrastructure.logging import get_logger, bind_context, clear_context

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to all logs.

    - Generates a request_id for each request (or reuses X-Request-ID)
    - Logs request completion with timing information
    - Adds X-Request-ID and X-Process-Time headers to the response
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed",
                error=str(e),
                process_time=f"{time.perf_counter() - start_time:.3f}s",
            )
            raise
        else:
            process_time = time.perf_counter() - start_time
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.3f}"
            logger.info(
                "Request completed",
                status_code=response.status_code,
                process_time=f"{process_time:.3f}s",
            )
            return response
        finally:
            clear_context()
