"""
Request logging middleware (enabled when DEBUG is on).

One line per request: id, method, path, status and duration. The id is
echoed back in the ``X-Request-ID`` header.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception(
                f"request_id={request_id} method={request.method} "
                f"path={request.url.path} status=500 duration_ms={duration_ms} error={e}"
            )
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"request_id={request_id} method={request.method} "
            f"path={request.url.path} status={response.status_code} duration_ms={duration_ms}"
        )
        return response
