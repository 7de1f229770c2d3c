"""Request logging middleware."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from studyhub.api.responses import error_response
from studyhub.config import sanitize_error

logger = logging.getLogger("studyhub.access")

QUIET_PATHS = frozenset({"/api/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log method, path, status and duration for each request.

    5xx responses log at ERROR, 4xx at WARNING, everything else at INFO.
    Health probes are not logged. Bodies and headers are never logged.

    Unhandled errors become the 500 envelope here, inside CORSMiddleware,
    so browsers can read them and they are logged like any other request.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
            response = error_response(500, sanitize_error(exc))

        if request.url.path in QUIET_PATHS:
            return response
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            client_ip,
        )
        return response
