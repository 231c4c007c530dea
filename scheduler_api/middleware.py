import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class HTTPLogMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status and duration at DEBUG level."""

    def __init__(self, app, logger_name: str = "scheduler_api.http"):
        super().__init__(app)
        self._logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        method = request.method
        path = request.url.path
        try:
            response: Response = await call_next(request)
        except Exception as e:
            dur_ms = (time.perf_counter() - start) * 1000
            self._logger.warning("http.request error method=%s path=%s dur_ms=%.1f err=%r",
                                 method, path, dur_ms, e)
            raise
        dur_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Response-Time-Ms"] = f"{dur_ms:.1f}"
        self._logger.debug("http.request method=%s path=%s status=%s dur_ms=%.1f",
                           method, path, response.status_code, dur_ms)
        return response
