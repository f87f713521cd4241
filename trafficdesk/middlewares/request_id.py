from __future__ import annotations

import logging
import time
from contextvars import ContextVar
from typing import Iterable
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..core.config import settings

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
logger = logging.getLogger("trafficdesk.request")

# Longer client-supplied ids are replaced so log lines stay bounded.
MAX_REQUEST_ID_LENGTH = 128


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with a correlation id and log how each action ended.

    The id comes from the configured request header when the client sends a
    usable one and is echoed back on the response. Rejected form submissions
    (4xx) log at WARNING and storage failures (5xx) at ERROR, so the desk's
    action failures stand out from routine page loads. Paths listed in
    ``skip_paths`` still get an id but are not logged.
    """

    def __init__(
        self,
        app,
        header_name: str | None = None,
        skip_paths: Iterable[str] | None = None,
    ) -> None:  # type: ignore[override]
        super().__init__(app)
        self.header_name = header_name or settings.REQUEST_ID_HEADER
        self.skip_paths = frozenset(settings.REQUEST_LOG_SKIP_PATHS if skip_paths is None else skip_paths)

    def _resolve_request_id(self, request: Request) -> str:
        supplied = (request.headers.get(self.header_name) or "").strip()
        if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH and supplied.isprintable():
            return supplied
        return uuid4().hex

    def _describe(self, request: Request, duration_ms: float, **fields) -> dict:
        return {
            "extra_data": {
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query or None,
                "duration_ms": round(duration_ms, 2),
                **fields,
            }
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = self._resolve_request_id(request)
        token = request_id_ctx_var.set(request_id)
        request.state.request_id = request_id
        quiet = request.url.path in self.skip_paths
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.exception("request.failed", extra=self._describe(request, duration_ms))
                raise
            duration_ms = (time.perf_counter() - start) * 1000
            response.headers[self.header_name] = request_id
            response.headers.setdefault("X-Response-Time", f"{duration_ms:.2f}ms")
            if not quiet:
                logger.log(
                    _status_level(response.status_code),
                    "request.completed",
                    extra=self._describe(request, duration_ms, status=response.status_code),
                )
        finally:
            request_id_ctx_var.reset(token)
        return response
