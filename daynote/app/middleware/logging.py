from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.logging import request_id_var
from ..metrics import REQUEST_COUNT, REQUEST_ERRORS, REQUEST_LATENCY

REQUEST_ID_HEADER = "X-Request-ID"

# Probes and scrapes are logged at DEBUG only
_QUIET_PATHS = frozenset({"/healthz", "/readyz", "/metrics"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id, log its outcome and feed request metrics.

    An incoming ``X-Request-ID`` is reused so ids survive a proxy hop; the
    id is echoed back on the response and exposed to service loggers through
    ``request_id_var`` while the request runs.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self._logger = logging.getLogger("daynote.request")

    async def dispatch(  # type: ignore[override]
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._finish(request, 500, started, failed=True)
            raise
        else:
            self._finish(request, response.status_code, started)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)

    def _finish(
        self,
        request: Request,
        status: int,
        started: float,
        *,
        failed: bool = False,
    ) -> None:
        duration = time.perf_counter() - started
        path = route_template(request)
        method = request.method
        status_label = str(status)

        REQUEST_COUNT.labels(method=method, path=path, status=status_label).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration)
        if status >= 500:
            REQUEST_ERRORS.labels(method=method, path=path, status=status_label).inc()

        extra = {
            "path": path,
            "method": method,
            "status": status,
            "duration_ms": round(duration * 1000, 3),
        }
        if failed:
            self._logger.error("request failed", extra=extra, exc_info=True)
        elif path in _QUIET_PATHS:
            self._logger.debug("probe served", extra=extra)
        elif status >= 500:
            self._logger.error("request complete", extra=extra)
        else:
            self._logger.info("request complete", extra=extra)


def route_template(request: Request) -> str:
    """Matched route path such as ``/api/v1/weeks/{week_start}/entries``.

    Falls back to the raw URL path when no route matched, e.g. on 404.
    """

    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return str(template) if template else request.url.path


__all__ = ["REQUEST_ID_HEADER", "RequestLoggingMiddleware", "route_template"]
