"""Logging setup — request IDs and calculation context on every record.

``setup_logging`` installs one stream handler on the root logger.  Every
record it emits carries ``request_id`` (``-`` outside a request), so the
plain format can show it and ``JSONFormatter`` can emit it.

Calculation logs pass ``scenario``, ``mode``, ``payback_months`` and
``error_count`` as ``extra``; both formatters include whichever are set.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Structured fields copied from ``extra`` into the log output.
CALCULATION_FIELDS = ("scenario", "mode", "payback_months", "error_count")
CONTEXT_FIELDS = ("method", "path", "status_code", "duration_ms") + CALCULATION_FIELDS

# Polled endpoints, logged at DEBUG so they do not drown the access log.
QUIET_PATHS = frozenset({"/health"})


def _context(record: logging.LogRecord, fields: tuple[str, ...] = CONTEXT_FIELDS) -> dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in fields
        if getattr(record, key, None) is not None
    }


class RequestIdFilter(logging.Filter):
    """Stamps ``record.request_id`` from the current request context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class PlainFormatter(logging.Formatter):
    """Human format; calculation context is appended as ``key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record, CALCULATION_FIELDS)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = request_id_var.get("")
        if rid:
            entry["request_id"] = rid

        entry.update(_context(record))

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID (or keeps the caller's) and logs each response."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        try:
            return await self._timed(request, call_next, rid)
        finally:
            request_id_var.reset(token)

    async def _timed(self, request: Request, call_next, rid: str) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        response.headers["X-Request-ID"] = rid

        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        logging.getLogger("fleet_roi.access").log(
            level,
            "%s %s %s %.1fms",
            request.method,
            path,
            response.status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure the root logger once for the API or dashboard process."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(PlainFormatter(
            "%(asctime)s %(levelname)-8s [%(name)s] (%(request_id)s) %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    root.addHandler(handler)

    # The access logger above replaces uvicorn's own.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
