"""JSON log lines and request correlation for the calculation API."""

import json
import logging
import os
import time
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response

CORRELATION_HEADER = "X-Correlation-Id"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

access_logger = logging.getLogger("app.access")


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    Records are tagged with the service name and the correlation id of the
    request being served; a `fields` dict passed through `extra` is merged in.
    """

    def __init__(self, service: Optional[str] = None) -> None:
        super().__init__()
        self.service = service or os.getenv("SERVICE_NAME", "calculation-api")

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": correlation_id_var.get() or None,
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update(fields)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps({k: v for k, v in payload.items() if v is not None}, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Send root logger output to stderr as JSON lines."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level.upper())
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)


def setup_observability(app: FastAPI, level: str = "INFO") -> None:
    setup_logging(level)

    @app.middleware("http")
    async def correlate_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        # a caller-supplied id wins
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid4().hex
        token = correlation_id_var.set(correlation_id)
        started = time.perf_counter()
        fields = {"method": request.method, "path": request.url.path}
        try:
            response = await call_next(request)
            fields["status"] = response.status_code
            fields["latency_ms"] = round((time.perf_counter() - started) * 1000, 2)
            access_logger.info("request completed", extra={"fields": fields})
        except Exception:
            access_logger.exception("request failed", extra={"fields": fields})
            raise
        finally:
            correlation_id_var.reset(token)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
