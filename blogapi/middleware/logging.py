"""
Structured access logging for the Blog API.

Every log line is rendered as one JSON object carrying the request id of
the request being served. The access middleware adds one line per request,
naming the GraphQL operation for ``/graphql`` calls.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from blogapi.utils.metrics import METRICS_PATH

HEALTH_PATH = "/health"
REQUEST_ID_HEADER = "X-Request-ID"

# health checks and scrapes would drown the access log
SKIPPED_PATHS = (HEALTH_PATH, METRICS_PATH)

# set by OperationMetricsExtension on request.state
GRAPHQL_OPERATION_ATTR = "graphql_operation"

ACCESS_FIELDS = ("method", "path", "operation", "status_code", "duration_ms", "client_ip", "error")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Request id of the request being served, or ``""`` outside a request."""
    return request_id_var.get()


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class StructuredFormatter(logging.Formatter):
    """Render records as single-line JSON, including any access-log fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }
        entry.update({field: getattr(record, field) for field in ACCESS_FIELDS if hasattr(record, field)})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def client_address(request: Request) -> str:
    """First address of ``X-Forwarded-For``, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def access_log_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns each request an id and writes one access line when it completes.

    The id is taken from the ``X-Request-ID`` header when the caller sends
    one and is echoed back on the response. Requests to ``/health`` and
    ``/metrics`` are not logged.
    """

    def __init__(self, app: ASGIApp, logger_name: str = "blogapi.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            self.log_access(request, 500, started, error=str(e))
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        self.log_access(request, response.status_code, started)
        return response

    def log_access(self, request: Request, status_code: int, started: float, error: str | None = None) -> None:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        operation = getattr(request.state, GRAPHQL_OPERATION_ATTR, None)

        target = f"{path} [{operation}]" if operation else path
        message = f"{request.method} {target} - {status_code} ({duration_ms}ms)"
        if error:
            message = f"{message} - Error: {error}"

        fields = {
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "client_ip": client_address(request),
        }
        if operation:
            fields["operation"] = operation
        if error:
            fields["error"] = error

        self.logger.log(access_log_level(status_code), message, extra=fields)


def setup_structured_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """
    Replace the root handlers with a single stderr handler.

    Args:
        log_level: Level for the root, ``blogapi`` and access loggers
        json_format: JSON lines when true, a plain text line otherwise
    """
    level = getattr(logging, log_level.upper())

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("blogapi").setLevel(level)
    for name in ("uvicorn", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)
