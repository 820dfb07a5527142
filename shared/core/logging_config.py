"""
Structured logging for the restaurant API.

Every record is emitted as one JSON object carrying the service identity,
the request trace context (request id, correlation id, authenticated user)
and any ``extra_fields`` passed by the caller:

    logger.info("Order created", extra={"extra_fields": {"order_id": order.id}})
"""

import json
import logging
import logging.handlers
import os
import re
import sys
import time
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

REDACTED = "***REDACTED***"


def trace_context() -> Dict[str, str]:
    pairs = (
        ("request_id", request_id_var.get()),
        ("correlation_id", correlation_id_var.get()),
        ("user_id", user_id_var.get()),
    )
    return {key: value for key, value in pairs if value}


class StructuredFormatter(logging.Formatter):
    """One JSON document per record, shaped for ELK / CloudWatch style ingestion."""

    def __init__(self, service_name: str, version: str):
        super().__init__()
        self.service_name = service_name
        self.version = version
        self.environment = os.getenv('ENVIRONMENT', 'development')

    def format(self, record: logging.LogRecord) -> str:
        document: Dict[str, Any] = {
            "@timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "environment": self.environment,
            "version": self.version,
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        trace = trace_context()
        if trace:
            document["trace"] = trace
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            document["error"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "stacktrace": traceback.format_exception(exc_type, exc_value, exc_tb),
            }
        custom = getattr(record, 'extra_fields', None)
        if custom:
            document["custom"] = custom
        duration_ms = getattr(record, 'duration_ms', None)
        if duration_ms is not None:
            document["performance"] = {"duration_ms": round(duration_ms, 2)}
        return json.dumps(document, default=str)


class SecurityFilter(logging.Filter):
    """Masks credentials in ``extra_fields`` (at any depth) and ``key=value`` pairs in messages."""

    SENSITIVE_KEYS = ('password', 'token', 'secret', 'authorization', 'api_key')
    _INLINE = re.compile(r"(?i)\b(password|token|secret|authorization|api_key)=\S+")

    def filter(self, record: logging.LogRecord) -> bool:
        fields = getattr(record, 'extra_fields', None)
        if fields is not None:
            record.extra_fields = self._scrub(fields)
        if isinstance(record.msg, str) and '=' in record.msg:
            record.msg = self._INLINE.sub(lambda m: f"{m.group(1)}={REDACTED}", record.msg)
        return True

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: REDACTED if self._sensitive(key) else self._scrub(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._scrub(item) for item in value]
        return value

    def _sensitive(self, key: Any) -> bool:
        lowered = str(key).lower()
        return any(word in lowered for word in self.SENSITIVE_KEYS)


def setup_logging(
    service_name: str,
    level: str = "INFO",
    version: str = "1.0.0",
    enable_console: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    Install the JSON handlers on the root logger.

    Args:
        service_name: Name reported in every record
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        version: Service version reported in every record
        enable_console: Write records to stdout
        log_file: Optional path for a rotating log file
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for existing in list(root.handlers):
        root.removeHandler(existing)

    targets = []
    if enable_console:
        targets.append(logging.StreamHandler(sys.stdout))
    if log_file:
        targets.append(logging.handlers.RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5))

    formatter = StructuredFormatter(service_name=service_name, version=version)
    for handler in targets:
        handler.setFormatter(formatter)
        handler.addFilter(SecurityFilter())
        root.addHandler(handler)

    # Request lines come from RequestLoggingMiddleware instead
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    root.info(
        "Logging initialized",
        extra={'extra_fields': {'service': service_name, 'level': level, 'log_file': log_file}},
    )


class LoggerAdapter(logging.LoggerAdapter):
    """Passes caller ``extra`` through untouched; trace context is read by the formatter."""

    def process(self, msg, kwargs):
        kwargs.setdefault('extra', {})
        return msg, kwargs


def get_logger(name: str) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name), {})


def set_request_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None
) -> None:
    """Bind identifiers to the current request; ``None`` leaves a value unchanged."""
    if request_id:
        request_id_var.set(request_id)
    if correlation_id:
        correlation_id_var.set(correlation_id)
    if user_id:
        user_id_var.set(user_id)


def generate_request_id() -> str:
    return str(uuid.uuid4())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request, at a level that follows the response status
    (info below 400, warning for 4xx, error for 5xx and unhandled
    exceptions). The request id is taken from ``X-Request-ID`` when the
    client sends one and is always echoed back in that header.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get('X-Request-ID') or generate_request_id()
        request_id_var.set(request_id)
        correlation_id_var.set(request.headers.get('X-Correlation-ID'))
        user_id_var.set(None)

        logger = get_logger("restaurant.access")
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"{request.method} {request.url.path} failed",
                exc_info=True,
                extra={
                    'extra_fields': self._fields(request),
                    'duration_ms': (time.perf_counter() - started) * 1000,
                },
            )
            raise

        fields = self._fields(request)
        fields['status_code'] = response.status_code
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={'extra_fields': fields, 'duration_ms': (time.perf_counter() - started) * 1000},
        )
        response.headers['X-Request-ID'] = request_id
        return response

    @staticmethod
    def _fields(request: Request) -> Dict[str, Any]:
        route = request.scope.get('route')
        return {
            'method': request.method,
            'path': request.url.path,
            'route': getattr(route, 'path', None),
            'client_host': request.client.host if request.client else None,
        }
