"""Request logging middleware and the JSON log formatter.

Each request gets an ``X-Request-ID`` and two log lines (start and finish,
or start and failure) with its duration. Emails, account numbers and phone
numbers are scrubbed from every formatted message and traceback.
"""

import json
import logging
import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

PII_PATTERNS = [
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    # 13-19 digit card / account numbers, optionally grouped by spaces or dashes
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[ACCOUNT]"),
    (re.compile(r"\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{4,5}"), "[PHONE]"),
]

# Record attributes copied into the JSON line when a caller passes them in extra=.
EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_kind",
    "error_type",
    "client_ip",
    "category_id",
    "transaction_id",
    "fields",
    "count",
    "root_kinds",
    "seeded_categories",
)


def filter_pii(text: str) -> str:
    """Replace anything that looks like PII with a placeholder."""
    if not text:
        return text
    for pattern, placeholder in PII_PATTERNS:
        text = pattern.sub(placeholder, text)
    return text


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every HTTP request with an id and its duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": filter_pii(request.url.path),
        }
        started = time.perf_counter()

        logger.info(
            "Request started",
            extra={**context, "client_ip": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={**context, "duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request completed",
            extra={**context, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, PII-filtered."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }
        entry.update(
            (name, getattr(record, name))
            for name in EXTRA_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = filter_pii(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)
