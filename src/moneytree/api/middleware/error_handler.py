"""Exception handlers that turn failures into catalog-shaped JSON errors.

Every error body has the same keys: ``error_code``, ``kind``, ``message``,
``user_message``, ``suggestion`` and ``retry_allowed``. Domain errors pass
their kind and message through unchanged. Anything the domain did not raise
on purpose (including corrupted category links) becomes ``SYS_001``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from moneytree.config import settings
from moneytree.core.errors import get_error
from moneytree.core.exceptions import ErrorKind, MoneytreeError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    error_code: str,
    kind: ErrorKind | None = None,
    message: str | None = None,
) -> JSONResponse:
    entry = get_error(error_code)
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "kind": kind.value if kind else None,
            "message": message or entry["message"],
            "user_message": entry["user_message"],
            "suggestion": entry["suggestion"],
            "retry_allowed": entry["retry_allowed"],
        },
    )


def _request_extra(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: MoneytreeError) -> JSONResponse:
    """NotFound / Forbidden / InvalidState / Conflict -> 404 / 403 / 400 / 409."""
    extra = {**_request_extra(request), "error_code": exc.error_code, "error_kind": exc.kind.value}
    if settings.debug:
        extra["details"] = exc.details
    logger.warning(f"Request rejected: {exc.error_code}", extra=extra)

    return _error_response(exc.http_status, exc.error_code, exc.kind, exc.message)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed requests are a 400 listing every offending field.

    Malformed input is not a domain rule violation, so no ``kind`` is set.
    """
    problems = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'Invalid value')}"
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}", extra=_request_extra(request))

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "VAL_001",
        message=" | ".join(problems),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint failures the services did not catch first."""
    # str(exc) carries SQL and bound parameters, so only the fact is logged.
    logger.error(f"Database integrity error on {request.url.path}", extra=_request_extra(request))

    detail = str(exc.orig).lower()
    if "unique" in detail or "duplicate" in detail:
        return _error_response(status.HTTP_409_CONFLICT, "DB_002", ErrorKind.CONFLICT)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB_001")


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is a 500 that reveals nothing about the cause."""
    extra = {**_request_extra(request), "error_type": type(exc).__name__}
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS_001")
