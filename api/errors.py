"""
timetrack-api/api/errors.py
Traduction des erreurs du domaine en réponses HTTP
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.schemas import ErrorResponse
from domain.exceptions import (
    CapExceeded,
    DuplicateEmail,
    Forbidden,
    InvalidProjectTransition,
    NotFoundError,
    ProjectArchived,
    TimetrackError,
    ValidationError
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (CapExceeded, status.HTTP_400_BAD_REQUEST),
    (ProjectArchived, status.HTTP_400_BAD_REQUEST),
    (InvalidProjectTransition, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (DuplicateEmail, status.HTTP_409_CONFLICT),
]


def _error_body(code: str, message: str, field: str = None) -> dict:
    return ErrorResponse(code=code, message=message, field=field or None).model_dump(exclude_none=True)


def status_for(error: TimetrackError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: TimetrackError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content=_error_body(exc.code, exc.message, getattr(exc, "field", None))
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or None
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(ValidationError.code, message, field)
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    code = {401: "UNAUTHORIZED", 403: "FORBIDDEN", 404: "NOT_FOUND"}.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"❌ Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("INTERNAL_ERROR", "Internal server error")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TimetrackError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
