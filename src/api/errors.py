"""Single place where an error kind becomes an HTTP status."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse
from src.core.exceptions import CatalogError
from src.core.shared_types import ErrorKind

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something broke!"

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.PIPELINE_FATAL: 500,
    ErrorKind.SOURCE_LOCAL: 500,
    ErrorKind.UNEXPECTED: 500,
}


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, 500)


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    """Response body is always {"message": ...}. Unexpected errors never leak their message."""
    if kind is ErrorKind.UNEXPECTED:
        message = GENERIC_MESSAGE
    return JSONResponse(
        status_code=status_for(kind), content=ErrorResponse(message=message).model_dump()
    )


# -- Exception handlers registered on the app --
async def catalog_error_handler(request: Request, exc: Exception) -> JSONResponse:
    kind = exc.kind if isinstance(exc, CatalogError) else ErrorKind.UNEXPECTED
    if kind is ErrorKind.VALIDATION:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    else:
        logger.error("Failed %s %s: %s", request.method, request.url.path, exc)
    return error_response(kind, str(exc))


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in errors
    )
    return error_response(ErrorKind.VALIDATION, message or "Invalid request.")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(ErrorKind.UNEXPECTED, str(exc))
