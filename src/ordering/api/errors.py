"""Map domain exceptions onto HTTP responses in the API envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

ERROR_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    InvalidOperationError: 400,
    ObjectNotFoundError: 404,
}


def status_code_for(exc: Exception) -> int:
    for exc_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return 500


def error_message(exc: Exception) -> str:
    """A single human-readable message for a domain exception.

    Validation errors carry ``{field: [messages]}``; the first message of
    the first field is used, e.g. ``"Cart is empty"``.
    """
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        for field_messages in messages.values():
            if isinstance(field_messages, list | tuple) and field_messages:
                return str(field_messages[0])
            if field_messages:
                return str(field_messages)
    if messages:
        return str(messages)
    return str(exc) or exc.__class__.__name__


def _envelope(status_code: int, message: str, error=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": error},
    )


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_code_for(exc)
    messages = getattr(exc, "messages", None)
    error = messages if isinstance(messages, dict) else exc.__class__.__name__
    logger.info(
        "Request rejected",
        path=request.url.path,
        status_code=status_code,
        reason=error_message(exc),
    )
    return _envelope(status_code, error_message(exc), error)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return _envelope(400, "Invalid request", errors)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return _envelope(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type in ERROR_STATUS_CODES:
        app.add_exception_handler(exc_type, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
