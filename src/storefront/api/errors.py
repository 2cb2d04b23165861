"""Map domain exceptions onto the JSON error envelope.

    ValidationError / request validation  → 400
    ObjectNotFoundError                    → 404
    InvalidOperationError                  → 409
    OSError (store unreachable)            → 503
    anything else                          → 500

Exception detail is only echoed back outside production.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.utils.logging import is_production

logger = structlog.get_logger(__name__)


def _message_of(exc: Exception) -> str:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, str) and messages:
        return messages
    return str(exc) or exc.__class__.__name__


def _error_body(message: str, exc: Exception | None = None, **extra) -> dict:
    body = {"success": False, "message": message, **extra}
    if exc is not None and not is_production():
        body["error"] = _message_of(exc)
    return body


def _field_errors(messages: dict) -> list[dict]:
    errors = []
    for field, field_messages in messages.items():
        if isinstance(field_messages, (list, tuple)):
            errors.extend({"field": field, "message": str(message)} for message in field_messages)
        else:
            errors.append({"field": field, "message": str(field_messages)})
    return errors


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    messages = exc.messages if isinstance(exc.messages, dict) else {"_entity": [str(exc.messages)]}
    return JSONResponse(
        status_code=400,
        content=_error_body("Validation error", errors=_field_errors(messages)),
    )


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content=_error_body("Validation error", errors=errors))


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_body(_message_of(exc)))


async def _invalid_state(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return JSONResponse(status_code=409, content=_error_body(_message_of(exc)))


async def _store_unavailable(request: Request, exc: OSError) -> JSONResponse:
    logger.error("Store unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=503,
        content=_error_body("Database connection not available", exc),
    )


async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content=_error_body("Internal server error", exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(InvalidOperationError, _invalid_state)
    app.add_exception_handler(OSError, _store_unavailable)
    app.add_exception_handler(Exception, _internal_error)
