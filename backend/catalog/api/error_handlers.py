"""Error Handlers — render every failure as the catalog error envelope.

Invariants:
    - Every response body is {"error": {...}} built by CatalogError.to_response()
    - Malformed request bodies answer 400 VALIDATION_ERROR with the same
      {field, message} details as field-rule violations
    - Unhandled exceptions answer 500 INTERNAL_ERROR; the exception text is
      logged, never returned
    - Log records carry product_id and operation taken from the request

Design Decisions:
    - Operation derived from the HTTP method: errors raised before the service
      runs (body parsing, unexpected failures) still name the operation
    - 409 conflicts and 4xx rejections logged at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from catalog.core.domain_types import FieldViolation
from catalog.core.errors import (
    CatalogError, ErrorContext, FieldValidationError, UnexpectedError,
)

logger = logging.getLogger(__name__)

_OPERATIONS = {
    "GET": "get", "POST": "create", "PUT": "update", "DELETE": "delete",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


def request_context(request: Request) -> ErrorContext:
    """ErrorContext for a request: path product id (if numeric) and operation."""
    raw_id = request.path_params.get("product_id")
    product_id = int(raw_id) if raw_id is not None and str(raw_id).isdigit() else None
    return ErrorContext(
        product_id=product_id, operation=_OPERATIONS.get(request.method),
    )


def violations_from(exc: RequestValidationError) -> list[FieldViolation]:
    """Pydantic errors as field violations; the "body" location prefix is dropped."""
    violations = []
    for e in exc.errors():
        loc = [str(part) for part in e["loc"] if part != "body"]
        violations.append(FieldViolation(".".join(loc) or "body", e["msg"]))
    return violations


async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.context.operation is None:
        exc.context = request_context(request)
    _log(exc, request)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = FieldValidationError(violations_from(exc), request_context(request))
    _log(error, request)
    return JSONResponse(status_code=error.http_status, content=error.to_response())


async def generic_error_handler(request: Request, exc: Exception):
    error = UnexpectedError(request_context(request))
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra=_log_extra(error, request),
    )
    return JSONResponse(status_code=error.http_status, content=error.to_response())


def _log(error: CatalogError, request: Request) -> None:
    level = logging.ERROR if error.http_status >= 500 else logging.WARNING
    logger.log(level, f"{error.code}: {error.message}", extra=_log_extra(error, request))


def _log_extra(error: CatalogError, request: Request) -> dict:
    return {
        "error_code": error.code,
        "product_id": error.context.product_id,
        "operation": error.context.operation,
        "path": request.url.path,
    }
