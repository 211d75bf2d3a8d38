"""Error Handlers — envelope rendering outside the happy path.

Tests cover:
    - request context: numeric path id and operation from the HTTP method
    - unhandled exceptions answer 500 INTERNAL_ERROR without leaking the message
    - body parsing errors reuse the {field, message} detail shape
"""

import json

from fastapi.exceptions import RequestValidationError
from starlette.requests import Request

from catalog.api.error_handlers import (
    generic_error_handler, request_context, validation_error_handler,
    violations_from,
)
from catalog.core.domain_types import FieldViolation


def _request(method: str, path: str, **path_params) -> Request:
    return Request({
        "type": "http",
        "method": method,
        "path": path,
        "path_params": path_params,
        "headers": [],
        "query_string": b"",
    })


def test_context_reads_path_id_and_operation():
    context = request_context(_request("PUT", "/api/v1/products/7", product_id="7"))
    assert context.product_id == 7
    assert context.operation == "update"


def test_context_ignores_non_numeric_path_id():
    context = request_context(_request("GET", "/api/v1/products/x", product_id="x"))
    assert context.product_id is None
    assert context.operation == "get"


async def test_unhandled_exception_renders_internal_error():
    res = await generic_error_handler(
        _request("DELETE", "/api/v1/products/3", product_id="3"),
        RuntimeError("connection string with password"),
    )
    assert res.status_code == 500
    error = json.loads(res.body)["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["category"] == "internal"
    assert error["message"] == "An unexpected error occurred"
    assert error["context"] == {"product_id": 3, "operation": "delete"}
    assert "password" not in res.body.decode()


def test_violations_drop_body_prefix():
    exc = RequestValidationError([
        {"loc": ("body", "cost_price"), "msg": "Input should be a valid decimal",
         "type": "decimal_parsing"},
        {"loc": ("body",), "msg": "Field required", "type": "missing"},
    ])
    assert violations_from(exc) == [
        FieldViolation("cost_price", "Input should be a valid decimal"),
        FieldViolation("body", "Field required"),
    ]


async def test_validation_error_uses_field_violation_shape():
    exc = RequestValidationError([
        {"loc": ("body", "stock"), "msg": "Input should be a valid integer",
         "type": "int_parsing"},
    ])
    res = await validation_error_handler(_request("POST", "/api/v1/products"), exc)
    assert res.status_code == 400
    error = json.loads(res.body)["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"] == [
        {"field": "stock", "message": "Input should be a valid integer"},
    ]
    assert error["context"]["operation"] == "create"
