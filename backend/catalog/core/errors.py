"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CatalogError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from catalog.core.domain_types import FieldViolation


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    product_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "product_id": self.context.product_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldValidationError(CatalogError):
    """One or more field-level constraints violated."""
    def __init__(
        self, violations: list[FieldViolation], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Invalid product data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = violations

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [v.to_dict() for v in self.violations]
        return response


class PricingOrderError(CatalogError):
    """Sale or promotional price does not exceed the computed price."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "SalePrice and PromotionalPrice must be greater than Price.",
            "PRICING_ORDER_VIOLATED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class MarginError(CatalogError):
    """Profit margin below the catalog floor."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "ProfitMargin must be at least 55%.",
            "PROFIT_MARGIN_TOO_LOW", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class IdMismatchError(CatalogError):
    """Path id and body id disagree on update."""
    def __init__(
        self, path_id: int, body_id: int | None, context: ErrorContext | None = None,
    ):
        super().__init__(
            "Product ID mismatch.", "PRODUCT_ID_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.path_id = path_id
        self.body_id = body_id


class ResourceNotFoundError(CatalogError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CatalogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class UnexpectedError(CatalogError):
    """Unhandled failure; the message never carries the underlying exception."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class ConcurrencyError(CatalogError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
