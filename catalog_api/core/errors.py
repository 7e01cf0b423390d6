"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {success: false, message, error?}
    - DatabaseError derives status and message from a DbErrorKind; every kind is handled

Design Decisions:
    - Single hierarchy with CatalogError base: FastAPI global handler catches all (uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from catalog_api.core.domain_types import DbErrorKind


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    field: str | None = None
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
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.detail = detail

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        response = {"success": False, "message": self.message}
        if self.detail:
            response["error"] = self.detail
        return response


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(CatalogError):
    """Input is well-formed but refers to something unusable (e.g. a missing category)."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400, detail,
        )
        self.field = field


class ResourceNotFoundError(CatalogError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(CatalogError):
    """Uniqueness or referential-integrity rule would be violated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

def describe_db_error(
    kind: DbErrorKind, field: str | None = None,
) -> tuple[int, str, ErrorCategory, ErrorSeverity]:
    """Map a persistence failure kind to (status, message, category, severity)."""
    if kind is DbErrorKind.UNIQUE_VIOLATION:
        return (
            409, f"A record with this {field or 'value'} already exists",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
        )
    if kind is DbErrorKind.NOT_FOUND:
        return (
            404, "Record not found",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING,
        )
    if kind is DbErrorKind.FOREIGN_KEY_VIOLATION:
        return (
            400, "Referenced record does not exist",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )
    if kind is DbErrorKind.OTHER:
        return (
            500, "Database error occurred",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL,
        )
    raise ValueError(f"Unhandled database error kind: {kind!r}")


class DatabaseError(CatalogError):
    """Database operation failed."""
    def __init__(
        self,
        kind: DbErrorKind,
        operation: str,
        field: str | None = None,
        context: ErrorContext | None = None,
    ):
        status, message, category, severity = describe_db_error(kind, field)
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, f"DATABASE_{kind.name}", category, severity, ctx, status,
        )
        self.kind = kind
        self.operation = operation
        self.field = field
