"""Domain exceptions for pathconfig.

Routing itself is absence-based (no match, no callback and unknown type
tags are not errors). These exceptions cover the remaining failures:
invalid registrations, values that cannot be coerced, and a record store
that was never configured. The HTTP layer maps them in exception handlers.
"""

from typing import Any


class PathConfigException(Exception):
    """Base exception for all pathconfig errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, type tag).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PathConfigException):
    """Raised when input validation fails (e.g. empty path template)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class CoercionException(PathConfigException):
    """Raised when a read result cannot be converted to the requested type tag."""

    def __init__(self, type_tag: str, value: Any, reason: str | None = None) -> None:
        """Initialize with the tag, the offending value and an optional reason.

        Args:
            type_tag: The recognized tag that was requested (e.g. 'Integer').
            value: The raw value that failed conversion.
            reason: Optional description from the underlying converter.
        """
        message = f"Cannot convert {type(value).__name__} value to {type_tag}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            "COERCION_ERROR",
            {"type": type_tag, "value_type": type(value).__name__},
        )


class RecordStoreNotConfiguredException(PathConfigException):
    """Raised when an operation requires the SQL record store but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL record store that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
