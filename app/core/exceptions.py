"""
Base exception classes for application-wide error handling.

Every domain error carries a human-readable message, a machine-readable
error code and an optional details dict, so callers can render a
consistent payload whatever layer raised it.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input or precondition failures
    ├── NotFoundError - Referenced resource does not exist
    └── ConflictError - Request disagrees with current resource state

Usage:
    from core.exceptions import NotFoundError

    order = Order.objects.filter(number=number).first()
    if order is None:
        raise NotFoundError(
            f"Order {number} not found",
            error_code="ORDER_NOT_FOUND",
            details={"order_number": number},
        )

Note:
    ``str(error)`` prefixes the error code. Use ``error.message`` when the
    text is shown to an operator or customer verbatim.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for an API or log payload.

        Example:
            {
                "error": "Order R123456 not found",
                "error_code": "ORDER_NOT_FOUND",
                "details": {"order_number": "R123456"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation or a business precondition fails.

    Use for:
    - Missing required values (e.g. no checkout token)
    - Operations attempted in the wrong lifecycle stage
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a referenced resource is not found.

    Use for single-resource lookups where existence is expected, such as
    an order referenced by an incoming provider callback.
    """

    default_error_code: str = "NOT_FOUND"


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Use for:
    - Unique constraint violations that are not plain replays
    - Identifiers from an external system that disagree with local state

    Note:
        HTTP 409 or 400 is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
