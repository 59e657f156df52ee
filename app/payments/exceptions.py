"""
Payment-specific exceptions for Affirm payment operations.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentValidationError - Payment validation failures
    │   └── PreconditionError - Detected before calling the provider
    │       ├── AlreadyAuthorizedError - Record already carries a transaction id
    │       ├── MissingCheckoutTokenError - No checkout token to authorize
    │       ├── NotAuthorizedError - No transaction id to act on
    │       └── TransactionIdConflictError - Transaction id stored on another record
    └── PaymentProcessingError - Payment processing failures
        └── AffirmError - Base for all Affirm errors
            └── AffirmRequestError - Any rejection by the provider
                └── AffirmConnectionError - Transport failure (transient)
                    └── AffirmTimeoutError - Call timed out (transient)

    OrderNotFoundError - Callback references an unknown order (inherits NotFoundError)
    CheckoutMismatchError - Provider snapshot disagrees with the callback (inherits ConflictError)

Usage:
    from payments.exceptions import AffirmRequestError, PreconditionError

    try:
        client.capture(transaction_id)
    except AffirmRequestError as e:
        # e.message is the provider's text, shown to the operator verbatim
        return OperationResult.from_error(e)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
)

if TYPE_CHECKING:
    from typing import Any


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    Example:
        try:
            gateway.authorize(record)
        except PaymentError as e:
            logger.error("Payment operation failed", extra=e.to_dict())
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentValidationError(PaymentError):
    """
    Raised when payment validation fails.

    Use for:
    - Invalid amounts (non-positive refunds)
    - Missing configuration
    - Lifecycle rule violations
    """

    default_error_code: str = "PAYMENT_VALIDATION_ERROR"


class PaymentProcessingError(PaymentError):
    """
    Raised when payment processing fails at the provider.
    """

    default_error_code: str = "PAYMENT_PROCESSING_ERROR"


# -----------------------------------------------------------------------------
# Preconditions (checked before any provider call)
# -----------------------------------------------------------------------------


class PreconditionError(PaymentValidationError):
    """
    Raised when an operation is attempted in the wrong lifecycle stage.

    The gateway reports these exactly like provider rejections, as a
    failed OperationResult, so callers handle a single failure shape.
    """

    default_error_code: str = "PAYMENT_PRECONDITION_FAILED"


class AlreadyAuthorizedError(PreconditionError):
    """
    Raised when authorizing a record that already has a transaction id.

    The transaction id is written at most once; a second authorization
    would orphan the first provider transaction.
    """

    default_error_code: str = "ALREADY_AUTHORIZED"


class MissingCheckoutTokenError(PreconditionError):
    """Raised when authorizing a record without a checkout token."""

    default_error_code: str = "MISSING_CHECKOUT_TOKEN"


class NotAuthorizedError(PreconditionError):
    """
    Raised when capture/void/credit is requested without a transaction id.

    A blank transaction id means the record never completed authorization.
    """

    default_error_code: str = "NOT_AUTHORIZED"


class TransactionIdConflictError(PreconditionError):
    """
    Raised when Affirm returns a transaction id already stored on another record.

    The id is unique across records, so the write is refused and the
    record keeps a NULL transaction id.
    """

    default_error_code: str = "TRANSACTION_ID_CONFLICT"


# =============================================================================
# Affirm-Specific Exceptions
# =============================================================================


class AffirmError(PaymentProcessingError):
    """
    Base exception for all Affirm-related errors.

    Attributes:
        status_code: HTTP status returned by Affirm (None for transport errors)
        affirm_code: Affirm's error code from the response body, if any
        is_retryable: Whether the failure is transient

    Note:
        is_retryable is informational. The gateway never retries: capture
        and refund are not idempotent at the provider.
    """

    default_error_code: str = "AFFIRM_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        affirm_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if affirm_code:
            details["affirm_code"] = affirm_code
        super().__init__(message, error_code=error_code, details=details)
        self.status_code = status_code
        self.affirm_code = affirm_code


class AffirmRequestError(AffirmError):
    """
    Affirm rejected the request.

    Raised for any non-2xx response or unusable response body. The
    message is the provider's own text, e.g.
    "The transaction has already been authorized."
    """

    default_error_code: str = "AFFIRM_REQUEST_ERROR"


class AffirmConnectionError(AffirmRequestError):
    """
    Affirm could not be reached.

    The operation may or may not have reached the provider; it is
    always reported as a failure.
    """

    default_error_code: str = "AFFIRM_UNAVAILABLE"
    is_retryable: bool = True


class AffirmTimeoutError(AffirmConnectionError):
    """
    Affirm did not answer within AFFIRM_API_TIMEOUT_SECONDS.

    Fails closed: a timed-out authorize or capture is never treated
    as a success.
    """

    default_error_code: str = "AFFIRM_TIMEOUT"


# =============================================================================
# Reconciliation Exceptions
# =============================================================================


class OrderNotFoundError(NotFoundError):
    """
    Raised when a checkout callback references an unknown order.

    Indicates a forged or stale confirmation request and is always
    surfaced to the caller.
    """

    default_error_code: str = "ORDER_NOT_FOUND"


class CheckoutMismatchError(ConflictError):
    """
    Raised when the provider snapshot does not belong to the callback.

    Example:
        raise CheckoutMismatchError(
            "Checkout token does not match the Affirm transaction",
            details={"checkout_token": token, "checkout_id": snapshot.checkout_id},
        )
    """

    default_error_code: str = "CHECKOUT_MISMATCH"


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Payment domain
    "PaymentError",
    "PaymentValidationError",
    "PaymentProcessingError",
    # Preconditions
    "PreconditionError",
    "AlreadyAuthorizedError",
    "MissingCheckoutTokenError",
    "NotAuthorizedError",
    "TransactionIdConflictError",
    # Affirm-specific
    "AffirmError",
    "AffirmRequestError",
    "AffirmConnectionError",
    "AffirmTimeoutError",
    # Reconciliation
    "OrderNotFoundError",
    "CheckoutMismatchError",
]
