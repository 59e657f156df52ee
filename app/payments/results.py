"""
Uniform result contract for Affirm payment operations.

Every gateway operation returns an OperationResult. Provider rejections
and precondition failures become failed results carrying the error's
message verbatim, so callers never handle provider exceptions.

Usage:
    from payments.results import OperationResult, APPROVED_MESSAGE

    result = OperationResult.approved(APPROVED_MESSAGE, authorization_id=snapshot.id)

    try:
        client.void(transaction_id)
    except AffirmError as e:
        result = OperationResult.from_error(e)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from payments.exceptions import PaymentError


APPROVED_MESSAGE = "Transaction Approved"
CAPTURED_MESSAGE = "Transaction Captured"
VOIDED_MESSAGE = "Transaction Voided"
CREDITED_MESSAGE = "Transaction Credited with {amount}"


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single gateway operation.

    Attributes:
        success: Whether the operation completed at the provider
        message: Operation message on success, provider error text on failure
        authorization_id: Provider id produced by the operation, if any
        amount: Amount involved in minor units (e.g. 42499 for $424.99), if
            the operation carries one. Affirm reports amounts this way and the
            gateway passes them through unconverted; use
            payments.ledger.minor_to_major for a decimal in the order currency.
        params: Extra context (error code, provider response) for callers
    """

    success: bool
    message: str
    authorization_id: str | None = None
    amount: int | None = None
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.success and not self.message:
            raise ValueError("Failed results require a message")

    @classmethod
    def approved(
        cls,
        message: str,
        authorization_id: str | None = None,
        amount: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> OperationResult:
        return cls(
            success=True,
            message=message,
            authorization_id=authorization_id,
            amount=amount,
            params=params or {},
        )

    @classmethod
    def from_error(cls, error: PaymentError) -> OperationResult:
        """
        Build a failed result from a provider or precondition error.

        The message is ``error.message`` (never the code-prefixed
        ``str(error)``). When the provider sent no text, the error
        code stands in so the message is never empty.
        """
        return cls(
            success=False,
            message=error.message or error.error_code,
            params={"error_code": error.error_code, **error.details},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "authorization_id": self.authorization_id,
            "amount": self.amount,
            "params": dict(self.params),
        }
