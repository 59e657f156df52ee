"""
Affirm payment gateway for the platform's payment operations.

This module provides the AffirmGateway class which translates the
platform's payment operations (authorize, capture, void, credit) into
Affirm API calls and normalizes every outcome into an OperationResult.

The gateway:
- Checks lifecycle preconditions before calling Affirm
- Persists the Affirm transaction id on successful authorization
- Converts every Affirm or precondition error into a failed result
- Never retries (capture and refund are not idempotent at Affirm)

Usage:
    from payments.services import AffirmGateway

    gateway = AffirmGateway()

    result = gateway.authorize(record)
    if result.success:
        gateway.capture(result.authorization_id)
    else:
        show_error(result.message)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService

from payments.adapters import AffirmConfig, build_client
from payments.exceptions import (
    AffirmError,
    AlreadyAuthorizedError,
    MissingCheckoutTokenError,
    NotAuthorizedError,
    PaymentError,
    PaymentValidationError,
)
from payments.results import (
    APPROVED_MESSAGE,
    CAPTURED_MESSAGE,
    CREDITED_MESSAGE,
    VOIDED_MESSAGE,
    OperationResult,
)

if TYPE_CHECKING:
    from payments.adapters import AffirmClient
    from payments.models import AffirmTransaction


class AffirmGateway(BaseService):
    """
    Payment gateway over the Affirm Transactions API.

    Each operation returns an OperationResult. Provider errors never
    propagate past this class: they become failed results carrying the
    provider's message verbatim.

    Usage:
        gateway = AffirmGateway(config=AffirmConfig.from_settings())
        result = gateway.credit(1000, "N330-Z6D4")
        result.message  # "Transaction Credited with 1000"
    """

    def __init__(
        self,
        config: AffirmConfig | None = None,
        client: AffirmClient | None = None,
    ):
        if client is None:
            client = build_client(config or AffirmConfig.from_settings())
        self.client = client

    # =========================================================================
    # Core Operations
    # =========================================================================

    def authorize(self, record: AffirmTransaction) -> OperationResult:
        """
        Authorize the checkout behind a transaction record.

        On success the Affirm transaction id is written onto the record
        (once; see AffirmTransaction.assign_transaction_id).

        Args:
            record: Record carrying the checkout token, not yet authorized

        Returns:
            OperationResult with authorization_id set to the transaction id
        """
        logger = self.get_logger()

        try:
            if not record.checkout_token:
                raise MissingCheckoutTokenError(
                    "Checkout token is required for authorization",
                    details={"record_id": str(record.pk)},
                )
            if record.transaction_id:
                raise AlreadyAuthorizedError(
                    "The transaction has already been authorized.",
                    details={
                        "record_id": str(record.pk),
                        "transaction_id": record.transaction_id,
                    },
                )

            snapshot = self.client.authorize(record.checkout_token)
            record.assign_transaction_id(snapshot.id)

        except (AffirmError, PaymentValidationError) as e:
            return self._declined("authorize", e)

        logger.info(
            "Affirm transaction approved",
            extra={
                "record_id": str(record.pk),
                "transaction_id": snapshot.id,
                "provider_status_code": snapshot.provider_status_code,
            },
        )

        return OperationResult.approved(
            APPROVED_MESSAGE,
            authorization_id=snapshot.id,
            amount=snapshot.amount,
            params={"provider_status_code": snapshot.provider_status_code},
        )

    def capture(self, transaction_id: str | None) -> OperationResult:
        """
        Capture an authorized transaction.

        The capture event's own id is reported in params; the
        transaction id stays the authorization id.
        """
        try:
            self._require_authorized(transaction_id, "capture")
            event = self.client.capture(transaction_id)
        except (AffirmError, PaymentValidationError) as e:
            return self._declined("capture", e)

        self.get_logger().info(
            "Affirm transaction captured",
            extra={"transaction_id": transaction_id, "event_id": event.id},
        )

        return OperationResult.approved(
            CAPTURED_MESSAGE,
            authorization_id=transaction_id,
            amount=event.amount,
            params={"event_id": event.id},
        )

    def void(self, transaction_id: str | None) -> OperationResult:
        """Void an authorized, uncaptured transaction."""
        try:
            self._require_authorized(transaction_id, "void")
            event = self.client.void(transaction_id)
        except (AffirmError, PaymentValidationError) as e:
            return self._declined("void", e)

        self.get_logger().info(
            "Affirm transaction voided",
            extra={"transaction_id": transaction_id, "event_id": event.id},
        )

        return OperationResult.approved(
            VOIDED_MESSAGE,
            authorization_id=transaction_id,
            params={"event_id": event.id},
        )

    def credit(self, amount: int, transaction_id: str | None) -> OperationResult:
        """
        Refund part or all of a captured transaction.

        Args:
            amount: Amount to refund in minor units
            transaction_id: Affirm transaction ID

        Returns:
            OperationResult with authorization_id set to the refund event id
        """
        try:
            self._require_authorized(transaction_id, "credit")
            if amount is None or amount <= 0:
                raise PaymentValidationError(
                    "Refund amount must be positive",
                    details={"amount": amount},
                )
            event = self.client.refund(transaction_id, amount)
        except (AffirmError, PaymentValidationError) as e:
            return self._declined("credit", e)

        self.get_logger().info(
            "Affirm transaction credited",
            extra={
                "transaction_id": transaction_id,
                "event_id": event.id,
                "amount": amount,
            },
        )

        return OperationResult.approved(
            CREDITED_MESSAGE.format(amount=amount),
            authorization_id=event.id,
            amount=amount,
            params={"transaction_id": transaction_id},
        )

    # =========================================================================
    # Composite Operations
    # =========================================================================

    def purchase(self, record: AffirmTransaction) -> OperationResult:
        """
        Authorize and immediately capture.

        Returns the authorization failure unchanged, otherwise the
        capture result.
        """
        authorized = self.authorize(record)
        if not authorized.success:
            return authorized
        return self.capture(authorized.authorization_id)

    def try_void(self, transaction_id: str | None) -> OperationResult | None:
        """
        Void the transaction only if Affirm still reports it as authorized.

        Returns:
            The void result, a failed result if the read failed, or None
            when the transaction is not voidable and nothing was attempted
        """
        try:
            self._require_authorized(transaction_id, "try_void")
            snapshot = self.client.read_transaction(transaction_id)
        except (AffirmError, PaymentValidationError) as e:
            return self._declined("try_void", e)

        if snapshot.status != "authorized":
            self.get_logger().info(
                "Affirm transaction not voidable",
                extra={"transaction_id": transaction_id, "status": snapshot.status},
            )
            return None

        return self.void(transaction_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _require_authorized(transaction_id: str | None, operation: str) -> None:
        if not transaction_id:
            raise NotAuthorizedError(
                f"Cannot {operation} a transaction that was never authorized",
                details={"operation": operation},
            )

    def _declined(self, operation: str, error: PaymentError) -> OperationResult:
        self.get_logger().warning(
            "Affirm operation declined",
            extra={"operation": operation, **error.to_dict()},
        )
        return OperationResult.from_error(error)
