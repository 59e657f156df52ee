"""
Checkout reconciler for Affirm checkout callbacks.

This module provides the CheckoutReconciler class which turns Affirm's
"checkout confirmed" and "checkout canceled" browser callbacks into
local payment state, exactly once per checkout token.

The reconciler:
- Reads the authoritative transaction from Affirm before writing anything
- Records one Payment and one AffirmTransaction per (order, checkout token)
- Treats a replayed confirmation as a no-op
- Tells the caller where to route the customer next

Usage:
    from payments.services import CheckoutReconciler

    result = CheckoutReconciler().confirm(
        order_ref="R123456789",
        checkout_token="TKLKJ71GOP9YSASU",
        payment_method_ref="affirm",
    )
    return redirect(result.redirect_url)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import IntegrityError, transaction

from core.services import BaseService

from payments.adapters import AffirmConfig, build_client
from payments.exceptions import (
    AffirmRequestError,
    CheckoutMismatchError,
    OrderNotFoundError,
    TransactionIdConflictError,
)
from payments.ledger import minor_to_major, order_ledger
from payments.models import AffirmTransaction
from payments.state_machines import CheckoutConfirmationState, CheckoutRoute

if TYPE_CHECKING:
    from checkout.models import Order, Payment
    from payments.adapters import AffirmClient, TransactionSnapshot
    from payments.ledger import OrderLedger


INVALID_CONFIRMATION_NOTICE = "Invalid order confirmation data passed in"
ORDER_ALREADY_COMPLETED_NOTICE = "Order already completed."
PAYMENT_CANCELED_NOTICE = "Affirm payment was canceled"


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class ReconciliationResult:
    """
    Outcome of a checkout callback.

    Attributes:
        state: Checkout confirmation state after the callback
        route: Where the customer should be sent next
        order: The order the callback referenced (None if cancel could not find it)
        payment: Payment recorded by this or an earlier confirmation
        transaction: AffirmTransaction recorded by this or an earlier confirmation
        created: Whether this call created the payment
        notice: Message for the customer, if any
    """

    state: str
    route: str
    order: Order | None = None
    payment: Payment | None = None
    transaction: AffirmTransaction | None = None
    created: bool = False
    notice: str | None = None

    @property
    def redirect_url(self) -> str:
        """Resolve the route to a URL using the routing settings."""
        if self.route == CheckoutRoute.ORDER_DETAIL and self.order is not None:
            return settings.ORDER_DETAIL_URL.format(number=self.order.number)
        if self.route == CheckoutRoute.CHECKOUT_CONFIRMATION:
            return settings.CHECKOUT_STATE_URL.format(state="confirm")
        return settings.CHECKOUT_STATE_URL.format(state="cart")


# =============================================================================
# Checkout Reconciler
# =============================================================================


class CheckoutReconciler(BaseService):
    """
    Converts Affirm checkout callbacks into durable local payment state.

    State Flow:
        PENDING_CONFIRMATION → CONFIRMED (payment recorded, or replay)
        PENDING_CONFIRMATION → ABANDONED (missing token, or cancel)

    Idempotency:
        The (order, checkout_token) unique constraint on AffirmTransaction
        is the only concurrency control. The record is locked (or inserted
        in a savepoint) before the payment is written; a record that already
        carries a payment means the confirmation is a replay and records
        nothing. A record created at checkout initiation, with no payment
        yet, receives the transaction id and the payment.

    Usage:
        reconciler = CheckoutReconciler()
        result = reconciler.confirm(order_ref, checkout_token, "affirm")
        result = reconciler.cancel(order_ref)
    """

    def __init__(
        self,
        client: AffirmClient | None = None,
        ledger: OrderLedger | None = None,
        config: AffirmConfig | None = None,
    ):
        self._client = client
        self._config = config
        self.ledger = ledger or order_ledger

    @property
    def client(self) -> AffirmClient:
        """Affirm client, built from settings on first use."""
        if self._client is None:
            self._client = build_client(self._config or AffirmConfig.from_settings())
        return self._client

    # =========================================================================
    # Callbacks
    # =========================================================================

    def confirm(
        self,
        order_ref: str,
        checkout_token: str | None,
        payment_method_ref: str = "",
    ) -> ReconciliationResult:
        """
        Handle a "checkout confirmed" callback.

        Args:
            order_ref: Order number from the callback
            checkout_token: One-time Affirm checkout token
            payment_method_ref: Payment method the customer checked out with

        Returns:
            ReconciliationResult routing to cart, order detail or confirmation

        Raises:
            OrderNotFoundError: No order with that number
            CheckoutMismatchError: Affirm's transaction belongs to another
                checkout or order
            AffirmError: Affirm could not be read
        """
        logger = self.get_logger()
        order = self.ledger.get_order(order_ref)

        log_context = {
            "order_number": order.number,
            "checkout_token": checkout_token,
        }

        if not checkout_token:
            logger.info("Affirm confirmation abandoned: no checkout token", extra=log_context)
            return ReconciliationResult(
                state=CheckoutConfirmationState.ABANDONED,
                route=CheckoutRoute.CART,
                order=order,
                notice=INVALID_CONFIRMATION_NOTICE,
            )

        if self.ledger.is_completed(order):
            logger.info("Affirm confirmation for completed order", extra=log_context)
            return ReconciliationResult(
                state=CheckoutConfirmationState.CONFIRMED,
                route=CheckoutRoute.ORDER_DETAIL,
                order=order,
                notice=ORDER_ALREADY_COMPLETED_NOTICE,
            )

        # Provider read stays outside the database transaction
        snapshot = self.client.read_transaction(checkout_token)
        self._validate_snapshot(snapshot, order, checkout_token)

        return self._record_payment(order, checkout_token, payment_method_ref, snapshot)

    def cancel(self, order_ref: str | None) -> ReconciliationResult:
        """
        Handle a "checkout canceled" callback.

        Never touches the ledger and never fails; an unknown order only
        means the result carries no order.
        """
        order = None
        if order_ref:
            try:
                order = self.ledger.get_order(order_ref)
            except OrderNotFoundError:
                order = None

        self.get_logger().info(
            "Affirm checkout canceled",
            extra={"order_number": order_ref, "order_found": order is not None},
        )

        return ReconciliationResult(
            state=CheckoutConfirmationState.ABANDONED,
            route=CheckoutRoute.CART,
            order=order,
            notice=PAYMENT_CANCELED_NOTICE,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _validate_snapshot(
        snapshot: TransactionSnapshot,
        order: Order,
        checkout_token: str,
    ) -> None:
        """
        Check that Affirm's transaction belongs to this checkout and order.

        Fields Affirm did not send are not compared.

        Raises:
            CheckoutMismatchError: checkout_id or order_ref disagree
            AffirmRequestError: Affirm sent no amount
        """
        details = {
            "order_number": order.number,
            "checkout_token": checkout_token,
            "transaction_id": snapshot.id,
        }

        if snapshot.checkout_id and snapshot.checkout_id != checkout_token:
            raise CheckoutMismatchError(
                "Checkout token does not match the Affirm transaction",
                details={**details, "checkout_id": snapshot.checkout_id},
            )

        if snapshot.order_ref and snapshot.order_ref != order.number:
            raise CheckoutMismatchError(
                "Order does not match the Affirm transaction",
                details={**details, "order_ref": snapshot.order_ref},
            )

        if snapshot.amount is None:
            raise AffirmRequestError(
                "Affirm transaction has no amount",
                details=details,
            )

    def _record_payment(
        self,
        order: Order,
        checkout_token: str,
        payment_method_ref: str,
        snapshot: TransactionSnapshot,
    ) -> ReconciliationResult:
        """
        Attach one payment to the (order, checkout_token) record.

        The record is created here unless checkout initiation already
        created it; either way it is locked before the payment is written.
        A record that already has a payment means this is a replay.
        """
        logger = self.get_logger()
        amount = minor_to_major(snapshot.amount, order.currency)

        log_context = {
            "order_number": order.number,
            "checkout_token": checkout_token,
            "transaction_id": snapshot.id,
            "amount": str(amount),
        }

        with self.atomic():
            record = self._lock_record(order, checkout_token)

            if record is None:
                try:
                    with transaction.atomic():
                        record = AffirmTransaction.objects.create(
                            order=order,
                            checkout_token=checkout_token,
                            transaction_id=snapshot.id,
                        )
                except IntegrityError:
                    record = self._lock_record(order, checkout_token)
                    if record is None:
                        raise self._claimed_elsewhere(order, checkout_token, snapshot) from None

            if record.payment_id is not None:
                return self._replayed(order, checkout_token, record)

            if record.transaction_id is None:
                try:
                    record.assign_transaction_id(snapshot.id)
                except TransactionIdConflictError:
                    raise self._claimed_elsewhere(order, checkout_token, snapshot) from None
            elif record.transaction_id != snapshot.id:
                raise CheckoutMismatchError(
                    "Checkout token is recorded against another Affirm transaction",
                    details={
                        **log_context,
                        "recorded_transaction_id": record.transaction_id,
                    },
                )

            payment = self.ledger.create_payment(order, amount, payment_method_ref)
            record.payment = payment
            record.save(update_fields=["payment", "updated_at"])

            self.ledger.advance_to_confirmation(order)

        logger.info("Affirm checkout confirmed", extra=log_context)

        return ReconciliationResult(
            state=CheckoutConfirmationState.CONFIRMED,
            route=CheckoutRoute.CHECKOUT_CONFIRMATION,
            order=order,
            payment=payment,
            transaction=record,
            created=True,
        )

    @staticmethod
    def _lock_record(order: Order, checkout_token: str) -> AffirmTransaction | None:
        return (
            AffirmTransaction.objects.select_for_update()
            .filter(order=order, checkout_token=checkout_token)
            .first()
        )

    @staticmethod
    def _claimed_elsewhere(
        order: Order,
        checkout_token: str,
        snapshot: TransactionSnapshot,
    ) -> CheckoutMismatchError:
        return CheckoutMismatchError(
            "Affirm transaction is already recorded for another checkout",
            details={
                "order_number": order.number,
                "checkout_token": checkout_token,
                "transaction_id": snapshot.id,
            },
        )

    def _replayed(
        self,
        order: Order,
        checkout_token: str,
        record: AffirmTransaction,
    ) -> ReconciliationResult:
        self.get_logger().info(
            "Affirm confirmation replayed, nothing recorded",
            extra={
                "order_number": order.number,
                "checkout_token": checkout_token,
                "record_id": str(record.pk),
            },
        )

        return ReconciliationResult(
            state=CheckoutConfirmationState.CONFIRMED,
            route=CheckoutRoute.CHECKOUT_CONFIRMATION,
            order=order,
            payment=record.payment,
            transaction=record,
            created=False,
        )
