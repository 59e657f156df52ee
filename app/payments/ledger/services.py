"""
Order ledger backed by the checkout app's models.

This module provides DjangoOrderLedger, the OrderLedger implementation
the checkout reconciler uses to look up orders, record payments and
advance an order to its confirmation step.

Usage:
    from payments.ledger import order_ledger

    order = order_ledger.get_order("R123456789")
    if not order_ledger.is_completed(order):
        payment = order_ledger.create_payment(order, Decimal("424.99"), "affirm")
        order_ledger.advance_to_confirmation(order)
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django_fsm import can_proceed

from checkout.models import Order, Payment
from payments.exceptions import OrderNotFoundError

logger = logging.getLogger(__name__)


class DjangoOrderLedger:
    """
    OrderLedger over checkout.Order and checkout.Payment.

    All methods are stateless; the module-level ``order_ledger`` instance
    is the one callers should use.
    """

    @staticmethod
    def get_order(order_ref: str) -> Order:
        """
        Look up an order by its public number.

        Raises:
            OrderNotFoundError: No order with that number exists
        """
        try:
            return Order.objects.get(number=order_ref)
        except Order.DoesNotExist:
            raise OrderNotFoundError(
                f"Order {order_ref} not found",
                details={"order_number": order_ref},
            ) from None

    @staticmethod
    def is_completed(order: Order) -> bool:
        return order.is_completed

    @staticmethod
    def create_payment(
        order: Order,
        amount: Decimal,
        payment_method_ref: str,
    ) -> Payment:
        """Create a payment in the checkout state against the order."""
        payment = Payment.objects.create(
            order=order,
            amount=amount,
            payment_method_ref=payment_method_ref,
        )
        logger.info(
            "Payment recorded",
            extra={
                "order_number": order.number,
                "payment_id": str(payment.id),
                "amount": str(amount),
                "currency": order.currency,
            },
        )
        return payment

    @staticmethod
    def advance_to_confirmation(order: Order) -> bool:
        """
        Move the order from the payment step to the confirm step.

        Returns:
            True if the order moved, False if the transition was not allowed
            (e.g. the order was already at the confirm step)
        """
        if not can_proceed(order.confirm_payment):
            logger.debug(
                "Order not advanced to confirmation",
                extra={"order_number": order.number, "state": order.state},
            )
            return False

        order.confirm_payment()
        order.save(update_fields=["state", "updated_at"])
        return True


# Singleton instance for convenience
order_ledger = DjangoOrderLedger()
