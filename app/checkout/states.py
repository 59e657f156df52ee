"""
State enums for checkout models.

Order States:
    cart → address → delivery → payment → confirm → complete
    any non-terminal state → canceled
    complete → returned

Payment States:
    checkout → pending → completed
    checkout/pending → void / failed
"""

from django.db import models


class OrderState(models.TextChoices):
    """
    States for the Order checkout lifecycle.

    Terminal commercial states: COMPLETE, CANCELED, RETURNED.
    A provider callback for an order in one of these states is a replay.
    """

    CART = "cart", "Cart"
    ADDRESS = "address", "Address"
    DELIVERY = "delivery", "Delivery"
    PAYMENT = "payment", "Payment"
    CONFIRM = "confirm", "Confirm"
    COMPLETE = "complete", "Complete"
    CANCELED = "canceled", "Canceled"
    RETURNED = "returned", "Returned"


TERMINAL_ORDER_STATES = frozenset(
    {OrderState.COMPLETE, OrderState.CANCELED, OrderState.RETURNED}
)


class PaymentState(models.TextChoices):
    """States for a Payment recorded against an order."""

    CHECKOUT = "checkout", "Checkout"
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    VOID = "void", "Void"
    FAILED = "failed", "Failed"


__all__ = [
    "OrderState",
    "PaymentState",
    "TERMINAL_ORDER_STATES",
]
