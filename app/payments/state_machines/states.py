"""
State enums for Affirm checkout reconciliation.

These are Django TextChoices so they serialize cleanly into logs and
responses.

State Machines Overview:

Checkout Confirmation:
    pending_confirmation → confirmed (payment recorded)
    pending_confirmation → abandoned (no ledger change)

Routing:
    Every reconciliation outcome names the checkout step the customer
    is sent to next (cart, order detail, or checkout confirmation).
"""

from django.db import models


class CheckoutConfirmationState(models.TextChoices):
    """
    States of an order's Affirm payment completion.

    Terminal states: CONFIRMED, ABANDONED

    State Flow:
        PENDING_CONFIRMATION → CONFIRMED
        PENDING_CONFIRMATION → ABANDONED

    A replayed confirmation for an already-recorded checkout token
    reports CONFIRMED again without creating anything.
    """

    PENDING_CONFIRMATION = "pending_confirmation", "Pending Confirmation"
    CONFIRMED = "confirmed", "Confirmed"
    ABANDONED = "abandoned", "Abandoned"


class CheckoutRoute(models.TextChoices):
    """
    Where the customer goes after a provider callback.

    CART: back to the start of checkout (missing token, cancellation)
    ORDER_DETAIL: the finished order's page (order already completed)
    CHECKOUT_CONFIRMATION: the order's confirm step (payment recorded)
    """

    CART = "cart", "Cart"
    ORDER_DETAIL = "order_detail", "Order Detail"
    CHECKOUT_CONFIRMATION = "checkout_confirmation", "Checkout Confirmation"


__all__ = [
    "CheckoutConfirmationState",
    "CheckoutRoute",
]
