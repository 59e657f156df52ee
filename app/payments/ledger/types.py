"""
Data types for the order ledger collaborator.

Types:
    OrderLedger: Protocol the checkout reconciler needs from the host
        order-management system
    minor_to_major: Convert a provider amount in minor units to a
        major-unit Decimal for a currency

Usage:
    from payments.ledger.types import minor_to_major

    minor_to_major(42499, "USD")  # Decimal("424.99")
    minor_to_major(5000, "JPY")   # Decimal("5000")
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from checkout.models import Order, Payment


# ISO 4217 currencies without a minor unit
ZERO_DECIMAL_CURRENCIES = frozenset(
    {
        "BIF",
        "CLP",
        "DJF",
        "GNF",
        "ISK",
        "JPY",
        "KMF",
        "KRW",
        "PYG",
        "RWF",
        "UGX",
        "VND",
        "VUV",
        "XAF",
        "XOF",
        "XPF",
    }
)


def currency_exponent(currency: str) -> int:
    """Return the number of minor-unit digits for a currency."""
    return 0 if currency.upper() in ZERO_DECIMAL_CURRENCIES else 2


def minor_to_major(amount_minor_units: int, currency: str) -> Decimal:
    """
    Convert an amount in minor units to major units.

    No currency conversion happens; the amount is only re-scaled.

    Example:
        minor_to_major(42499, "usd")  # Decimal("424.99")
    """
    exponent = currency_exponent(currency)
    return Decimal(int(amount_minor_units)).scaleb(-exponent)


class OrderLedger(Protocol):
    """
    What the checkout reconciler needs from the order-management system.

    Implementations:
        DjangoOrderLedger (payments.ledger.services) backed by the
        checkout app's Order and Payment models.
    """

    def get_order(self, order_ref: str) -> Order:
        """Return the order or raise OrderNotFoundError."""
        ...

    def is_completed(self, order: Order) -> bool:
        """Whether the order is in a terminal commercial state."""
        ...

    def create_payment(
        self,
        order: Order,
        amount: Decimal,
        payment_method_ref: str,
    ) -> Payment:
        """Record a payment against the order."""
        ...

    def advance_to_confirmation(self, order: Order) -> bool:
        """Move the order to its confirmation step if allowed."""
        ...


__all__ = [
    "ZERO_DECIMAL_CURRENCIES",
    "OrderLedger",
    "currency_exponent",
    "minor_to_major",
]
