"""
Ledger - The order-management collaborator for checkout reconciliation.

Public API:
    Service:
        order_ledger - Singleton instance of DjangoOrderLedger
        DjangoOrderLedger - Order lookup, payment creation, step advance

    Types:
        OrderLedger - Protocol the reconciler depends on
        minor_to_major - Minor-unit to major-unit amount conversion

Usage:
    from payments.ledger import order_ledger, minor_to_major

    order = order_ledger.get_order("R123456789")
    amount = minor_to_major(42499, order.currency)
    payment = order_ledger.create_payment(order, amount, "affirm")
"""

from .services import DjangoOrderLedger, order_ledger
from .types import OrderLedger, currency_exponent, minor_to_major

__all__ = [
    "DjangoOrderLedger",
    "OrderLedger",
    "currency_exponent",
    "minor_to_major",
    "order_ledger",
]
