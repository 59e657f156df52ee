"""
State enums for Affirm checkout reconciliation.
"""

from payments.state_machines.states import (
    CheckoutConfirmationState,
    CheckoutRoute,
)

__all__ = [
    "CheckoutConfirmationState",
    "CheckoutRoute",
]
