"""
Payment services for Affirm payment operations.

This module provides:
- AffirmGateway: authorize/capture/void/credit against Affirm
- CheckoutReconciler: Records Affirm checkout callbacks exactly once

Usage:
    from payments.services import AffirmGateway

    result = AffirmGateway().authorize(record)
    if not result.success:
        messages.error(request, result.message)

    # Handle a checkout confirmation
    from payments.services import CheckoutReconciler

    result = CheckoutReconciler().confirm(
        order_ref=order.number,
        checkout_token=token,
        payment_method_ref="affirm",
    )
    return redirect(result.redirect_url)
"""

from payments.services.affirm_gateway import AffirmGateway
from payments.services.checkout_reconciler import (
    INVALID_CONFIRMATION_NOTICE,
    ORDER_ALREADY_COMPLETED_NOTICE,
    PAYMENT_CANCELED_NOTICE,
    CheckoutReconciler,
    ReconciliationResult,
)

__all__ = [
    "INVALID_CONFIRMATION_NOTICE",
    "ORDER_ALREADY_COMPLETED_NOTICE",
    "PAYMENT_CANCELED_NOTICE",
    "AffirmGateway",
    "CheckoutReconciler",
    "ReconciliationResult",
]
