"""
Payments app for Affirm integration.

This app handles:
- Payment operations against Affirm (authorize, capture, void, credit)
- Normalizing Affirm outcomes into OperationResult
- Recording Affirm checkout confirmations exactly once

Related apps:
    - checkout: Order and Payment models the callbacks write to

Usage:
    from payments.services import AffirmGateway

    result = AffirmGateway().capture(record.transaction_id)

    # Handle checkout callback
    from payments.services import CheckoutReconciler

    result = CheckoutReconciler().confirm(order_number, checkout_token, "affirm")
"""
