"""
Browser callback endpoints for Affirm checkout.

Affirm sends the customer's browser back to these views after checkout
is confirmed or canceled. The views hand the callback to
CheckoutReconciler and redirect wherever it routes.
"""
