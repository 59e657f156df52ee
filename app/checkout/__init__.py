"""
Checkout app: the host order-management collaborator.

Only the parts of an order the payment core consumes live here:
- Order: number, currency, total and the checkout state machine
- Payment: an amount recorded against an order through a payment method

The Affirm integration (payments app) creates payments on orders and
advances an order to its confirmation step; it never owns the schema.
"""
