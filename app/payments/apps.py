"""
Payments app configuration.

This app provides Affirm payment processing:
- Affirm Transactions API client
- Payment gateway (authorize, capture, void, credit)
- Checkout callback reconciliation
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
