"""
Checkout app configuration.
"""

from django.apps import AppConfig


class CheckoutConfig(AppConfig):
    """Configuration for the checkout application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "checkout"
    verbose_name = "Checkout"
