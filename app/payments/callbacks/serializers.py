"""
DRF serializers for Affirm checkout callbacks.

Usage:
    serializer = AffirmConfirmSerializer(data=request.POST)
    serializer.is_valid(raise_exception=True)
    order_number = serializer.validated_data["order_number"]
"""

from __future__ import annotations

from rest_framework import serializers


class AffirmConfirmSerializer(serializers.Serializer):
    """
    Parameters Affirm posts back when a checkout is confirmed.

    A missing order_number is passed through so the lookup reports the
    order as not found.

    checkout_token may be blank; the reconciler treats that as an
    abandoned confirmation and routes back to the cart.

    Used by POST /api/v1/payments/affirm/confirm/
    """

    order_number = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=32,
        help_text="Public order reference the checkout was started for",
    )
    checkout_token = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=255,
        help_text="One-time Affirm checkout token",
    )
    payment_method_id = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=64,
        help_text="Payment method the customer checked out with",
    )

    def validate_checkout_token(self, value):
        """Strip surrounding whitespace so a blank token reads as missing."""
        return value.strip()


class AffirmCancelSerializer(serializers.Serializer):
    """
    Parameters Affirm sends when the customer cancels checkout.

    Used by GET /api/v1/payments/affirm/cancel/
    """

    order_number = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=32,
        help_text="Public order reference, if Affirm passed it back",
    )
