"""
Order and Payment models for the checkout flow.

Order tracks a customer's purchase through the checkout steps; Payment
records money taken (or to be taken) against an order through a
payment method.

Usage:
    from checkout.models import Order, Payment

    order = Order.objects.create(number="R123456789", total=Decimal("424.99"))

    # State transitions using django-fsm
    order.start_checkout()  # cart -> address
    order.save()

    payment = Payment.objects.create(
        order=order,
        amount=Decimal("424.99"),
        payment_method_ref="affirm",
    )
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone

from django_fsm import FSMField, transition

from core.models import BaseModel
from core.model_mixins import UUIDPrimaryKeyMixin

from checkout.states import TERMINAL_ORDER_STATES, OrderState, PaymentState


class Order(UUIDPrimaryKeyMixin, BaseModel):
    """
    A customer order moving through checkout.

    State Flow:
        CART -> ADDRESS -> DELIVERY -> PAYMENT -> CONFIRM -> COMPLETE

    Cancellation Flow:
        any non-terminal state -> CANCELED

    Fields:
        number: Public order reference (used in URLs and provider callbacks)
        currency: ISO 4217 currency code (uppercase)
        total: Order total in major units
        state: Current checkout step (managed by FSM)
        completed_at: When the order was completed
    """

    number = models.CharField(
        max_length=32,
        unique=True,
        help_text="Public order reference (e.g., R123456789)",
    )

    currency = models.CharField(
        max_length=3,
        default="USD",
        help_text="ISO 4217 currency code",
    )

    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Order total in major currency units",
    )

    state = FSMField(
        default=OrderState.CART,
        choices=OrderState.choices,
        db_index=True,
        help_text="Current checkout step (managed by FSM)",
    )

    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the order was completed",
    )

    canceled_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the order was canceled",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Order"
        verbose_name_plural = "Orders"

    def __str__(self) -> str:
        return f"Order({self.number}, {self.state}, {self.total} {self.currency})"

    @property
    def is_completed(self) -> bool:
        """Check if the order is in a terminal commercial state."""
        return self.state in TERMINAL_ORDER_STATES

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(field=state, source=OrderState.CART, target=OrderState.ADDRESS)
    def start_checkout(self):
        """Transition: CART -> ADDRESS"""

    @transition(field=state, source=OrderState.ADDRESS, target=OrderState.DELIVERY)
    def select_delivery(self):
        """Transition: ADDRESS -> DELIVERY"""

    @transition(field=state, source=OrderState.DELIVERY, target=OrderState.PAYMENT)
    def select_payment(self):
        """Transition: DELIVERY -> PAYMENT"""

    @transition(field=state, source=OrderState.PAYMENT, target=OrderState.CONFIRM)
    def confirm_payment(self):
        """
        Move to the confirmation step once a payment has been recorded.

        Transition: PAYMENT -> CONFIRM
        """

    @transition(field=state, source=OrderState.CONFIRM, target=OrderState.COMPLETE)
    def complete(self):
        """Transition: CONFIRM -> COMPLETE"""
        self.completed_at = timezone.now()

    @transition(
        field=state,
        source=[
            OrderState.CART,
            OrderState.ADDRESS,
            OrderState.DELIVERY,
            OrderState.PAYMENT,
            OrderState.CONFIRM,
        ],
        target=OrderState.CANCELED,
    )
    def cancel(self):
        """Transition: any non-terminal state -> CANCELED"""
        self.canceled_at = timezone.now()

    @transition(field=state, source=OrderState.COMPLETE, target=OrderState.RETURNED)
    def mark_returned(self):
        """Transition: COMPLETE -> RETURNED"""


class Payment(UUIDPrimaryKeyMixin, BaseModel):
    """
    Money recorded against an order through a payment method.

    Deleting a payment cascades to any provider transaction record
    attached to it (see payments.models.AffirmTransaction).

    Fields:
        order: The order being paid
        amount: Amount in the order's major currency units
        payment_method_ref: Identifier of the payment method used
        state: Payment state
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="payments",
        help_text="Order this payment belongs to",
    )

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Payment amount in the order's major currency units",
    )

    payment_method_ref = models.CharField(
        max_length=64,
        blank=True,
        default="",
        help_text="Identifier of the payment method used",
    )

    state = models.CharField(
        max_length=20,
        choices=PaymentState.choices,
        default=PaymentState.CHECKOUT,
        db_index=True,
        help_text="Current payment state",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Payment"
        verbose_name_plural = "Payments"

    def __str__(self) -> str:
        return f"Payment({self.id}, {self.amount} {self.currency}, {self.state})"

    @property
    def currency(self) -> str:
        return self.order.currency
