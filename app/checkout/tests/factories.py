"""
Factory Boy factories for checkout test data.

Usage:
    from checkout.tests.factories import OrderFactory, PaymentFactory

    # Order sitting in the cart
    order = OrderFactory()

    # Order waiting for payment
    order = OrderFactory(state=OrderState.PAYMENT)

    # Payment recorded against an order
    payment = PaymentFactory(order=order)
"""

from decimal import Decimal

import factory

from checkout.models import Order, Payment
from checkout.states import OrderState


class OrderFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Order instances.

    Default creates a USD order in the CART state totalling $424.99.
    """

    class Meta:
        model = Order

    number = factory.Sequence(lambda n: f"R{100000000 + n}")
    currency = "USD"
    total = Decimal("424.99")
    state = OrderState.CART


class PaymentFactory(factory.django.DjangoModelFactory):
    """Factory for creating Payment instances."""

    class Meta:
        model = Payment

    order = factory.SubFactory(OrderFactory)
    amount = factory.LazyAttribute(lambda payment: payment.order.total)
    payment_method_ref = "affirm"
