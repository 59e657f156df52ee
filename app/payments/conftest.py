"""
Pytest fixtures shared by all payments tests.

This module provides fixtures for orders and Affirm transaction records
in the states the gateway and reconciler care about, plus a mock Affirm
client returning canned snapshots and events.

Usage:
    def test_authorize(gateway, pending_record, mock_affirm_client, snapshot):
        mock_affirm_client.authorize.return_value = snapshot()
        result = gateway.authorize(pending_record)
        assert result.success
"""

from unittest.mock import MagicMock

import pytest

from checkout.states import OrderState
from checkout.tests.factories import OrderFactory, PaymentFactory
from payments.adapters import AffirmClient, TransactionEvent, TransactionSnapshot
from payments.tests.factories import AffirmTransactionFactory


CHECKOUT_TOKEN = "TKLKJ71GOP9YSASU"
TRANSACTION_ID = "N330-Z6D4"


# =============================================================================
# Order Fixtures
# =============================================================================


@pytest.fixture
def order_awaiting_payment(db):
    """Create an order at the payment step totalling $424.99."""
    return OrderFactory(state=OrderState.PAYMENT)


@pytest.fixture
def completed_order(db):
    """Create an order that has already completed."""
    return OrderFactory(state=OrderState.COMPLETE)


# =============================================================================
# AffirmTransaction Fixtures
# =============================================================================


@pytest.fixture
def pending_record(db, order_awaiting_payment):
    """Create a record carrying a checkout token but no transaction id."""
    return AffirmTransactionFactory(
        order=order_awaiting_payment,
        checkout_token=CHECKOUT_TOKEN,
    )


@pytest.fixture
def authorized_record(db, order_awaiting_payment):
    """Create a record Affirm has already authorized."""
    payment = PaymentFactory(order=order_awaiting_payment)
    return AffirmTransactionFactory(
        order=order_awaiting_payment,
        payment=payment,
        checkout_token=CHECKOUT_TOKEN,
        transaction_id=TRANSACTION_ID,
    )


# =============================================================================
# Mock Affirm Fixtures
# =============================================================================


@pytest.fixture
def mock_affirm_client():
    """A MagicMock standing in for AffirmClient."""
    return MagicMock(spec=AffirmClient)


@pytest.fixture
def snapshot():
    """Create a TransactionSnapshot."""

    def _create(
        id: str = TRANSACTION_ID,
        checkout_id: str | None = CHECKOUT_TOKEN,
        amount: int | None = 42499,
        order_ref: str | None = None,
        provider_status_code: int | None = 1,
        status: str | None = "authorized",
    ) -> TransactionSnapshot:
        return TransactionSnapshot(
            id=id,
            checkout_id=checkout_id,
            amount=amount,
            order_ref=order_ref,
            provider_status_code=provider_status_code,
            status=status,
            currency="USD",
        )

    return _create


@pytest.fixture
def event():
    """Create a TransactionEvent."""

    def _create(
        id: str = TRANSACTION_ID,
        type: str = "capture",
        amount: int | None = None,
    ) -> TransactionEvent:
        return TransactionEvent(id=id, type=type, amount=amount)

    return _create
