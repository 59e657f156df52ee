"""
Tests for the AffirmTransaction model.

Tests constraints, the write-once transaction id, and cascade behavior.
"""

import uuid

import pytest
from django.db import IntegrityError, transaction

from checkout.tests.factories import OrderFactory, PaymentFactory
from payments.exceptions import AlreadyAuthorizedError, TransactionIdConflictError
from payments.models import AffirmTransaction
from payments.tests.factories import AffirmTransactionFactory


class TestAffirmTransactionModel:
    """Tests for AffirmTransaction fields and constraints."""

    def test_create_with_required_fields(self, db):
        """Should create a record with only an order and checkout token."""
        order = OrderFactory()

        record = AffirmTransaction.objects.create(
            order=order,
            checkout_token="TKLKJ71GOP9YSASU",
        )

        assert isinstance(record.pk, uuid.UUID)
        assert record.transaction_id is None
        assert record.payment is None
        assert record.is_authorized is False

    def test_checkout_token_unique_per_order(self, db):
        """Should reject a second record for the same (order, checkout_token)."""
        record = AffirmTransactionFactory()

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                AffirmTransaction.objects.create(
                    order=record.order,
                    checkout_token=record.checkout_token,
                )

    def test_same_token_on_another_order(self, db):
        """Should scope token uniqueness to the order."""
        record = AffirmTransactionFactory()

        other = AffirmTransactionFactory(checkout_token=record.checkout_token)

        assert other.pk != record.pk

    def test_transaction_id_unique(self, db):
        AffirmTransactionFactory(transaction_id="N330-Z6D4")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                AffirmTransactionFactory(transaction_id="N330-Z6D4")

    def test_multiple_unauthorized_records(self, db):
        """Should allow many records with a NULL transaction id."""
        AffirmTransactionFactory()
        AffirmTransactionFactory()

        assert AffirmTransaction.objects.filter(transaction_id__isnull=True).count() == 2


class TestAssignTransactionId:
    """Tests for the compare-and-set on transaction_id."""

    def test_sets_id_once(self, db):
        record = AffirmTransactionFactory()

        record.assign_transaction_id("N330-Z6D4")

        record.refresh_from_db()
        assert record.transaction_id == "N330-Z6D4"
        assert record.is_authorized is True

    def test_never_overwrites(self, db):
        """Should raise and keep the stored id when one is already set."""
        record = AffirmTransactionFactory(transaction_id="N330-Z6D4")

        with pytest.raises(AlreadyAuthorizedError):
            record.assign_transaction_id("OTHER-ID")

        record.refresh_from_db()
        assert record.transaction_id == "N330-Z6D4"

    def test_stale_instance_cannot_overwrite(self, db):
        """Should detect an id written through another instance."""
        record = AffirmTransactionFactory()
        stale = AffirmTransaction.objects.get(pk=record.pk)

        record.assign_transaction_id("N330-Z6D4")

        with pytest.raises(AlreadyAuthorizedError):
            stale.assign_transaction_id("OTHER-ID")

        assert stale.transaction_id == "N330-Z6D4"

    def test_id_held_by_other_record(self, db):
        """Should refuse an id another record already holds and stay NULL."""
        AffirmTransactionFactory(transaction_id="N330-Z6D4")
        record = AffirmTransactionFactory()

        with pytest.raises(TransactionIdConflictError) as exc_info:
            record.assign_transaction_id("N330-Z6D4")

        assert exc_info.value.details["transaction_id"] == "N330-Z6D4"
        record.refresh_from_db()
        assert record.transaction_id is None


class TestCascade:
    """Tests for ownership and deletion."""

    def test_deleting_payment_deletes_record(self, db):
        payment = PaymentFactory()
        record = AffirmTransactionFactory(order=payment.order, payment=payment)

        payment.delete()

        assert not AffirmTransaction.objects.filter(pk=record.pk).exists()

    def test_deleting_order_deletes_record(self, db):
        record = AffirmTransactionFactory()

        record.order.delete()

        assert not AffirmTransaction.objects.filter(pk=record.pk).exists()
