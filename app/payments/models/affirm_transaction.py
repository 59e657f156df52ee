"""
AffirmTransaction model linking local payments to Affirm transactions.

Stores the checkout token Affirm issued for a purchase session and the
transaction id Affirm assigned once the purchase was authorized. The
unique (order, checkout_token) constraint ensures a replayed checkout
confirmation cannot record a second payment.

Usage:
    from payments.models import AffirmTransaction

    record = AffirmTransaction.objects.create(
        order=order,
        checkout_token="TKLKJ71GOP9YSASU",
    )

    # After Affirm authorizes the checkout
    record.assign_transaction_id("N330-Z6D4")
"""

from __future__ import annotations

from django.db import IntegrityError, models, transaction
from django.utils import timezone

from core.models import BaseModel
from core.model_mixins import UUIDPrimaryKeyMixin

from payments.exceptions import AlreadyAuthorizedError, TransactionIdConflictError


class AffirmTransaction(UUIDPrimaryKeyMixin, BaseModel):
    """
    Durable mapping between a local payment and an Affirm transaction.

    Lifecycle:
        1. Created with a checkout token (transaction_id is NULL)
        2. Authorization or checkout confirmation sets transaction_id once
        3. capture/void/refund use transaction_id
        4. Deleted only when its payment (or order) is deleted

    Fields:
        order: Order the checkout belongs to
        payment: Local payment this record is attached to
        checkout_token: One-time token from Affirm checkout
        transaction_id: Affirm transaction ID (set at most once)

    Note:
        transaction_id is never overwritten. Use assign_transaction_id(),
        which performs a conditional UPDATE, rather than saving the field.
    """

    # ==========================================================================
    # Ownership
    # ==========================================================================

    order = models.ForeignKey(
        "checkout.Order",
        on_delete=models.CASCADE,
        related_name="affirm_transactions",
        help_text="Order this Affirm checkout belongs to",
    )

    payment = models.OneToOneField(
        "checkout.Payment",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="affirm_transaction",
        help_text="Local payment this record is attached to",
    )

    # ==========================================================================
    # Affirm Identifiers
    # ==========================================================================

    checkout_token = models.CharField(
        max_length=255,
        db_index=True,
        help_text="One-time checkout token issued by Affirm",
    )

    transaction_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        unique=True,
        help_text="Affirm transaction ID (e.g., N330-Z6D4), set once on authorization",
    )

    # ==========================================================================
    # Meta & Methods
    # ==========================================================================

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Affirm Transaction"
        verbose_name_plural = "Affirm Transactions"
        constraints = [
            models.UniqueConstraint(
                fields=["order", "checkout_token"],
                name="unique_affirm_checkout_per_order",
            ),
        ]

    def __str__(self) -> str:
        return f"AffirmTransaction({self.checkout_token}, {self.transaction_id})"

    @property
    def is_authorized(self) -> bool:
        """Check if Affirm has assigned a transaction id."""
        return bool(self.transaction_id)

    def assign_transaction_id(self, transaction_id: str) -> None:
        """
        Set transaction_id if and only if it is still NULL.

        Performs a compare-and-set at the database so two concurrent
        authorizations cannot both write an id.

        Args:
            transaction_id: Affirm transaction ID

        Raises:
            AlreadyAuthorizedError: Record already carries a transaction id
            TransactionIdConflictError: Another record already holds this id
        """
        try:
            with transaction.atomic():
                updated = AffirmTransaction.objects.filter(
                    pk=self.pk,
                    transaction_id__isnull=True,
                ).update(transaction_id=transaction_id, updated_at=timezone.now())
        except IntegrityError:
            raise TransactionIdConflictError(
                "Affirm transaction is already recorded for another checkout",
                details={
                    "record_id": str(self.pk),
                    "transaction_id": transaction_id,
                },
            ) from None

        if not updated:
            self.refresh_from_db(fields=["transaction_id"])
            raise AlreadyAuthorizedError(
                "The transaction has already been authorized.",
                details={
                    "record_id": str(self.pk),
                    "transaction_id": self.transaction_id,
                },
            )

        self.transaction_id = transaction_id
