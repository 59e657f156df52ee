import uuid
from decimal import Decimal

import django.db.models.deletion
import django_fsm
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "number",
                    models.CharField(
                        help_text="Public order reference (e.g., R123456789)",
                        max_length=32,
                        unique=True,
                    ),
                ),
                (
                    "currency",
                    models.CharField(
                        default="USD",
                        help_text="ISO 4217 currency code",
                        max_length=3,
                    ),
                ),
                (
                    "total",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Order total in major currency units",
                        max_digits=10,
                    ),
                ),
                (
                    "state",
                    django_fsm.FSMField(
                        choices=[
                            ("cart", "Cart"),
                            ("address", "Address"),
                            ("delivery", "Delivery"),
                            ("payment", "Payment"),
                            ("confirm", "Confirm"),
                            ("complete", "Complete"),
                            ("canceled", "Canceled"),
                            ("returned", "Returned"),
                        ],
                        db_index=True,
                        default="cart",
                        help_text="Current checkout step (managed by FSM)",
                        max_length=50,
                    ),
                ),
                (
                    "completed_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the order was completed",
                        null=True,
                    ),
                ),
                (
                    "canceled_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the order was canceled",
                        null=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Payment amount in the order's major currency units",
                        max_digits=10,
                    ),
                ),
                (
                    "payment_method_ref",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Identifier of the payment method used",
                        max_length=64,
                    ),
                ),
                (
                    "state",
                    models.CharField(
                        choices=[
                            ("checkout", "Checkout"),
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("void", "Void"),
                            ("failed", "Failed"),
                        ],
                        db_index=True,
                        default="checkout",
                        help_text="Current payment state",
                        max_length=20,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order this payment belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="checkout.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "ordering": ["-created_at"],
            },
        ),
    ]
