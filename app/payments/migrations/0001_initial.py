import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("checkout", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AffirmTransaction",
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
                    "checkout_token",
                    models.CharField(
                        db_index=True,
                        help_text="One-time checkout token issued by Affirm",
                        max_length=255,
                    ),
                ),
                (
                    "transaction_id",
                    models.CharField(
                        blank=True,
                        help_text="Affirm transaction ID (e.g., N330-Z6D4), set once on authorization",
                        max_length=255,
                        null=True,
                        unique=True,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order this Affirm checkout belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="affirm_transactions",
                        to="checkout.order",
                    ),
                ),
                (
                    "payment",
                    models.OneToOneField(
                        blank=True,
                        help_text="Local payment this record is attached to",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="affirm_transaction",
                        to="checkout.payment",
                    ),
                ),
            ],
            options={
                "verbose_name": "Affirm Transaction",
                "verbose_name_plural": "Affirm Transactions",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("order", "checkout_token"),
                        name="unique_affirm_checkout_per_order",
                    )
                ],
            },
        ),
    ]
