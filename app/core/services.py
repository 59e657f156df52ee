"""
Base service layer patterns for business logic encapsulation.

Views handle HTTP concerns, models handle data, services handle logic.
Services that talk to external systems return result objects for
expected failures and raise exceptions for integrity violations.

Usage:
    from core.services import BaseService

    class RefundService(BaseService):
        def refund(self, payment):
            with self.atomic():
                ...
            self.get_logger().info("Refunded payment", extra={"payment_id": str(payment.id)})
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides:
    - Logging setup per service
    - Database transaction management
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named ``<module>.<ClassName>`` for easy filtering.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        Thin wrapper around ``transaction.atomic()`` that keeps transaction
        boundaries explicit in service code. Nested use creates savepoints.

        Example:
            with cls.atomic():
                payment = Payment.objects.create(...)
                record.payment = payment
                record.save(update_fields=["payment", "updated_at"])
        """
        with transaction.atomic():
            yield
