"""
Payment domain models.

- AffirmTransaction: Links a local payment to its Affirm checkout token
  and transaction id
"""

from payments.models.affirm_transaction import AffirmTransaction

__all__ = [
    "AffirmTransaction",
]
