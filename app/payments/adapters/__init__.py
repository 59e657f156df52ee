"""
Payment adapters for external services.

This module provides the client for the Affirm Transactions API.
All Affirm calls should go through it to ensure consistent error
handling, timeouts, and observability.

Usage:
    from payments.adapters import AffirmConfig, build_client

    client = build_client(AffirmConfig.from_settings())
    snapshot = client.read_transaction(checkout_token)
"""

from payments.adapters.affirm_client import (
    LIVE_BASE_URL,
    SANDBOX_BASE_URL,
    AffirmClient,
    AffirmConfig,
    TransactionEvent,
    TransactionSnapshot,
    build_client,
)

__all__ = [
    "LIVE_BASE_URL",
    "SANDBOX_BASE_URL",
    "AffirmClient",
    "AffirmConfig",
    "TransactionEvent",
    "TransactionSnapshot",
    "build_client",
]
