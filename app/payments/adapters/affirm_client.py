"""
Affirm API client for transaction operations.

This module provides the AffirmClient class which encapsulates all
Affirm Transactions API interactions. All Affirm calls should go
through this client to ensure consistent error handling, timeouts,
and observability.

Features:
- Per-call timeouts on every request
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Explicit configuration (no module-level provider state)

Configuration (via settings):
- AFFIRM_PUBLIC_API_KEY: Affirm public API key
- AFFIRM_PRIVATE_API_KEY: Affirm private API key
- AFFIRM_TEST_MODE: Use the sandbox environment (default: True)
- AFFIRM_API_TIMEOUT_SECONDS: API call timeout (default: 10)

Usage:
    from payments.adapters import AffirmConfig, build_client

    client = build_client(AffirmConfig.from_settings())

    # Exchange a checkout token for an authorized transaction
    snapshot = client.authorize("TKLKJ71GOP9YSASU")

    # Capture it
    event = client.capture(snapshot.id)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from django.conf import settings

from payments.exceptions import (
    AffirmConnectionError,
    AffirmRequestError,
    AffirmTimeoutError,
    PaymentValidationError,
)


SANDBOX_BASE_URL = "https://sandbox.affirm.com/api/v1"
LIVE_BASE_URL = "https://api.affirm.com/api/v1"


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class AffirmConfig:
    """
    Credentials and environment for the Affirm API.

    Attributes:
        public_api_key: Affirm public API key (basic auth user)
        private_api_key: Affirm private API key (basic auth password)
        test_mode: True selects the sandbox environment
        timeout_seconds: Per-request timeout
    """

    public_api_key: str
    private_api_key: str = field(repr=False)
    test_mode: bool = True
    timeout_seconds: float = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.public_api_key:
            raise PaymentValidationError("Affirm public_api_key is required")
        if not self.private_api_key:
            raise PaymentValidationError("Affirm private_api_key is required")
        if self.timeout_seconds <= 0:
            raise PaymentValidationError("Affirm timeout_seconds must be positive")

    @classmethod
    def from_settings(cls) -> AffirmConfig:
        """Build configuration from Django settings."""
        return cls(
            public_api_key=settings.AFFIRM_PUBLIC_API_KEY,
            private_api_key=settings.AFFIRM_PRIVATE_API_KEY,
            test_mode=getattr(settings, "AFFIRM_TEST_MODE", True),
            timeout_seconds=getattr(settings, "AFFIRM_API_TIMEOUT_SECONDS", 10),
        )

    @property
    def environment(self) -> str:
        return "sandbox" if self.test_mode else "live"

    @property
    def base_url(self) -> str:
        return SANDBOX_BASE_URL if self.test_mode else LIVE_BASE_URL


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class TransactionSnapshot:
    """
    An Affirm transaction as reported by the provider.

    Attributes:
        id: Transaction ID (e.g., N330-Z6D4)
        checkout_id: Checkout token the transaction was created from
        amount: Authorized amount in minor units (e.g., cents)
        order_ref: Merchant order reference sent at checkout
        provider_status_code: Affirm provider_id (which lender carries the loan)
        status: Transaction status (authorized, captured, voided, ...)
        currency: Currency code
        raw_response: Full Affirm response dict (for debugging)
    """

    id: str
    checkout_id: str | None = None
    amount: int | None = None
    order_ref: str | None = None
    provider_status_code: int | None = None
    status: str | None = None
    currency: str | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> TransactionSnapshot:
        order_ref = data.get("order_id")
        return cls(
            id=data["id"],
            checkout_id=data.get("checkout_id"),
            amount=data.get("amount"),
            order_ref=str(order_ref) if order_ref is not None else None,
            provider_status_code=data.get("provider_id"),
            status=data.get("status"),
            currency=data.get("currency"),
            raw_response=data,
        )


@dataclass
class TransactionEvent:
    """
    An event (capture, void, refund) recorded against a transaction.

    Attributes:
        id: Event ID
        type: Event type (capture, void, refund)
        amount: Amount affected in minor units, if any
        raw_response: Full Affirm response dict (for debugging)
    """

    id: str
    type: str | None = None
    amount: int | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> TransactionEvent:
        return cls(
            id=data["id"],
            type=data.get("type"),
            amount=data.get("amount"),
            raw_response=data,
        )


# =============================================================================
# Affirm Client
# =============================================================================


class AffirmClient:
    """
    Client for the Affirm Transactions API.

    Holds a configuration and a requests session; no other state.
    Every failure is raised as an AffirmRequestError subclass whose
    message is the provider's own text.

    Usage:
        client = AffirmClient(config)
        snapshot = client.read_transaction("TKLKJ71GOP9YSASU")
        event = client.refund(snapshot.id, 5000)
    """

    def __init__(
        self,
        config: AffirmConfig,
        session: requests.Session | None = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.session.auth = (config.public_api_key, config.private_api_key)
        self.session.headers.update({"Accept": "application/json"})

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this client."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Core Operations
    # =========================================================================

    def authorize(self, checkout_token: str) -> TransactionSnapshot:
        """
        Authorize the transaction behind a checkout token.

        Args:
            checkout_token: One-time token issued by Affirm checkout

        Returns:
            TransactionSnapshot of the newly authorized transaction

        Raises:
            AffirmRequestError: Affirm rejected the request
            AffirmConnectionError: Affirm could not be reached
            AffirmTimeoutError: Request timed out
        """
        data = self._request(
            "POST",
            "/transactions",
            operation="authorize",
            json={"transaction_id": checkout_token},
            log_context={"checkout_token": checkout_token},
        )
        return TransactionSnapshot.from_response(data)

    def capture(self, transaction_id: str) -> TransactionEvent:
        """Capture an authorized transaction."""
        data = self._request(
            "POST",
            f"/transactions/{transaction_id}/capture",
            operation="capture",
            log_context={"transaction_id": transaction_id},
        )
        return TransactionEvent.from_response(data)

    def void(self, transaction_id: str) -> TransactionEvent:
        """Void an authorized, uncaptured transaction."""
        data = self._request(
            "POST",
            f"/transactions/{transaction_id}/void",
            operation="void",
            log_context={"transaction_id": transaction_id},
        )
        return TransactionEvent.from_response(data)

    def refund(self, transaction_id: str, amount_minor_units: int) -> TransactionEvent:
        """
        Refund part or all of a captured transaction.

        Args:
            transaction_id: Affirm transaction ID
            amount_minor_units: Amount to refund in minor units

        Returns:
            TransactionEvent for the refund
        """
        data = self._request(
            "POST",
            f"/transactions/{transaction_id}/refund",
            operation="refund",
            json={"amount": amount_minor_units},
            log_context={
                "transaction_id": transaction_id,
                "amount": amount_minor_units,
            },
        )
        return TransactionEvent.from_response(data)

    def read_transaction(self, reference: str) -> TransactionSnapshot:
        """
        Read a transaction by transaction ID or checkout token.

        Used by checkout confirmation as the authoritative source of
        amount and identifiers.
        """
        data = self._request(
            "GET",
            f"/transactions/{reference}",
            operation="read_transaction",
            log_context={"reference": reference},
            level=logging.DEBUG,
        )
        return TransactionSnapshot.from_response(data)

    # =========================================================================
    # Transport
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: dict[str, Any] | None = None,
        log_context: dict[str, Any] | None = None,
        level: int = logging.INFO,
    ) -> dict[str, Any]:
        logger = self.get_logger()

        log_context = {
            "operation": operation,
            "environment": self.config.environment,
            **(log_context or {}),
        }

        start_time = time.time()
        logger.log(level, "Starting Affirm operation", extra=log_context)

        try:
            response = self.session.request(
                method,
                f"{self.config.base_url}{path}",
                json=json,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_transport_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

        duration_ms = (time.time() - start_time) * 1000
        data = self._parse_body(response)

        if not response.ok:
            self._handle_error_response(response, data, log_context, duration_ms)

        if not isinstance(data, dict) or "id" not in data:
            logger.error(
                "Unusable response body from Affirm",
                extra={
                    **log_context,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            raise AffirmRequestError(
                "Affirm returned an unreadable response",
                status_code=response.status_code,
            )

        logger.log(
            level,
            "Affirm operation completed",
            extra={
                **log_context,
                "affirm_id": data.get("id"),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return data

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    # =========================================================================
    # Error Handling
    # =========================================================================

    def _handle_error_response(
        self,
        response: requests.Response,
        data: Any,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate a non-2xx Affirm response to AffirmRequestError.

        Affirm error bodies look like:
            {"status_code": 400, "type": "invalid_request",
             "code": "capture-voided", "message": "..."}

        Raises:
            AffirmRequestError: Always
        """
        logger = self.get_logger()

        body = data if isinstance(data, dict) else {}
        message = body.get("message") or response.reason or "Affirm request failed"
        affirm_code = body.get("code")

        log_context = {
            **log_context,
            "status_code": response.status_code,
            "affirm_code": affirm_code,
            "duration_ms": duration_ms,
        }

        if response.status_code >= 500:
            logger.error("Affirm API error", extra=log_context)
        else:
            logger.warning("Affirm rejected request", extra=log_context)

        raise AffirmRequestError(
            message,
            status_code=response.status_code,
            affirm_code=affirm_code,
        )

    def _handle_transport_error(
        self,
        error: requests.RequestException,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate requests transport exceptions to domain exceptions.

        Raises:
            AffirmTimeoutError: Request timed out
            AffirmConnectionError: Any other transport failure
        """
        logger = self.get_logger()

        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, requests.Timeout):
            logger.error("Affirm request timed out", extra=log_context)
            raise AffirmTimeoutError(
                f"Affirm did not respond within {self.config.timeout_seconds} seconds"
            ) from error

        logger.error(
            "Connection error to Affirm",
            extra=log_context,
            exc_info=True,
        )
        raise AffirmConnectionError("Could not connect to Affirm") from error


def build_client(
    config: AffirmConfig,
    session: requests.Session | None = None,
) -> AffirmClient:
    """
    Create an AffirmClient for the given configuration.

    Args:
        config: Affirm credentials and environment
        session: Optional requests session (tests inject a mock)
    """
    return AffirmClient(config, session=session)
