"""
Pytest fixtures for Affirm client tests.

This module provides fixtures for testing the Affirm client, including
a mock requests session, canned Affirm responses, and error conditions.

Sections:
    - Configuration Fixtures
    - Mock Session Fixtures
    - Mock Affirm Response Fixtures
"""

from typing import Any
from unittest.mock import MagicMock

import pytest

from payments.adapters import AffirmClient, AffirmConfig


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def affirm_config():
    """Sandbox configuration with test keys."""
    return AffirmConfig(
        public_api_key="PUBLIC_API_KEY",
        private_api_key="PRIVATE_API_KEY",
        test_mode=True,
        timeout_seconds=5,
    )


@pytest.fixture
def checkout_token():
    return "TKLKJ71GOP9YSASU"


@pytest.fixture
def transaction_id():
    return "N330-Z6D4"


# =============================================================================
# Mock Session Fixtures
# =============================================================================


@pytest.fixture
def mock_session():
    """A requests.Session stand-in; set .request.return_value per test."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def affirm_client(affirm_config, mock_session):
    """AffirmClient wired to the mock session."""
    return AffirmClient(affirm_config, session=mock_session)


# =============================================================================
# Mock Affirm Response Fixtures
# =============================================================================


@pytest.fixture
def mock_response():
    """Create a mock requests.Response."""

    def _create(
        status_code: int = 200,
        body: Any = None,
        reason: str = "OK",
        json_error: bool = False,
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.ok = status_code < 400
        response.reason = reason
        if json_error:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = body
        return response

    return _create


@pytest.fixture
def transaction_body(checkout_token, transaction_id):
    """Create an Affirm transaction response body."""

    def _create(**overrides: Any) -> dict[str, Any]:
        body = {
            "id": transaction_id,
            "checkout_id": checkout_token,
            "amount": 42499,
            "order_id": "R100000001",
            "provider_id": 1,
            "status": "authorized",
            "currency": "USD",
        }
        body.update(overrides)
        return body

    return _create


@pytest.fixture
def event_body():
    """Create an Affirm transaction event response body."""

    def _create(**overrides: Any) -> dict[str, Any]:
        body = {
            "id": "EVT-CAPTURE-1",
            "type": "capture",
            "amount": 42499,
        }
        body.update(overrides)
        return body

    return _create


@pytest.fixture
def error_body():
    """Create an Affirm error response body."""

    def _create(
        message: str = "The transaction has already been authorized.",
        code: str = "auth-declined",
        status_code: int = 400,
    ) -> dict[str, Any]:
        return {
            "status_code": status_code,
            "type": "invalid_request",
            "code": code,
            "message": message,
        }

    return _create
