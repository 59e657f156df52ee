"""
Tests for AffirmGateway.

These tests cover:
- authorize: precondition checks, transaction id persistence, declines
- capture / void / credit: success messages and provider declines
- purchase and try_void composites
- Failure containment: no Affirm error escapes the gateway
"""

from unittest.mock import patch

import pytest

from payments.adapters import AffirmConfig
from payments.exceptions import (
    AffirmConnectionError,
    AffirmRequestError,
    AffirmTimeoutError,
    PaymentValidationError,
)
from payments.services import AffirmGateway
from payments.tests.factories import AffirmTransactionFactory


CHECKOUT_TOKEN = "TKLKJ71GOP9YSASU"
TRANSACTION_ID = "N330-Z6D4"


@pytest.fixture
def gateway(mock_affirm_client):
    """AffirmGateway using the mock Affirm client."""
    return AffirmGateway(client=mock_affirm_client)


class TestConstruction:
    """Tests for building the gateway from configuration."""

    def test_builds_client_from_config(self):
        config = AffirmConfig("PUBLIC_API_KEY", "PRIVATE_API_KEY", test_mode=True)

        gateway = AffirmGateway(config=config)

        assert gateway.client.config is config
        assert gateway.client.config.environment == "sandbox"

    def test_builds_client_from_settings(self):
        """Should use AFFIRM_* settings when nothing is passed."""
        gateway = AffirmGateway()

        assert gateway.client.config.public_api_key == "PUBLIC_API_KEY"
        assert gateway.client.config.private_api_key == "PRIVATE_API_KEY"

    def test_missing_keys_fail_at_construction(self, settings):
        settings.AFFIRM_PRIVATE_API_KEY = ""

        with pytest.raises(PaymentValidationError):
            AffirmGateway()


class TestAuthorize:
    """Tests for AffirmGateway.authorize."""

    def test_success(self, gateway, pending_record, mock_affirm_client, snapshot):
        """Should return an approved result with the transaction id."""
        mock_affirm_client.authorize.return_value = snapshot(provider_status_code=2)

        result = gateway.authorize(pending_record)

        mock_affirm_client.authorize.assert_called_once_with(CHECKOUT_TOKEN)
        assert result.success is True
        assert result.message == "Transaction Approved"
        assert result.authorization_id == TRANSACTION_ID
        assert result.amount == 42499

    def test_persists_transaction_id(
        self, gateway, pending_record, mock_affirm_client, snapshot
    ):
        """Should move transaction_id from NULL to Affirm's id."""
        mock_affirm_client.authorize.return_value = snapshot()
        assert pending_record.transaction_id is None

        gateway.authorize(pending_record)

        pending_record.refresh_from_db()
        assert pending_record.transaction_id == TRANSACTION_ID

    def test_provider_error(self, gateway, pending_record, mock_affirm_client):
        """Should return Affirm's message and leave the record unchanged."""
        mock_affirm_client.authorize.side_effect = AffirmRequestError(
            "The transaction has already been authorized."
        )

        result = gateway.authorize(pending_record)

        assert result.success is False
        assert result.message == "The transaction has already been authorized."
        pending_record.refresh_from_db()
        assert pending_record.transaction_id is None

    def test_already_authorized_skips_provider(
        self, gateway, authorized_record, mock_affirm_client
    ):
        """Should fail fast without calling Affirm."""
        result = gateway.authorize(authorized_record)

        assert result.success is False
        assert result.params["error_code"] == "ALREADY_AUTHORIZED"
        mock_affirm_client.authorize.assert_not_called()
        authorized_record.refresh_from_db()
        assert authorized_record.transaction_id == TRANSACTION_ID

    def test_missing_checkout_token(self, gateway, pending_record, mock_affirm_client):
        pending_record.checkout_token = ""

        result = gateway.authorize(pending_record)

        assert result.success is False
        assert result.params["error_code"] == "MISSING_CHECKOUT_TOKEN"
        mock_affirm_client.authorize.assert_not_called()

    def test_timeout_fails_closed(self, gateway, pending_record, mock_affirm_client):
        """Should report a timed-out authorization as a failure."""
        mock_affirm_client.authorize.side_effect = AffirmTimeoutError(
            "Affirm did not respond within 10 seconds"
        )

        result = gateway.authorize(pending_record)

        assert result.success is False
        assert result.message == "Affirm did not respond within 10 seconds"
        pending_record.refresh_from_db()
        assert pending_record.transaction_id is None

    def test_concurrent_authorization_loses(
        self, gateway, pending_record, mock_affirm_client, snapshot
    ):
        """Should fail if another authorization wrote the id first."""
        mock_affirm_client.authorize.return_value = snapshot(id="SECOND-ID")
        type(pending_record).objects.filter(pk=pending_record.pk).update(
            transaction_id=TRANSACTION_ID
        )

        result = gateway.authorize(pending_record)

        assert result.success is False
        pending_record.refresh_from_db()
        assert pending_record.transaction_id == TRANSACTION_ID

    def test_transaction_id_held_by_other_record(
        self, gateway, pending_record, mock_affirm_client, snapshot
    ):
        """Should return a failed result when Affirm's id is already stored elsewhere."""
        AffirmTransactionFactory(transaction_id=TRANSACTION_ID)
        mock_affirm_client.authorize.return_value = snapshot()

        result = gateway.authorize(pending_record)

        assert result.success is False
        assert result.message == "Affirm transaction is already recorded for another checkout"
        assert result.params["error_code"] == "TRANSACTION_ID_CONFLICT"
        pending_record.refresh_from_db()
        assert pending_record.transaction_id is None


class TestCapture:
    """Tests for AffirmGateway.capture."""

    def test_success(self, gateway, mock_affirm_client, event):
        mock_affirm_client.capture.return_value = event(id="EVT-1", amount=42499)

        result = gateway.capture(TRANSACTION_ID)

        mock_affirm_client.capture.assert_called_once_with(TRANSACTION_ID)
        assert result.success is True
        assert result.message == "Transaction Captured"
        assert result.authorization_id == TRANSACTION_ID
        assert result.params == {"event_id": "EVT-1"}

    def test_provider_error(self, gateway, mock_affirm_client):
        mock_affirm_client.capture.side_effect = AffirmRequestError(
            "The transaction has already been captured."
        )

        result = gateway.capture(TRANSACTION_ID)

        assert result.success is False
        assert result.message == "The transaction has already been captured."

    @pytest.mark.parametrize("transaction_id", [None, ""])
    def test_unauthorized_never_calls_provider(
        self, gateway, mock_affirm_client, transaction_id
    ):
        result = gateway.capture(transaction_id)

        assert result.success is False
        assert result.params["error_code"] == "NOT_AUTHORIZED"
        mock_affirm_client.capture.assert_not_called()


class TestVoid:
    """Tests for AffirmGateway.void."""

    def test_success(self, gateway, mock_affirm_client, event):
        mock_affirm_client.void.return_value = event(type="void")

        result = gateway.void(TRANSACTION_ID)

        mock_affirm_client.void.assert_called_once_with(TRANSACTION_ID)
        assert result.success is True
        assert result.message == "Transaction Voided"

    def test_captured_payment(self, gateway, mock_affirm_client):
        """Should surface Affirm's message when the payment was captured."""
        mock_affirm_client.void.side_effect = AffirmRequestError(
            "The transaction has already been captured."
        )

        result = gateway.void(TRANSACTION_ID)

        assert result.success is False
        assert result.message == "The transaction has already been captured."

    def test_unauthorized_never_calls_provider(self, gateway, mock_affirm_client):
        result = gateway.void(None)

        assert result.success is False
        mock_affirm_client.void.assert_not_called()


class TestCredit:
    """Tests for AffirmGateway.credit."""

    def test_success(self, gateway, mock_affirm_client, event):
        """Should report the amount and the refund event id."""
        mock_affirm_client.refund.return_value = event(type="refund", amount=1000)

        result = gateway.credit(1000, TRANSACTION_ID)

        mock_affirm_client.refund.assert_called_once_with(TRANSACTION_ID, 1000)
        assert result.success is True
        assert result.message == "Transaction Credited with 1000"
        assert result.authorization_id == "N330-Z6D4"
        assert result.amount == 1000

    def test_voided_payment(self, gateway, mock_affirm_client):
        mock_affirm_client.refund.side_effect = AffirmRequestError(
            "The transaction has been voided and cannot be refunded."
        )

        result = gateway.credit(1000, TRANSACTION_ID)

        assert result.success is False
        assert result.message == "The transaction has been voided and cannot be refunded."

    @pytest.mark.parametrize("amount", [0, -500])
    def test_non_positive_amount(self, gateway, mock_affirm_client, amount):
        result = gateway.credit(amount, TRANSACTION_ID)

        assert result.success is False
        assert result.message == "Refund amount must be positive"
        mock_affirm_client.refund.assert_not_called()

    def test_unauthorized_never_calls_provider(self, gateway, mock_affirm_client):
        result = gateway.credit(1000, "")

        assert result.success is False
        assert result.params["error_code"] == "NOT_AUTHORIZED"
        mock_affirm_client.refund.assert_not_called()


class TestPurchase:
    """Tests for AffirmGateway.purchase."""

    def test_authorizes_then_captures(
        self, gateway, pending_record, mock_affirm_client, snapshot, event
    ):
        mock_affirm_client.authorize.return_value = snapshot()
        mock_affirm_client.capture.return_value = event(id="EVT-CAPTURE")

        result = gateway.purchase(pending_record)

        mock_affirm_client.capture.assert_called_once_with(TRANSACTION_ID)
        assert result.success is True
        assert result.message == "Transaction Captured"
        assert result.authorization_id == TRANSACTION_ID

    def test_authorization_failure_skips_capture(
        self, gateway, pending_record, mock_affirm_client
    ):
        mock_affirm_client.authorize.side_effect = AffirmRequestError("Declined")

        result = gateway.purchase(pending_record)

        assert result.success is False
        assert result.message == "Declined"
        mock_affirm_client.capture.assert_not_called()


class TestTryVoid:
    """Tests for AffirmGateway.try_void."""

    def test_voids_authorized_transaction(
        self, gateway, mock_affirm_client, snapshot, event
    ):
        mock_affirm_client.read_transaction.return_value = snapshot(status="authorized")
        mock_affirm_client.void.return_value = event(type="void")

        result = gateway.try_void(TRANSACTION_ID)

        assert result.success is True
        assert result.message == "Transaction Voided"

    def test_skips_captured_transaction(self, gateway, mock_affirm_client, snapshot):
        """Should attempt nothing once the transaction is captured."""
        mock_affirm_client.read_transaction.return_value = snapshot(status="captured")

        assert gateway.try_void(TRANSACTION_ID) is None
        mock_affirm_client.void.assert_not_called()

    def test_read_failure(self, gateway, mock_affirm_client):
        mock_affirm_client.read_transaction.side_effect = AffirmConnectionError(
            "Could not connect to Affirm"
        )

        result = gateway.try_void(TRANSACTION_ID)

        assert result.success is False
        assert result.message == "Could not connect to Affirm"


class TestFailureContainment:
    """No Affirm error may escape the gateway."""

    @pytest.mark.parametrize(
        "error",
        [
            AffirmRequestError("rejected"),
            AffirmConnectionError("unreachable"),
            AffirmTimeoutError("timed out"),
        ],
    )
    def test_every_operation_returns_result(self, gateway, mock_affirm_client, error):
        mock_affirm_client.capture.side_effect = error
        mock_affirm_client.void.side_effect = error
        mock_affirm_client.refund.side_effect = error

        for result in (
            gateway.capture(TRANSACTION_ID),
            gateway.void(TRANSACTION_ID),
            gateway.credit(100, TRANSACTION_ID),
        ):
            assert result.success is False
            assert result.message == error.message

    def test_logs_decline(self, gateway, mock_affirm_client):
        mock_affirm_client.void.side_effect = AffirmRequestError("rejected")

        with patch.object(AffirmGateway, "get_logger") as mock_get_logger:
            gateway.void(TRANSACTION_ID)

        mock_get_logger.return_value.warning.assert_called_once()
