"""Tests for the Stripe gateway and webhook verification."""

import json

import pytest
from unittest.mock import MagicMock, patch

from modules.billing.exceptions import StripeConfigError, WebhookSignatureInvalidError
from modules.billing.gateway import StripeGateway, construct_webhook_event
from tests.conftest import sign_webhook_payload

SECRET = "whsec_unit"


def event_payload(event_type="invoice.payment_failed") -> bytes:
    return json.dumps({"id": "evt_1", "type": event_type, "data": {"object": {}}}).encode()


class TestConstructWebhookEvent:
    def test_valid_signature(self):
        payload = event_payload()
        event = construct_webhook_event(payload, sign_webhook_payload(payload, SECRET), SECRET)
        assert event["id"] == "evt_1"
        assert event["type"] == "invoice.payment_failed"

    def test_wrong_secret(self):
        payload = event_payload()
        with pytest.raises(WebhookSignatureInvalidError):
            construct_webhook_event(payload, sign_webhook_payload(payload, "whsec_other"), SECRET)

    def test_tampered_body(self):
        payload = event_payload()
        signature = sign_webhook_payload(payload, SECRET)
        with pytest.raises(WebhookSignatureInvalidError):
            construct_webhook_event(event_payload("invoice.payment_succeeded"), signature, SECRET)

    def test_stale_timestamp(self):
        payload = event_payload()
        signature = sign_webhook_payload(payload, SECRET, timestamp=1_000_000)
        with pytest.raises(WebhookSignatureInvalidError):
            construct_webhook_event(payload, signature, SECRET)

    def test_garbage_header(self):
        with pytest.raises(WebhookSignatureInvalidError):
            construct_webhook_event(event_payload(), "not-a-signature", SECRET)

    def test_signed_non_event_body(self):
        payload = b'["not", "an", "event"]'
        with pytest.raises(WebhookSignatureInvalidError):
            construct_webhook_event(payload, sign_webhook_payload(payload, SECRET), SECRET)


class TestStripeGateway:
    def test_missing_key(self):
        with pytest.raises(StripeConfigError):
            StripeGateway("").list_products()

    @patch("modules.billing.gateway.stripe.checkout.Session.create")
    def test_create_checkout_session(self, mock_create):
        mock_create.return_value = MagicMock(id="cs_1")
        mock_create.return_value.to_dict.return_value = {"id": "cs_1", "url": "https://checkout"}

        session = StripeGateway("sk_test").create_checkout_session(
            price_id="price_1",
            success_url="https://a.example.com/ok",
            cancel_url="https://a.example.com/no",
            metadata={"onboarding_token": "tok"},
        )

        assert session == {"id": "cs_1", "url": "https://checkout"}
        kwargs = mock_create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test"
        assert kwargs["mode"] == "subscription"
        assert kwargs["line_items"] == [{"price": "price_1", "quantity": 1}]
        assert kwargs["metadata"] == {"onboarding_token": "tok"}
        assert "customer" not in kwargs

    @patch("modules.billing.gateway.stripe.Subscription.cancel")
    def test_cancel_subscription(self, mock_cancel):
        mock_cancel.return_value.to_dict.return_value = {"id": "sub_1", "status": "canceled"}

        result = StripeGateway("sk_test").cancel_subscription("sub_1")

        assert result["status"] == "canceled"
        mock_cancel.assert_called_once_with("sub_1", api_key="sk_test")
