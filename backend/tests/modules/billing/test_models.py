"""Tests for billing models."""

import pytest
from pydantic import ValidationError

from modules.billing.models import CheckoutRequest, WebhookEventType


class TestCheckoutRequest:
    def test_camel_case(self):
        request = CheckoutRequest.model_validate(
            {
                "priceId": "price_123",
                "successUrl": "https://app.example.com/onboarding?session_id={CHECKOUT_SESSION_ID}",
                "cancelUrl": "https://app.example.com/plans",
            }
        )
        assert request.price_id == "price_123"
        assert str(request.cancel_url) == "https://app.example.com/plans"

    def test_snake_case(self):
        request = CheckoutRequest.model_validate(
            {
                "price_id": "price_123",
                "success_url": "https://app.example.com/done",
                "cancel_url": "https://app.example.com/plans",
            }
        )
        assert request.price_id == "price_123"

    def test_rejects_relative_urls(self):
        with pytest.raises(ValidationError):
            CheckoutRequest.model_validate(
                {"priceId": "price_123", "successUrl": "/done", "cancelUrl": "/plans"}
            )

    def test_requires_price(self):
        with pytest.raises(ValidationError):
            CheckoutRequest.model_validate(
                {"successUrl": "https://a.example.com", "cancelUrl": "https://a.example.com"}
            )


class TestWebhookEventType:
    def test_handled_types(self):
        assert {t.value for t in WebhookEventType} == {
            "checkout.session.completed",
            "customer.subscription.created",
            "customer.subscription.updated",
            "customer.subscription.deleted",
            "invoice.payment_succeeded",
            "invoice.payment_failed",
        }
