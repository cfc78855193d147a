"""Tests for billing exceptions."""

from modules.billing.exceptions import (
    CheckoutSessionFailedError,
    ProductNotFoundError,
    StripeConfigError,
    SubscriptionCancelFailedError,
    SubscriptionNotFoundError,
    WebhookConfigError,
    WebhookSignatureInvalidError,
)
from shared.exceptions import ConfigurationError, ExternalServiceError


class TestBillingExceptions:
    def test_webhook_signature_invalid(self):
        error = WebhookSignatureInvalidError()
        assert error.status_code == 400
        assert error.code == "WEBHOOK_SIGNATURE_INVALID"
        assert error.message == "Invalid signature"

    def test_webhook_config(self):
        error = WebhookConfigError()
        assert isinstance(error, ConfigurationError)
        assert error.status_code == 500
        assert error.code == "STRIPE_WEBHOOK_CONFIG_ERROR"
        assert error.message == "Webhook secret not configured"

    def test_stripe_config(self):
        assert StripeConfigError().code == "STRIPE_CONFIG_ERROR"

    def test_checkout_failed_carries_stripe_message(self):
        error = CheckoutSessionFailedError("No such price")
        assert isinstance(error, ExternalServiceError)
        assert error.code == "SUBSCRIPTION_CHECKOUT_CREATE_FAILED"
        assert error.details == {"stripe_error": "No such price", "service": "stripe"}

    def test_checkout_failed_without_message(self):
        assert CheckoutSessionFailedError().details == {"service": "stripe"}

    def test_cancel_failed(self):
        error = SubscriptionCancelFailedError("sub_1")
        assert error.code == "SUBSCRIPTION_CANCEL_FAILED"
        assert error.details["subscription_id"] == "sub_1"

    def test_subscription_not_found(self):
        error = SubscriptionNotFoundError("u1")
        assert error.status_code == 404
        assert error.message == "No active subscription found"

    def test_product_not_found(self):
        error = ProductNotFoundError("missing", code="SUBSCRIPTION_PRICE_NOT_FOUND")
        assert error.status_code == 404
        assert error.code == "SUBSCRIPTION_PRICE_NOT_FOUND"
