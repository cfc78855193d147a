"""
Stripe gateway.

Thin wrapper over the Stripe SDK. Every call passes the API key
explicitly instead of mutating the global ``stripe.api_key``, and
returns plain dicts so the service never handles SDK objects.
"""

import json
import logging
from typing import Any, Optional

import stripe

from .exceptions import StripeConfigError, WebhookSignatureInvalidError

logger = logging.getLogger(__name__)

WEBHOOK_TOLERANCE_SECONDS = 300


def construct_webhook_event(
    payload: bytes,
    signature: str,
    secret: str,
    tolerance: int = WEBHOOK_TOLERANCE_SECONDS,
) -> dict[str, Any]:
    """
    Verify a webhook signature on the raw body, then parse it.

    The body is only decoded as JSON after the signature has been checked
    against the exact bytes Stripe sent.

    Raises:
        WebhookSignatureInvalidError: On a bad, stale or malformed signature
    """
    try:
        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(body, signature, secret, tolerance)
    except (stripe.SignatureVerificationError, UnicodeDecodeError) as e:
        logger.warning("Webhook signature verification failed: %s", e)
        raise WebhookSignatureInvalidError() from e

    try:
        event = json.loads(body)
    except json.JSONDecodeError as e:
        raise WebhookSignatureInvalidError() from e
    if not isinstance(event, dict) or "type" not in event:
        raise WebhookSignatureInvalidError()
    return event


class StripeGateway:
    """Stripe API calls used by billing and onboarding."""

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key

    def _api_key(self) -> str:
        if not self._secret_key:
            raise StripeConfigError()
        return self._secret_key

    def create_checkout_session(
        self,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        customer_id: Optional[str] = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "payment_method_types": ["card"],
            "line_items": [{"price": price_id, "quantity": 1}],
            "mode": "subscription",
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        if customer_id:
            params["customer"] = customer_id

        session = stripe.checkout.Session.create(api_key=self._api_key(), **params)
        logger.info("Created checkout session: %s", session.id)
        return session.to_dict()

    def retrieve_checkout_session(self, session_id: str) -> dict[str, Any]:
        return stripe.checkout.Session.retrieve(session_id, api_key=self._api_key()).to_dict()

    def cancel_subscription(self, subscription_id: str) -> dict[str, Any]:
        subscription = stripe.Subscription.cancel(subscription_id, api_key=self._api_key())
        logger.info("Canceled subscription: %s", subscription_id)
        return subscription.to_dict()

    def retrieve_subscription(self, subscription_id: str) -> dict[str, Any]:
        return stripe.Subscription.retrieve(subscription_id, api_key=self._api_key()).to_dict()

    def list_products(self) -> list[dict[str, Any]]:
        products = stripe.Product.list(active=True, api_key=self._api_key())
        return [product.to_dict() for product in products.data]

    def list_prices(self, product_id: str) -> list[dict[str, Any]]:
        prices = stripe.Price.list(product=product_id, active=True, api_key=self._api_key())
        return [price.to_dict() for price in prices.data]
