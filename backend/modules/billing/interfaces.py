"""
Billing module interfaces.

Other modules should depend on IBillingService, not the concrete implementation.
The onboarding module uses it to re-run account creation when a webhook
was missed, and IPaymentGateway to read checkout sessions back from Stripe.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import CheckoutSession, Product, SubscriptionDetails


@runtime_checkable
class IPaymentGateway(Protocol):
    """
    Payment provider operations.

    Implementations raise ``stripe.StripeError`` subclasses on provider
    failures and StripeConfigError when no API key is configured.
    """

    def create_checkout_session(
        self,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        customer_id: Optional[str] = None,
    ) -> dict[str, Any]:
        ...

    def retrieve_checkout_session(self, session_id: str) -> dict[str, Any]:
        ...

    def cancel_subscription(self, subscription_id: str) -> dict[str, Any]:
        ...

    def retrieve_subscription(self, subscription_id: str) -> dict[str, Any]:
        ...

    def list_products(self) -> list[dict[str, Any]]:
        ...

    def list_prices(self, product_id: str) -> list[dict[str, Any]]:
        ...


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for subscription billing operations.

    Subscription state on the account row is written only through this
    service, in response to verified Stripe events.
    """

    async def create_checkout_session(
        self,
        customer_id: Optional[str],
        price_id: str,
        success_url: str,
        cancel_url: str,
        onboarding_token: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Create a subscription checkout session.

        A new onboarding token is generated when none is given and is
        carried in the session metadata.

        Raises:
            CheckoutSessionFailedError: If Stripe rejects the request
        """
        ...

    async def cancel_subscription(self, subscription_id: str) -> None:
        """
        Cancel a subscription. Canceling an already-canceled one succeeds.

        Raises:
            SubscriptionCancelFailedError: On any other provider failure
        """
        ...

    async def cancel_for_user(self, user_id: str) -> str:
        """
        Cancel the subscription recorded on the user's account.

        Returns:
            The canceled subscription ID

        Raises:
            SubscriptionNotFoundError: If the account has no subscription
        """
        ...

    async def process_webhook_event(self, payload: bytes, signature: str) -> dict[str, Any]:
        """
        Verify and apply one Stripe webhook delivery.

        Raises:
            WebhookConfigError: If no webhook secret is configured
            WebhookSignatureInvalidError: If verification fails
        """
        ...

    async def handle_checkout_completed(self, session: dict[str, Any]) -> Optional[str]:
        """Create (or reuse) the auth identity and account row for a paid checkout."""
        ...

    async def get_subscription_details(self, user_id: str) -> SubscriptionDetails:
        ...

    async def list_products(self) -> list[Product]:
        ...
