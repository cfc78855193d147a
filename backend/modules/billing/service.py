"""
Billing reconciler.

Keeps the subscription fields of user_profiles in step with Stripe.
Stripe is the source of truth: every write here is driven either by a
verified webhook event or by a checkout the user just completed, and
each handler overwrites fields from the event payload so redelivery of
the same event converges on the same row.
"""

import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional

import stripe

from modules.auth.interfaces import IIdentityRepository, IUserAccountRepository
from modules.auth.repository import IdentityExistsError
from shared.exceptions import AllAccessError

from .exceptions import (
    CheckoutSessionFailedError,
    ProductNotFoundError,
    ProductsFetchFailedError,
    SubscriptionCancelFailedError,
    SubscriptionDetailsFetchFailedError,
    SubscriptionNotFoundError,
    WebhookConfigError,
    WebhookProcessingFailedError,
)
from .gateway import construct_webhook_event
from .interfaces import IBillingService, IPaymentGateway
from .models import (
    ARTIST_PLAN_FEATURES,
    CheckoutSession,
    PaymentStatus,
    Product,
    ProductPrice,
    SubscriptionDetails,
    WebhookEventType,
)

logger = logging.getLogger(__name__)

ONBOARDING_TOKEN_LENGTH = 32
TEMP_PASSWORD_LENGTH = 16
_TOKEN_ALPHABET = string.ascii_letters + string.digits
_PASSWORD_ALPHABET = _TOKEN_ALPHABET + "!@#$%^&*"


def generate_onboarding_token() -> str:
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(ONBOARDING_TOKEN_LENGTH))


def generate_temp_password() -> str:
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(TEMP_PASSWORD_LENGTH))


def from_unix(timestamp: Optional[int]) -> Optional[datetime]:
    if not timestamp:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def session_onboarding_token(session: dict[str, Any]) -> Optional[str]:
    """The onboarding token carried in checkout session metadata, if any."""
    token = (session.get("metadata") or {}).get("onboarding_token")
    if not isinstance(token, str) or not token:
        return None
    return token


def session_customer_email(session: dict[str, Any]) -> Optional[str]:
    return (session.get("customer_details") or {}).get("email")


EventHandler = Callable[[dict[str, Any], dict[str, Any]], Awaitable[None]]


class BillingService(IBillingService):
    """
    Stripe-backed implementation of the billing service.

    Args:
        accounts: user_profiles repository
        identities: Supabase auth admin repository
        gateway: Stripe API wrapper
        webhook_secret: STRIPE_WEBHOOK_SECRET; webhooks are refused without it
        onboarding_token_ttl: How long a new account may complete onboarding
        clock: Current time, injectable for tests
    """

    def __init__(
        self,
        accounts: IUserAccountRepository,
        identities: IIdentityRepository,
        gateway: IPaymentGateway,
        webhook_secret: str,
        onboarding_token_ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._accounts = accounts
        self._identities = identities
        self._gateway = gateway
        self._webhook_secret = webhook_secret
        self._onboarding_token_ttl = onboarding_token_ttl
        self._clock = clock

        self._handlers: dict[str, EventHandler] = {
            WebhookEventType.CHECKOUT_SESSION_COMPLETED.value: self._on_checkout_completed,
            WebhookEventType.SUBSCRIPTION_CREATED.value: self._on_subscription_changed,
            WebhookEventType.SUBSCRIPTION_UPDATED.value: self._on_subscription_changed,
            WebhookEventType.SUBSCRIPTION_DELETED.value: self._on_subscription_deleted,
            WebhookEventType.INVOICE_PAYMENT_SUCCEEDED.value: self._on_payment_succeeded,
            WebhookEventType.INVOICE_PAYMENT_FAILED.value: self._on_payment_failed,
        }

    # -------------------------------------------------------------------------
    # Checkout and cancellation
    # -------------------------------------------------------------------------

    async def create_checkout_session(
        self,
        customer_id: Optional[str],
        price_id: str,
        success_url: str,
        cancel_url: str,
        onboarding_token: Optional[str] = None,
    ) -> CheckoutSession:
        token = onboarding_token or generate_onboarding_token()
        metadata = {
            "customer_id": customer_id or "anonymous",
            "onboarding_token": token,
        }

        try:
            session = self._gateway.create_checkout_session(
                price_id=price_id,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
                customer_id=customer_id,
            )
        except stripe.StripeError as e:
            logger.error("Error creating checkout session: %s", e)
            raise CheckoutSessionFailedError(getattr(e, "user_message", None)) from e

        return CheckoutSession(
            session_id=session["id"],
            url=session.get("url"),
            onboarding_token=token,
        )

    async def cancel_subscription(self, subscription_id: str) -> None:
        try:
            self._gateway.cancel_subscription(subscription_id)
            return
        except stripe.StripeError as e:
            cancel_error = e

        # Stripe refuses to cancel twice; treat that as success.
        try:
            subscription = self._gateway.retrieve_subscription(subscription_id)
        except stripe.StripeError:
            subscription = {}

        if subscription.get("status") == "canceled":
            logger.info("Subscription %s was already canceled", subscription_id)
            return

        logger.error("Error canceling subscription %s: %s", subscription_id, cancel_error)
        raise SubscriptionCancelFailedError(subscription_id) from cancel_error

    async def cancel_for_user(self, user_id: str) -> str:
        account = self._accounts.get_by_id(user_id)
        if account is None or not account.stripe_subscription_id:
            raise SubscriptionNotFoundError(user_id)

        await self.cancel_subscription(account.stripe_subscription_id)
        return account.stripe_subscription_id

    # -------------------------------------------------------------------------
    # Webhooks
    # -------------------------------------------------------------------------

    async def process_webhook_event(self, payload: bytes, signature: str) -> dict[str, Any]:
        if not self._webhook_secret:
            logger.error("Missing STRIPE_WEBHOOK_SECRET environment variable")
            raise WebhookConfigError()

        event = construct_webhook_event(payload, signature, self._webhook_secret)
        logger.info("Received Stripe webhook: %s (%s)", event["type"], event.get("id"))

        await self.dispatch_event(event)
        return event

    async def dispatch_event(self, event: dict[str, Any]) -> None:
        """Apply an already-verified event."""
        handler = self._handlers.get(event["type"])
        if handler is None:
            logger.debug("Unhandled webhook event type: %s", event["type"])
            return

        obj = (event.get("data") or {}).get("object") or {}
        try:
            await handler(obj, event)
        except AllAccessError:
            raise
        except Exception as e:
            logger.error("Failed to process webhook %s (%s)", event["type"], event.get("id"), exc_info=True)
            raise WebhookProcessingFailedError(event["type"]) from e

    async def _on_checkout_completed(self, session: dict[str, Any], event: dict[str, Any]) -> None:
        await self.handle_checkout_completed(session)

    async def _on_subscription_changed(self, subscription: dict[str, Any], event: dict[str, Any]) -> None:
        account_id = self._account_for_customer(subscription.get("customer"), event)
        if account_id is None:
            return

        # Newer API versions moved the billing period onto the subscription item.
        items = (subscription.get("items") or {}).get("data") or []
        item = items[0] if items else {}

        period_start = subscription.get("current_period_start") or item.get("current_period_start")
        period_end = subscription.get("current_period_end") or item.get("current_period_end")

        self._accounts.update_fields(
            account_id,
            {
                "stripe_subscription_id": subscription.get("id"),
                "subscription_status": subscription.get("status"),
                "subscription_plan_id": (item.get("price") or {}).get("id"),
                "current_period_start": from_unix(period_start),
                "current_period_end": from_unix(period_end),
                "cancel_at_period_end": bool(subscription.get("cancel_at_period_end")),
            },
        )
        logger.info("Updated subscription for user: %s", account_id)

    async def _on_subscription_deleted(self, subscription: dict[str, Any], event: dict[str, Any]) -> None:
        account_id = self._account_for_customer(subscription.get("customer"), event)
        if account_id is None:
            return

        self._accounts.update_fields(
            account_id,
            {
                "subscription_status": "canceled",
                "cancel_at_period_end": True,
            },
        )
        logger.info("Marked subscription as canceled for user: %s", account_id)

    async def _on_payment_succeeded(self, invoice: dict[str, Any], event: dict[str, Any]) -> None:
        account_id = self._account_for_customer(invoice.get("customer"), event)
        if account_id is None:
            return

        paid_at = (invoice.get("status_transitions") or {}).get("paid_at") or event.get("created")
        self._accounts.update_fields(
            account_id,
            {
                "last_payment_date": from_unix(paid_at),
                "last_payment_amount_cents": invoice.get("amount_paid"),
                "last_payment_status": PaymentStatus.SUCCEEDED.value,
            },
        )
        logger.info("Recorded successful payment for user: %s", account_id)

    async def _on_payment_failed(self, invoice: dict[str, Any], event: dict[str, Any]) -> None:
        account_id = self._account_for_customer(invoice.get("customer"), event)
        if account_id is None:
            return

        self._accounts.update_fields(
            account_id,
            {"last_payment_status": PaymentStatus.FAILED.value},
        )
        logger.warning("Recorded failed payment for user: %s", account_id)

    def _account_for_customer(self, customer_id: Optional[str], event: dict[str, Any]) -> Optional[str]:
        account = self._accounts.find_by_customer_id(customer_id) if customer_id else None
        if account is None:
            logger.warning(
                "User not found for Stripe customer %s (event %s, %s)",
                customer_id,
                event.get("id"),
                event.get("type"),
            )
            return None
        return account.id

    # -------------------------------------------------------------------------
    # Account creation after checkout
    # -------------------------------------------------------------------------

    async def handle_checkout_completed(self, session: dict[str, Any]) -> Optional[str]:
        """
        Create the auth identity and account row for a completed checkout.

        The onboarding token is taken from the session metadata so the link
        handed out at checkout keeps working. If the identity already exists
        (a redelivered event, or a returning customer) it is reused and its
        row is updated with the same token.

        Returns:
            The account ID, or None when the session has no customer email
        """
        session_id = session.get("id")
        customer_id = session.get("customer")
        email = session_customer_email(session)
        if not email:
            logger.error("No email found in checkout session: %s", session_id)
            return None

        session_token = session_onboarding_token(session)
        token = session_token or generate_onboarding_token()
        expires_at = self._clock() + self._onboarding_token_ttl

        try:
            identity = self._identities.create_identity(
                email=email,
                password=generate_temp_password(),
                user_metadata={
                    "stripe_customer_id": customer_id,
                    "stripe_session_id": session_id,
                    "onboarding_token": token,
                    "payment_completed": True,
                    "created_via": "stripe_checkout",
                },
            )
        except IdentityExistsError:
            identity = self._identities.find_identity_by_email(email)
            if identity is None:
                logger.error("Could not find existing user for %s", email)
                return None

            existing = self._accounts.get_by_id(identity.id)
            if existing is not None:
                token = session_token or existing.onboarding_token or token
                self._accounts.update_fields(
                    identity.id,
                    {
                        "stripe_session_id": session_id,
                        "stripe_customer_id": customer_id,
                        "onboarding_token": token,
                        "onboarding_token_expires": expires_at,
                    },
                )
                logger.info("Updated existing profile for user: %s", identity.id)
                return identity.id

        self._accounts.insert(
            {
                "id": identity.id,
                "email": email,
                "stripe_customer_id": customer_id,
                "stripe_session_id": session_id,
                "onboarding_token": token,
                "onboarding_token_expires": expires_at,
                "subscription_status": "pending",
            }
        )
        logger.info("Created user profile %s for checkout session: %s", identity.id, session_id)
        return identity.id

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    async def get_subscription_details(self, user_id: str) -> SubscriptionDetails:
        try:
            account = self._accounts.get_by_id(user_id)
        except Exception as e:
            logger.error("Failed to fetch subscription details for %s", user_id, exc_info=True)
            raise SubscriptionDetailsFetchFailedError() from e

        if account is None:
            return SubscriptionDetails()
        return SubscriptionDetails(**account.model_dump(include=set(SubscriptionDetails.model_fields)))

    async def list_products(self) -> list[Product]:
        """
        The Artist Plan with its recurring monthly price.

        Raises:
            ProductNotFoundError: If the product or a monthly price is missing
            ProductsFetchFailedError: If Stripe cannot be reached
        """
        try:
            products = self._gateway.list_products()
            artist_product = next(
                (p for p in products if "artist" in (p.get("name") or "").lower()),
                None,
            )
            if artist_product is None:
                raise ProductNotFoundError(
                    "Artist Plan product not found in Stripe",
                    code="SUBSCRIPTION_PRODUCT_NOT_FOUND",
                )

            prices = self._gateway.list_prices(artist_product["id"])
        except stripe.StripeError as e:
            logger.error("Failed to list Stripe products: %s", e)
            raise ProductsFetchFailedError() from e

        monthly = next(
            (p for p in prices if (p.get("recurring") or {}).get("interval") == "month"),
            None,
        )
        if monthly is None:
            raise ProductNotFoundError(
                "No recurring monthly price found for Artist Plan",
                code="SUBSCRIPTION_PRICE_NOT_FOUND",
            )

        return [
            Product(
                id=artist_product["id"],
                name=artist_product["name"],
                description=artist_product.get("description"),
                prices=[
                    ProductPrice(
                        id=monthly["id"],
                        amount=monthly.get("unit_amount"),
                        currency=monthly.get("currency"),
                        interval=monthly["recurring"]["interval"],
                        type=monthly.get("type"),
                    )
                ],
                features=list(ARTIST_PLAN_FEATURES),
            )
        ]
