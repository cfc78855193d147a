"""
Billing module data models.

These models define the data structures used by the billing module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, AnyHttpUrl, BaseModel, ConfigDict, Field


class WebhookEventType(str, Enum):
    """Stripe event types the reconciler acts on."""

    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
    SUBSCRIPTION_CREATED = "customer.subscription.created"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"
    INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
    INVOICE_PAYMENT_FAILED = "invoice.payment_failed"


class PaymentStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CheckoutRequest(BaseModel):
    """
    Body of POST /api/subscription/checkout.

    Accepts either camelCase or snake_case keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    price_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("priceId", "price_id"),
    )
    success_url: AnyHttpUrl = Field(
        ...,
        validation_alias=AliasChoices("successUrl", "success_url"),
    )
    cancel_url: AnyHttpUrl = Field(
        ...,
        validation_alias=AliasChoices("cancelUrl", "cancel_url"),
    )


class CheckoutSession(BaseModel):
    """A created Stripe Checkout session."""

    session_id: str
    url: Optional[str] = None
    onboarding_token: str


class SubscriptionDetails(BaseModel):
    """Subscription fields of the account row, as shown on the status endpoint."""

    subscription_status: Optional[str] = None
    subscription_plan_id: Optional[str] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: Optional[bool] = None
    last_payment_date: Optional[datetime] = None
    last_payment_amount_cents: Optional[int] = None
    last_payment_status: Optional[str] = None
    stripe_customer_id: Optional[str] = None


class ProductPrice(BaseModel):
    id: str
    amount: Optional[int] = None
    currency: Optional[str] = None
    interval: Optional[str] = None
    type: Optional[str] = None


class Product(BaseModel):
    """A subscription plan offered on the plan selection page."""

    id: str
    name: str
    description: Optional[str] = None
    prices: list[ProductPrice] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)


ARTIST_PLAN_FEATURES = [
    "Unlimited releases",
    "Song and lyric management",
    "Analytics and insights",
    "Label copy generation",
    "Split sheet management",
]
