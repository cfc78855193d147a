"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AllAccessError,
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class BillingError(AllAccessError):
    """Base exception for billing-related errors."""

    pass


class StripeConfigError(ConfigurationError):
    """Raised when STRIPE_SECRET_KEY is not set."""

    def __init__(self):
        super().__init__(
            "Stripe is not configured",
            code="STRIPE_CONFIG_ERROR",
        )


class WebhookConfigError(ConfigurationError):
    """Raised when STRIPE_WEBHOOK_SECRET is not set."""

    def __init__(self):
        super().__init__(
            "Webhook secret not configured",
            code="STRIPE_WEBHOOK_CONFIG_ERROR",
        )


class WebhookSignatureInvalidError(ValidationError):
    """
    Raised when a webhook payload fails signature verification.

    Nothing has been parsed or written when this is raised.
    """

    def __init__(self):
        super().__init__(
            "Invalid signature",
            code="WEBHOOK_SIGNATURE_INVALID",
        )


class CheckoutSessionFailedError(ExternalServiceError):
    """Raised when Stripe refuses to create a checkout session."""

    def __init__(self, stripe_error: Optional[str] = None):
        super().__init__(
            "Failed to create checkout session",
            service="stripe",
            code="SUBSCRIPTION_CHECKOUT_CREATE_FAILED",
            details={"stripe_error": stripe_error} if stripe_error else None,
        )


class SubscriptionCancelFailedError(ExternalServiceError):
    """Raised when a subscription cannot be canceled and is not already canceled."""

    def __init__(self, subscription_id: str):
        super().__init__(
            "Failed to cancel subscription",
            service="stripe",
            code="SUBSCRIPTION_CANCEL_FAILED",
            details={"subscription_id": subscription_id},
        )


class SubscriptionNotFoundError(NotFoundError):
    """Raised when the account has no Stripe subscription on record."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__(
            "No active subscription found",
            code="SUBSCRIPTION_NOT_FOUND",
        )
        if user_id:
            self.details["user_id"] = user_id


class SubscriptionDetailsFetchFailedError(ExternalServiceError):
    """Raised when the account row cannot be read for the status endpoint."""

    def __init__(self):
        super().__init__(
            "Failed to fetch subscription details",
            service="supabase",
            code="SUBSCRIPTION_DETAILS_FETCH_FAILED",
        )


class ProductNotFoundError(NotFoundError):
    """Raised when the Artist Plan product or its monthly price is missing in Stripe."""

    def __init__(self, message: str, code: str):
        super().__init__(message, code=code)


class ProductsFetchFailedError(ExternalServiceError):
    """Raised when Stripe products or prices cannot be listed."""

    def __init__(self):
        super().__init__(
            "Failed to get subscription products",
            service="stripe",
            code="SUBSCRIPTION_PRODUCTS_FETCH_FAILED",
        )


class WebhookProcessingFailedError(ExternalServiceError):
    """Raised when a verified event cannot be applied to the account rows."""

    def __init__(self, event_type: str):
        super().__init__(
            "Webhook processing failed",
            service="supabase",
            code="WEBHOOK_PROCESSING_FAILED",
            details={"event_type": event_type},
        )
