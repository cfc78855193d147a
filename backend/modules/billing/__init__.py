"""
Billing module.

Handles Stripe checkout, subscription cancellation and webhook
reconciliation of subscription state onto user accounts.

Public API:
- IBillingService: Interface for billing operations
- IPaymentGateway: Interface for Stripe calls
- StripeGateway: Stripe SDK implementation of IPaymentGateway
- CheckoutSession, SubscriptionDetails, Product: Models
- Billing exceptions: WebhookSignatureInvalidError, etc.
"""

from .interfaces import IBillingService, IPaymentGateway
from .gateway import StripeGateway, construct_webhook_event
from .models import (
    CheckoutRequest,
    CheckoutSession,
    PaymentStatus,
    Product,
    ProductPrice,
    SubscriptionDetails,
    WebhookEventType,
)
from .exceptions import (
    BillingError,
    StripeConfigError,
    WebhookConfigError,
    WebhookSignatureInvalidError,
    CheckoutSessionFailedError,
    SubscriptionCancelFailedError,
    SubscriptionNotFoundError,
    SubscriptionDetailsFetchFailedError,
    ProductNotFoundError,
    ProductsFetchFailedError,
    WebhookProcessingFailedError,
)

__all__ = [
    # Interfaces
    "IBillingService",
    "IPaymentGateway",
    # Gateway
    "StripeGateway",
    "construct_webhook_event",
    # Models
    "CheckoutRequest",
    "CheckoutSession",
    "PaymentStatus",
    "Product",
    "ProductPrice",
    "SubscriptionDetails",
    "WebhookEventType",
    # Exceptions
    "BillingError",
    "StripeConfigError",
    "WebhookConfigError",
    "WebhookSignatureInvalidError",
    "CheckoutSessionFailedError",
    "SubscriptionCancelFailedError",
    "SubscriptionNotFoundError",
    "SubscriptionDetailsFetchFailedError",
    "ProductNotFoundError",
    "ProductsFetchFailedError",
    "WebhookProcessingFailedError",
]
