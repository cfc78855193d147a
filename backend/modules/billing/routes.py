"""
Subscription and webhook API endpoints.

Checkout and product listing are public (plan selection happens before
sign-up). Status and cancel require authentication. The webhook endpoint
authenticates the caller by Stripe signature instead of a bearer token.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Header, Request

from api.dependencies import get_access_gate, get_billing_service
from api.middleware.auth import get_current_user
from api.responses import success_response
from modules.auth.interfaces import IAccessGate
from shared.models import AuthenticatedUser

from .interfaces import IBillingService
from .models import CheckoutRequest

router = APIRouter()
webhook_router = APIRouter()


@router.post("/checkout")
async def create_checkout(
    request: CheckoutRequest,
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    """
    Create a Stripe Checkout session for the subscription.

    Anonymous: the account is created when the checkout completes. The
    returned onboarding token must be kept by the client for onboarding.
    """
    session = await service.create_checkout_session(
        customer_id=None,
        price_id=request.price_id,
        success_url=str(request.success_url),
        cancel_url=str(request.cancel_url),
    )
    return success_response(
        {
            "checkoutUrl": session.url,
            "url": session.url,
            "session_id": session.session_id,
            "onboarding_token": session.onboarding_token,
        }
    )


@router.get("/status")
async def subscription_status(
    user: AuthenticatedUser = Depends(get_current_user),
    gate: IAccessGate = Depends(get_access_gate),
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    """Current access tier plus the subscription fields of the account."""
    access = await gate.get_access(user.id)
    details = await service.get_subscription_details(user.id)
    return success_response(
        {
            "hasActiveSubscription": access.has_active_subscription,
            "hasActiveTrial": access.has_active_trial,
            "isReadOnly": access.is_read_only,
            "subscriptionStatus": access.subscription_status,
            "profile": details,
            "user": {
                "id": user.id,
                "email": user.email,
                "isAdmin": access.is_admin,
            },
        }
    )


@router.post("/cancel")
async def cancel_subscription(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    subscription_id = await service.cancel_for_user(user.id)
    return success_response(
        {
            "message": "Subscription canceled successfully",
            "subscriptionId": subscription_id,
        }
    )


@router.get("/products")
async def list_products(
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    return success_response(await service.list_products())


@webhook_router.post("/stripe")
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(..., alias="stripe-signature"),
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    """
    Receive a Stripe event.

    The signature is checked against the raw body before it is parsed.
    A missing header is rejected by validation before the body is read.
    """
    payload = await request.body()
    await service.process_webhook_event(payload, stripe_signature)
    return {"success": True, "received": True}


@webhook_router.get("/stripe")
async def stripe_webhook_health() -> dict:
    return {
        "success": True,
        "message": "Stripe webhook endpoint is active",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
