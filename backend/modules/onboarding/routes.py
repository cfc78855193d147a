"""
Onboarding API endpoints.

Public: the caller has paid but has no password yet. Possession of the
Stripe session ID plus the onboarding token stands in for authentication.
"""

from fastapi import APIRouter, Depends, Path

from api.dependencies import get_onboarding_service
from api.responses import success_response

from .models import CompleteOnboardingRequest, CreateFallbackRequest
from .service import OnboardingService

router = APIRouter()


@router.post("/complete")
async def complete_onboarding(
    request: CompleteOnboardingRequest,
    service: OnboardingService = Depends(get_onboarding_service),
) -> dict:
    """Set the password and profile details of a newly paid account."""
    result = await service.complete(request)
    return success_response(result)


@router.get("/status/{session_id}")
async def onboarding_status(
    session_id: str = Path(..., min_length=1),
    service: OnboardingService = Depends(get_onboarding_service),
) -> dict:
    return success_response(await service.status(session_id))


@router.post("/create-fallback")
async def create_fallback(
    request: CreateFallbackRequest,
    service: OnboardingService = Depends(get_onboarding_service),
) -> dict:
    """Create the account if the checkout webhook has not done so yet."""
    result = await service.create_fallback(request.session_id, request.onboarding_token)
    return success_response(result)
