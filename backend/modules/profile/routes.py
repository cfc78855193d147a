"""
Profile API endpoints.

Reads sit behind the lenient subscription gate: lapsed users can still
read their profile, but applying a referral code is a mutation. Validating
a code writes nothing and only needs authentication.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_profile_service
from api.middleware.auth import get_current_user
from api.middleware.subscription import require_subscription
from api.responses import success_response
from shared.models import AuthenticatedUser

from .models import ReferralRequest
from .service import ProfileService

router = APIRouter()


@router.get("")
async def get_profile(
    user: AuthenticatedUser = Depends(require_subscription),
    service: ProfileService = Depends(get_profile_service),
) -> dict:
    return success_response(await service.get_profile(user.id))


@router.post("/referral")
async def apply_referral(
    request: ReferralRequest,
    user: AuthenticatedUser = Depends(require_subscription),
    service: ProfileService = Depends(get_profile_service),
) -> dict:
    """Apply a referral code and credit the referrer."""
    result = await service.apply_referral_code(request.referral_code, user.id)
    return success_response(result)


@router.post("/validate-referral")
async def validate_referral(
    request: ReferralRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> dict:
    """Check a referral code without applying it."""
    result = await service.validate_referral_code(request.referral_code, user.id)
    return success_response(result)
