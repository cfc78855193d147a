"""
Admin endpoints.

Admin status is read from the account row on every request, never from
token claims, so revoking it takes effect immediately.
"""

from fastapi import APIRouter, Depends

from modules.auth.access import AccessGate
from shared.models import AuthenticatedUser
from ..dependencies import get_access_gate
from ..middleware.subscription import require_admin
from ..responses import success_response

router = APIRouter()


@router.get("/accounts/{user_id}")
async def get_account_access(
    user_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    gate: AccessGate = Depends(get_access_gate),
) -> dict:
    """Subscription access summary of any account."""
    access = await gate.get_access(user_id)
    return success_response(
        {
            "user_id": user_id,
            "is_admin": access.is_admin,
            "has_active_subscription": access.has_active_subscription,
            "has_active_trial": access.has_active_trial,
            "subscription_status": access.subscription_status,
            "read_only": access.is_read_only,
        }
    )
