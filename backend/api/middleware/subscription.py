"""
Subscription gate dependencies.

Attach to a router (``dependencies=[Depends(require_subscription)]``) or
to a single route. Each runs after authentication and makes exactly one
account lookup.

- require_subscription: lapsed users may read, mutations need access
- require_active_subscription: premium features, every method needs access
- require_admin: admin accounts only
"""

from fastapi import Depends, Request

from api.dependencies import get_access_gate
from modules.auth.interfaces import IAccessGate
from modules.auth.exceptions import AdminRequiredError
from modules.auth.models import AccessDecision
from shared.models import AuthenticatedUser

from .auth import get_current_user


async def require_subscription(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    gate: IAccessGate = Depends(get_access_gate),
) -> AuthenticatedUser:
    decision = await gate.check(user.id, request.method)
    request.state.access_decision = decision
    return user


async def require_active_subscription(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    gate: IAccessGate = Depends(get_access_gate),
) -> AuthenticatedUser:
    decision = await gate.check(user.id, request.method, strict=True)
    request.state.access_decision = decision
    return user


async def require_admin(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    gate: IAccessGate = Depends(get_access_gate),
) -> AuthenticatedUser:
    access = await gate.get_access(user.id)
    if not access.is_admin:
        raise AdminRequiredError()
    request.state.access_decision = AccessDecision.ADMIN
    return user
