"""
Release API endpoints.

CRUD sits behind the lenient subscription gate: lapsed subscribers can
still list and read their releases. Label copy generation is a premium
feature and needs an active subscription for every method.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_release_service
from api.middleware.subscription import require_active_subscription, require_subscription
from api.responses import success_response
from shared.models import AuthenticatedUser

from .models import CreateReleaseRequest, UpdateReleaseRequest
from .service import ReleaseService

router = APIRouter()


@router.get("")
async def list_releases(
    user: AuthenticatedUser = Depends(require_subscription),
    service: ReleaseService = Depends(get_release_service),
) -> dict:
    releases = await service.list_releases(user.id)
    return success_response(releases, meta={"count": len(releases)})


@router.post("", status_code=201)
async def create_release(
    request: CreateReleaseRequest,
    user: AuthenticatedUser = Depends(require_subscription),
    service: ReleaseService = Depends(get_release_service),
) -> dict:
    return success_response(await service.create_release(user.id, request))


@router.get("/{release_id}")
async def get_release(
    release_id: str,
    user: AuthenticatedUser = Depends(require_subscription),
    service: ReleaseService = Depends(get_release_service),
) -> dict:
    return success_response(await service.get_release(release_id, user.id))


@router.put("/{release_id}")
async def update_release(
    release_id: str,
    request: UpdateReleaseRequest,
    user: AuthenticatedUser = Depends(require_subscription),
    service: ReleaseService = Depends(get_release_service),
) -> dict:
    return success_response(await service.update_release(release_id, user.id, request))


@router.delete("/{release_id}")
async def delete_release(
    release_id: str,
    user: AuthenticatedUser = Depends(require_subscription),
    service: ReleaseService = Depends(get_release_service),
) -> dict:
    await service.delete_release(release_id, user.id)
    return success_response({"id": release_id, "deleted": True})


@router.get("/{release_id}/label-copy")
async def get_label_copy(
    release_id: str,
    user: AuthenticatedUser = Depends(require_active_subscription),
    service: ReleaseService = Depends(get_release_service),
) -> dict:
    """Label copy sheet for distribution. Requires an active subscription."""
    label_copy = await service.get_label_copy(release_id, user.id)
    return success_response(label_copy, meta={"complete": label_copy.is_complete})
