"""
Release service.

Ownership is enforced by the repository queries; the service turns a
missing row into ReleaseNotFoundError.
"""

import logging

from .exceptions import ReleaseNotFoundError
from .models import (
    LABEL_COPY_FIELDS,
    CreateReleaseRequest,
    LabelCopy,
    Release,
    UpdateReleaseRequest,
)
from .repository import ReleaseRepository

logger = logging.getLogger(__name__)


class ReleaseService:
    def __init__(self, repository: ReleaseRepository) -> None:
        self._repository = repository

    async def list_releases(self, user_id: str) -> list[Release]:
        return self._repository.list_for_user(user_id)

    async def get_release(self, release_id: str, user_id: str) -> Release:
        release = self._repository.get_for_user(release_id, user_id)
        if release is None:
            raise ReleaseNotFoundError(release_id)
        return release

    async def create_release(self, user_id: str, request: CreateReleaseRequest) -> Release:
        release = self._repository.create(user_id, request.model_dump(mode="json", exclude_none=True))
        logger.info("Created release %s for user %s", release.id, user_id)
        return release

    async def update_release(self, release_id: str, user_id: str, request: UpdateReleaseRequest) -> Release:
        values = request.model_dump(mode="json", exclude_unset=True)
        if not values:
            return await self.get_release(release_id, user_id)

        release = self._repository.update_for_user(release_id, user_id, values)
        if release is None:
            raise ReleaseNotFoundError(release_id)
        return release

    async def delete_release(self, release_id: str, user_id: str) -> None:
        if not self._repository.delete_for_user(release_id, user_id):
            raise ReleaseNotFoundError(release_id)
        logger.info("Deleted release %s for user %s", release_id, user_id)

    async def get_label_copy(self, release_id: str, user_id: str) -> LabelCopy:
        """Assemble the label copy sheet and list the fields still empty."""
        release = await self.get_release(release_id, user_id)
        fields = {name: getattr(release, name) for name in LABEL_COPY_FIELDS}
        missing = [name for name, value in fields.items() if value in (None, "", [])]
        return LabelCopy(release_id=release.id, fields=fields, missing=missing)
