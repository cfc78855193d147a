"""
Release repository for database access.

Every query is scoped by user_id, so a release owned by someone else
looks exactly like one that does not exist.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Release

RELEASES_TABLE = "music_releases"


class ReleaseRepository(BaseRepository[Release]):
    def list_for_user(self, user_id: str) -> list[Release]:
        result = (
            self._db.table(RELEASES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("release_date", desc=True)
            .execute()
        )
        return [Release(**row) for row in result.data or []]

    def get_for_user(self, release_id: str, user_id: str) -> Optional[Release]:
        result = (
            self._db.table(RELEASES_TABLE)
            .select("*")
            .eq("id", release_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        return Release(**row) if row else None

    def create(self, user_id: str, values: dict[str, Any]) -> Release:
        data = self._serialize({**values, "user_id": user_id})
        result = self._db.table(RELEASES_TABLE).insert(data).execute()
        return Release(**result.data[0])

    def update_for_user(self, release_id: str, user_id: str, values: dict[str, Any]) -> Optional[Release]:
        result = (
            self._db.table(RELEASES_TABLE)
            .update(self._serialize(values))
            .eq("id", release_id)
            .eq("user_id", user_id)
            .execute()
        )
        row = self._first(result.data)
        return Release(**row) if row else None

    def delete_for_user(self, release_id: str, user_id: str) -> bool:
        result = (
            self._db.table(RELEASES_TABLE)
            .delete()
            .eq("id", release_id)
            .eq("user_id", user_id)
            .execute()
        )
        return bool(result.data)
