"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime
from typing import Any, Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement intention-revealing data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ReleaseRepository(BaseRepository[Release]):
            def get_by_id(self, release_id: str) -> Optional[Release]:
                result = self._db.table("music_releases").select("*").eq("id", release_id).execute()
                if not result.data:
                    return None
                return Release(**result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first(rows: Optional[list[dict[str, Any]]]) -> Optional[dict[str, Any]]:
        """Return the first row of a result set, or None when empty."""
        if not rows:
            return None
        return rows[0]

    @staticmethod
    def _serialize(values: dict[str, Any]) -> dict[str, Any]:
        """Convert datetimes to ISO strings so values can be sent to PostgREST."""
        return {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in values.items()
        }
