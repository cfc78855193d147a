"""
Repositories for user accounts and auth identities.

Encapsulates the Supabase queries against:
- user_profiles (subscription, onboarding and referral fields)
- auth.users (through the service-role admin API)
"""

from typing import Any, Optional

from supabase import AuthApiError

from shared.repository import BaseRepository
from .models import Identity, UserAccount


USER_PROFILES_TABLE = "user_profiles"
IDENTITY_PAGE_SIZE = 1000


class IdentityExistsError(Exception):
    """Raised when an auth identity already exists for an email."""

    def __init__(self, email: str):
        super().__init__(f"Identity already registered: {email}")
        self.email = email


class UserAccountRepository(BaseRepository[UserAccount]):
    """
    Repository for user_profiles rows.

    Lookups return None when no row matches. Database errors propagate to
    the caller, which decides whether they are fatal.
    """

    def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        return self._find_one("id", user_id)

    def find_by_customer_id(self, customer_id: str) -> Optional[UserAccount]:
        return self._find_one("stripe_customer_id", customer_id)

    def find_by_session_id(self, session_id: str) -> Optional[UserAccount]:
        return self._find_one("stripe_session_id", session_id)

    def find_by_referral_code(self, referral_code: str) -> Optional[UserAccount]:
        return self._find_one("referral_code", referral_code)

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        self._db.table(USER_PROFILES_TABLE).update(self._serialize(fields)).eq("id", user_id).execute()

    def insert(self, values: dict[str, Any]) -> None:
        self._db.table(USER_PROFILES_TABLE).insert(self._serialize(values)).execute()

    def _find_one(self, column: str, value: str) -> Optional[UserAccount]:
        result = (
            self._db.table(USER_PROFILES_TABLE)
            .select("*")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        if row is None:
            return None
        return UserAccount(**row)


class IdentityRepository(BaseRepository[Identity]):
    """Repository for Supabase auth users (service role required)."""

    def create_identity(
        self,
        email: str,
        password: str,
        user_metadata: dict[str, Any],
    ) -> Identity:
        try:
            response = self._db.auth.admin.create_user(
                {
                    "email": email,
                    "password": password,
                    "email_confirm": True,
                    "user_metadata": user_metadata,
                }
            )
        except AuthApiError as e:
            if e.status == 422 or "already been registered" in (e.message or ""):
                raise IdentityExistsError(email) from e
            raise
        return self._map_identity(response.user)

    def find_identity_by_email(self, email: str) -> Optional[Identity]:
        """Page through auth users; a short page marks the end of the list."""
        wanted = email.strip().lower()
        page = 1
        while True:
            users = self._db.auth.admin.list_users(page=page, per_page=IDENTITY_PAGE_SIZE)
            for user in users:
                if user.email and user.email.strip().lower() == wanted:
                    return self._map_identity(user)
            if len(users) < IDENTITY_PAGE_SIZE:
                return None
            page += 1

    def get_identity(self, user_id: str) -> Optional[Identity]:
        response = self._db.auth.admin.get_user_by_id(user_id)
        if response is None or response.user is None:
            return None
        return self._map_identity(response.user)

    def update_identity(self, user_id: str, attributes: dict[str, Any]) -> None:
        self._db.auth.admin.update_user_by_id(user_id, attributes)

    @staticmethod
    def _map_identity(user: Any) -> Identity:
        return Identity(
            id=user.id,
            email=user.email,
            user_metadata=user.user_metadata or {},
        )
