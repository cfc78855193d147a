"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection and ``request.state.user``.
    """

    id: str = Field(..., description="User ID (JWT subject, UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="All decoded JWT claims",
    )

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def subject(self) -> str:
        return self.id
