"""
Release module exceptions.
"""

from shared.exceptions import NotFoundError


class ReleaseNotFoundError(NotFoundError):
    """
    Raised when a release does not exist or belongs to another user.

    The two cases are indistinguishable to the caller.
    """

    def __init__(self, release_id: str):
        super().__init__(
            "Release not found",
            code="RELEASE_NOT_FOUND",
            details={"release_id": release_id},
        )
