"""
Releases module.

Music release CRUD and label copy, the main subscriber-owned resource.

Public API:
- ReleaseService: CRUD and label copy
- ReleaseRepository: music_releases access scoped by user
- Release, CreateReleaseRequest, UpdateReleaseRequest, LabelCopy: Models
"""

from .models import (
    CreateReleaseRequest,
    LabelCopy,
    Release,
    ReleaseStatus,
    ReleaseType,
    UpdateReleaseRequest,
)
from .repository import ReleaseRepository
from .service import ReleaseService
from .exceptions import ReleaseNotFoundError

__all__ = [
    "ReleaseService",
    "ReleaseRepository",
    "Release",
    "ReleaseStatus",
    "ReleaseType",
    "CreateReleaseRequest",
    "UpdateReleaseRequest",
    "LabelCopy",
    "ReleaseNotFoundError",
]
