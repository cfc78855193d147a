"""
Release module data models.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, Field


class ReleaseType(str, Enum):
    SINGLE = "single"
    ALBUM = "album"
    EP = "ep"
    MIXTAPE = "mixtape"


class ReleaseStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    RELEASED = "released"


class ReleaseFields(BaseModel):
    """Writable release fields, shared by create and update."""

    title: Optional[str] = Field(default=None, max_length=200)
    release_date: Optional[dt.date] = None
    release_type: Optional[ReleaseType] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    genre: Optional[str] = Field(default=None, max_length=100)
    cover_art_url: Optional[AnyHttpUrl] = None

    # Label copy
    version_subtitle: Optional[str] = Field(default=None, max_length=200)
    phonogram_copyright: Optional[str] = Field(default=None, max_length=200)
    composition_copyright: Optional[str] = Field(default=None, max_length=200)
    sub_genre: Optional[str] = Field(default=None, max_length=100)
    territories: Optional[list[str]] = None
    songwriters: Optional[str] = Field(default=None, max_length=500)
    producers: Optional[str] = Field(default=None, max_length=500)
    copyright_year: Optional[int] = Field(default=None, ge=1900, le=2100)
    track_description: Optional[str] = Field(default=None, max_length=1000)
    upc: Optional[str] = Field(default=None, max_length=20)
    isrc: Optional[str] = Field(default=None, max_length=20)
    label: Optional[str] = Field(default=None, max_length=200)


class CreateReleaseRequest(ReleaseFields):
    title: str = Field(..., min_length=1, max_length=200)
    status: ReleaseStatus = ReleaseStatus.DRAFT
    explicit_content: bool = False
    language_lyrics: str = Field(default="en", max_length=10)


class UpdateReleaseRequest(ReleaseFields):
    status: Optional[ReleaseStatus] = None
    explicit_content: Optional[bool] = None
    language_lyrics: Optional[str] = Field(default=None, max_length=10)


class Release(BaseModel):
    """A music_releases row."""

    model_config = {"extra": "ignore"}

    id: str
    user_id: str
    title: str
    release_date: Optional[dt.date] = None
    release_type: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    cover_art_url: Optional[str] = None
    version_subtitle: Optional[str] = None
    phonogram_copyright: Optional[str] = None
    composition_copyright: Optional[str] = None
    sub_genre: Optional[str] = None
    territories: Optional[list[str]] = None
    explicit_content: Optional[bool] = None
    language_lyrics: Optional[str] = None
    songwriters: Optional[str] = None
    producers: Optional[str] = None
    copyright_year: Optional[int] = None
    track_description: Optional[str] = None
    upc: Optional[str] = None
    isrc: Optional[str] = None
    label: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


LABEL_COPY_FIELDS = (
    "title",
    "version_subtitle",
    "release_date",
    "release_type",
    "label",
    "upc",
    "isrc",
    "genre",
    "sub_genre",
    "territories",
    "explicit_content",
    "language_lyrics",
    "phonogram_copyright",
    "composition_copyright",
    "copyright_year",
    "songwriters",
    "producers",
    "track_description",
)


class LabelCopy(BaseModel):
    """Label copy sheet assembled from a release's metadata."""

    release_id: str
    fields: dict[str, object]
    missing: list[str]

    @property
    def is_complete(self) -> bool:
        return not self.missing
