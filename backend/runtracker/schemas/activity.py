import json
from datetime import date as Date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_images(value) -> list[str]:
    """Coerce a stored or submitted `images` value into a list of strings.

    Rows may hold a JSON-encoded list, an already-decoded list, or legacy
    junk (NULL, "", malformed JSON, a JSON object). Anything that is not a
    list degrades to an empty list; non-string entries are dropped.
    """
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


class ActivityBase(BaseModel):
    date: Date
    distance: float = Field(ge=0)  # kilometers
    duration: int = Field(ge=0)    # minutes
    pace: float = Field(ge=0)      # minutes per kilometer
    location: Optional[str] = None
    notes: Optional[str] = None


class ActivityCreate(ActivityBase):
    """Schema for creating a new activity."""

    images: list[str] = []


class ActivityUpdate(BaseModel):
    """Schema for updating an existing activity (all fields optional)."""

    date: Optional[Date] = None
    distance: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=0)
    pace: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    notes: Optional[str] = None
    images: Optional[list[str]] = None

    # Be lenient with extra fields from clients (id, created_at, ...)
    model_config = ConfigDict(extra="ignore")


class ActivityRead(ActivityBase):
    """A stored activity as returned by storage and the API."""

    id: str
    user_id: str
    images: list[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("images", mode="before")
    @classmethod
    def _decode_images(cls, v):
        return normalize_images(v)
