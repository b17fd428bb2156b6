"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.bookmark import MAX_RATING, MIN_RATING
from services.sanitizer import sanitize_text

# Order in which missing fields are reported on create
REQUIRED_FIELDS = ("title", "url", "description", "rating")

# Fields where an empty or whitespace-only string counts as absent
NON_BLANK_FIELDS = ("title", "url")


def reject_boolean(v: object) -> object:
    """
    Refuse JSON true/false for integer fields.

    Lax int validation would turn them into 1/0; numeric strings such as "3"
    are still coerced.
    """
    if isinstance(v, bool):
        raise ValueError("must be a number, not a boolean")
    return v


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    Every field is optional at the schema level so that the router can report
    the first missing one as a 400 rather than a list of pydantic errors.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating_not_boolean(cls, v: object) -> object:
        """Reject booleans before int coercion."""
        return reject_boolean(v)

    def first_missing_field(self) -> str | None:
        """Return the name of the first required field that is absent, if any."""
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None:
                return name
            if name in NON_BLANK_FIELDS and not value.strip():
                return name
        return None


class BookmarkUpdate(BaseModel):
    """Schema for partially updating a bookmark. Unknown fields are ignored."""

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating_not_boolean(cls, v: object) -> object:
        """Reject booleans before int coercion."""
        return reject_boolean(v)

    def supplied_fields(self) -> dict:
        """Fields present in the request with a non-null value."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }

    def first_blank_field(self) -> str | None:
        """Return the first title/url supplied as an empty or whitespace-only string."""
        for name in NON_BLANK_FIELDS:
            value = getattr(self, name)
            if value is not None and not value.strip():
                return name
        return None


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Text fields pass through sanitize_text so that stored markup is never
    echoed back to a client.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str | None
    rating: int

    @field_validator("title", "url", "description")
    @classmethod
    def strip_markup(cls, v: str | None) -> str | None:
        """Remove markup and script content."""
        if v is None:
            return None
        return sanitize_text(v)
