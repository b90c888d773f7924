"""Shared base model and location type for the game document.

Every persisted model is an immutable pydantic model that serializes to
the camelCase document shape (``gameHistory``, ``timeElapsed``...) while
still accepting snake_case field names in Python code.
"""

from __future__ import annotations

import re
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_location_id(raw: str) -> str:
    """Normalize a location id: lowercase, whitespace runs become underscores.

    Args:
        raw: Location id as supplied by the model or a caller.

    Returns:
        The normalized slug.

    Example:
        >>> normalize_location_id("  Dark  Forest ")
        'dark_forest'
    """
    return _WHITESPACE_RUN.sub("_", str(raw).strip().lower())


class DocumentModel(BaseModel):
    """Immutable base for all game document models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def evolve(self, **changes: Any) -> Self:
        """Return a re-validated copy with the given fields replaced.

        Unlike ``model_copy(update=...)`` the result goes through model
        validation, so invariants are checked on every new snapshot.

        Args:
            **changes: Field names (snake_case) mapped to new values.

        Returns:
            A new instance of the same model.
        """
        return self.model_validate({**dict(self), **changes})

    def to_document(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible camelCase document."""
        return self.model_dump(mode="json", by_alias=True)


class Location(DocumentModel):
    """A place the player can stand in.

    Attributes:
        id: Normalized slug identifying the location.
        name: Display name.
        description: Short description of the place.
    """

    id: str = Field(description="Normalized location slug")
    name: str = Field(min_length=1, description="Display name")
    description: str = Field(default="", description="Location description")

    @field_validator("id", mode="after")
    @classmethod
    def normalize_id(cls, value: str) -> str:
        """Normalize the id and reject ids that are blank.

        Args:
            value: Raw id.

        Returns:
            The normalized slug.

        Raises:
            ValueError: If nothing remains after normalization.
        """
        normalized = normalize_location_id(value)
        if not normalized:
            raise ValueError("location id must not be blank")
        return normalized


__all__ = [
    "DocumentModel",
    "Location",
    "normalize_location_id",
]
