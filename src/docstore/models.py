"""Domain entities for docstore."""
from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_aware(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC so every stored instant is comparable."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Author(BaseModel):
    """Identity of a document's author. Only ``id`` takes part in matching."""
    id: str | None = None
    name: str | None = None

    model_config = ConfigDict(validate_assignment=True)


class Document(BaseModel):
    """Represents a document held by the store.

    Every field is optional at construction; the store assigns ``id`` on save
    when it is missing.
    """
    id: str | None = None
    title: str | None = None
    content: str | None = None
    author: Author | None = None
    created: datetime | None = None

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("created")
    @classmethod
    def _normalize_created(cls, value: datetime | None) -> datetime | None:
        return _as_aware(value)


class SearchRequest(BaseModel):
    """Filter specification for ``DocumentStore.search``.

    An absent or empty field places no constraint on its dimension.
    """
    title_prefixes: list[str] | None = Field(default=None, alias="titlePrefixes")
    contains_contents: list[str] | None = Field(default=None, alias="containsContents")
    author_ids: list[str] | None = Field(default=None, alias="authorIds")
    created_from: datetime | None = Field(default=None, alias="createdFrom")
    created_to: datetime | None = Field(default=None, alias="createdTo")

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    @field_validator("created_from", "created_to")
    @classmethod
    def _normalize_bounds(cls, value: datetime | None) -> datetime | None:
        return _as_aware(value)

    def active_criteria(self) -> list[str]:
        """Names of the dimensions that constrain a search."""
        names = []
        for name in ("title_prefixes", "contains_contents", "author_ids"):
            if getattr(self, name):
                names.append(name)
        for name in ("created_from", "created_to"):
            if getattr(self, name) is not None:
                names.append(name)
        return names
