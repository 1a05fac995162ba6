"""
Note management schemas.

These schemas define the API contracts for note CRUD operations.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..models.types import Visibility

MAX_TAGS = 20
MAX_TAG_LENGTH = 50


def _clean_tags(tags: List[str]) -> List[str]:
    cleaned = []
    for tag in tags:
        tag = tag.strip()
        if not tag:
            raise ValueError("Tags cannot be blank")
        if len(tag) > MAX_TAG_LENGTH:
            raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
        cleaned.append(tag)
    return cleaned


def _upper(v):
    return v.strip().upper() if isinstance(v, str) else v


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=200, description="Note title")
    description: Optional[str] = Field(default=None, description="Note body")
    visibility: Visibility = Field(default=Visibility.PRIVATE, description="PUBLIC or PRIVATE")
    tags: List[str] = Field(default_factory=list, max_length=MAX_TAGS, description="Note tags")

    @field_validator("visibility", mode="before")
    @classmethod
    def normalize_visibility(cls, v):
        return _upper(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return _clean_tags(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Groceries",
                "description": "milk, eggs, bread",
                "visibility": "PRIVATE",
                "tags": ["home", "shopping"],
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema.

    Keys left out of the body keep their stored values. An explicit ``null``
    clears ``description`` and empties ``tags``; ``title`` and
    ``visibility`` cannot be cleared.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None)
    visibility: Optional[Visibility] = Field(default=None)
    tags: Optional[List[str]] = Field(default=None, max_length=MAX_TAGS)

    @field_validator("visibility", mode="before")
    @classmethod
    def normalize_visibility(cls, v):
        return _upper(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return _clean_tags(v)

    @model_validator(mode="after")
    def reject_cleared_required_fields(self):
        for name in ("title", "visibility"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields the caller actually sent, with nulls resolved."""
        data = self.model_dump(exclude_unset=True)
        if "tags" in data and data["tags"] is None:
            data["tags"] = []
        return data

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Groceries (weekend)", "visibility": "PUBLIC"}}
    )


class NoteResponse(BaseModel):
    """Note response schema."""

    id: int = Field(description="Note id")
    title: str
    description: Optional[str] = None
    visibility: Visibility
    tags: List[str] = Field(default_factory=list)
    user_id: int = Field(description="Owning user id")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )
