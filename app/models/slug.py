"""Slug check model definitions."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SlugScope(str, Enum):
    """Entity types with their own slug namespace."""

    CATEGORIES = "categories"
    PRODUCTS = "products"


class SlugStatus(str, Enum):
    """Live validation states shown next to the slug field."""

    IDLE = "idle"
    CHECKING = "checking"
    FREE = "free"
    TAKEN = "taken"


class SlugCheck(BaseModel):
    """Result of a single existence query."""

    slug: str
    exclude_id: Optional[int] = Field(None, alias="excludeId")
    taken: bool

    model_config = {"populate_by_name": True}


class SlugSuggestion(BaseModel):
    """Slug proposed for a display name."""

    name: str
    slug: str


class SlugFormState(BaseModel):
    """Snapshot of a create/edit form's slug field."""

    name: str
    slug: str
    status: SlugStatus
    can_save: bool = Field(alias="canSave")

    model_config = {"populate_by_name": True}
