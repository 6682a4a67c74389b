"""Category model definitions."""
from typing import Any, Optional

from pydantic import BaseModel, Field


class CategoryBase(BaseModel):
    """Base category fields."""

    name: str
    full_name: Optional[str] = Field(None, alias="fullName")
    description: Optional[str] = None
    parent_id: Optional[int] = Field(None, alias="parentId")
    sort_order: Optional[int] = Field(None, alias="sortOrder")

    model_config = {"populate_by_name": True}


class CategoryCreate(CategoryBase):
    """Category creation model. A missing slug is generated from the name."""

    slug: Optional[str] = None


class CategoryUpdate(BaseModel):
    """Category update model - all fields optional."""

    name: Optional[str] = None
    slug: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    description: Optional[str] = None
    parent_id: Optional[int] = Field(None, alias="parentId")
    sort_order: Optional[int] = Field(None, alias="sortOrder")

    model_config = {"populate_by_name": True}


class Category(CategoryBase):
    """Category as returned by the catalog backend."""

    id: int
    slug: str


class PageMeta(BaseModel):
    """Pagination info of a catalog list."""

    total: Optional[int] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    model_config = {"extra": "allow"}


class CategoryPage(BaseModel):
    """One page of categories."""

    items: list[Category]
    meta: PageMeta = Field(default_factory=PageMeta)

    @classmethod
    def from_payload(cls, payload: Any) -> "CategoryPage":
        """Accept both ``{items, meta}`` pages and bare lists."""
        if isinstance(payload, list):
            return cls(items=payload, meta=PageMeta(total=len(payload)))
        return cls.model_validate(payload)
