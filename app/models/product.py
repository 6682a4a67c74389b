"""Product model definitions."""
from typing import Optional

from pydantic import BaseModel, Field


class ProductImage(BaseModel):
    """Image attached to a product."""

    url: str
    type: str = "product"
    external_id: Optional[str] = Field(None, alias="externalId")

    model_config = {"populate_by_name": True}


class ProductBase(BaseModel):
    """Base product fields."""

    name: str
    price: float
    category_id: int = Field(alias="categoryId")
    full_name: Optional[str] = Field(None, alias="fullName")
    description: Optional[str] = None
    sort_order: Optional[int] = Field(None, alias="sortOrder")

    model_config = {"populate_by_name": True}


class ProductCreate(ProductBase):
    """Product creation model. A missing slug is generated from the name."""

    price: float = Field(gt=0)
    slug: Optional[str] = None


class ProductUpdate(BaseModel):
    """Product update model - all fields optional."""

    name: Optional[str] = None
    slug: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    category_id: Optional[int] = Field(None, alias="categoryId")
    full_name: Optional[str] = Field(None, alias="fullName")
    description: Optional[str] = None
    sort_order: Optional[int] = Field(None, alias="sortOrder")

    model_config = {"populate_by_name": True}


class Product(ProductBase):
    """Product as returned by the catalog backend."""

    id: int
    slug: str
    images: list[ProductImage] = Field(default_factory=list)
