"""Branch (store location) model definitions."""
from typing import Optional

from pydantic import BaseModel, Field


class BranchBase(BaseModel):
    """Base branch fields."""

    name: str
    address: str
    description: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = Field(True, alias="isActive")

    model_config = {"populate_by_name": True}


class BranchCreate(BranchBase):
    """Branch creation model."""

    pass


class BranchUpdate(BaseModel):
    """Branch update model - all fields optional."""

    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = {"populate_by_name": True}


class Branch(BranchBase):
    """Branch as returned by the catalog backend."""

    id: int


class BranchProductCreate(BaseModel):
    """Attach a product to a branch with its local price and stock."""

    product_id: int = Field(alias="productId")
    branch_id: int = Field(alias="branchId")
    price: float = Field(gt=0)
    stock: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = {"populate_by_name": True}


class BranchProductUpdate(BaseModel):
    """Branch product update model - all fields optional."""

    price: Optional[float] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = {"populate_by_name": True}


class BranchProduct(BaseModel):
    """Product price and stock at one branch."""

    id: int
    product_id: int = Field(alias="productId")
    branch_id: int = Field(alias="branchId")
    price: float
    stock: Optional[int] = None
    is_active: bool = Field(True, alias="isActive")

    model_config = {"populate_by_name": True}
