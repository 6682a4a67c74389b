"""Category router - API endpoints for category management."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import backend_error, get_catalog_service, get_current_user
from app.errors import CatalogError, NotAuthenticatedError
from app.models.category import Category, CategoryCreate, CategoryPage, CategoryUpdate
from app.models.slug import SlugScope
from app.services.catalog_service import CatalogService


router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=CategoryPage)
async def list_categories(
    page: Optional[int] = Query(None, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    name: Optional[str] = Query(None, description="Filter by name"),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    List categories.

    Args:
        page: Optional page number
        limit: Optional page size
        name: Optional name filter
        service: Catalog service

    Returns:
        Page of categories
    """
    try:
        return await service.list_categories(page=page, limit=limit, name=name)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Create a new category.

    A missing slug is generated from the name with a numeric suffix if
    needed.

    Raises:
        HTTPException: If the slug is already used (409)
    """
    try:
        category.slug = await service.prepare_slug(
            SlugScope.CATEGORIES, category.name, category.slug
        )
        return await service.create_category(category)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: int,
    category_update: CategoryUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Update a category.

    Raises:
        HTTPException: If the new slug is already used (409)
    """
    try:
        if category_update.slug:
            category_update.slug = await service.prepare_slug(
                SlugScope.CATEGORIES,
                category_update.name,
                category_update.slug,
                exclude_id=category_id,
            )
        return await service.update_category(category_id, category_update)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a category."""
    try:
        await service.delete_category(category_id)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)
