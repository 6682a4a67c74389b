"""Branch product router - per-branch price and stock of products."""
from fastapi import APIRouter, Depends, status

from app.dependencies import backend_error, get_catalog_service, get_current_user
from app.errors import CatalogError, NotAuthenticatedError
from app.models.branch import BranchProduct, BranchProductCreate, BranchProductUpdate
from app.services.catalog_service import CatalogService


router = APIRouter(
    prefix="/branch-products",
    tags=["branch-products"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[BranchProduct])
async def list_branch_products(service: CatalogService = Depends(get_catalog_service)):
    """List products attached to branches."""
    try:
        return await service.list_branch_products()
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.post("", response_model=BranchProduct, status_code=status.HTTP_201_CREATED)
async def create_branch_product(
    link: BranchProductCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Attach a product to a branch.

    Raises:
        HTTPException: With the backend's status if it refuses the link,
            e.g. 409 when the product is already attached
    """
    try:
        return await service.create_branch_product(link)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.patch("/{link_id}", response_model=BranchProduct)
async def update_branch_product(
    link_id: int,
    link_update: BranchProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update price, stock or availability of a product at a branch."""
    try:
        return await service.update_branch_product(link_id, link_update)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_branch_product(
    link_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Detach a product from a branch."""
    try:
        await service.delete_branch_product(link_id)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)
