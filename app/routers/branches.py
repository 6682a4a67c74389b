"""Branch router - API endpoints for store locations."""
from fastapi import APIRouter, Depends, status

from app.dependencies import backend_error, get_catalog_service, get_current_user
from app.errors import CatalogError, NotAuthenticatedError
from app.models.branch import Branch, BranchCreate, BranchUpdate
from app.services.catalog_service import CatalogService


router = APIRouter(
    prefix="/branches",
    tags=["branches"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[Branch])
async def list_branches(service: CatalogService = Depends(get_catalog_service)):
    """List all branches."""
    try:
        return await service.list_branches()
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.post("", response_model=Branch, status_code=status.HTTP_201_CREATED)
async def create_branch(
    branch: BranchCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a new branch."""
    try:
        return await service.create_branch(branch)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.get("/{branch_id}", response_model=Branch)
async def get_branch(
    branch_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get a branch by id."""
    try:
        return await service.get_branch(branch_id)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.patch("/{branch_id}", response_model=Branch)
async def update_branch(
    branch_id: int,
    branch_update: BranchUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update a branch."""
    try:
        return await service.update_branch(branch_id, branch_update)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.delete("/{branch_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_branch(
    branch_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a branch."""
    try:
        await service.delete_branch(branch_id)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)
