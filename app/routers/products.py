"""Product router - API endpoints for product management."""
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.dependencies import (
    backend_error,
    get_catalog_service,
    get_current_user,
    get_image_service,
)
from app.errors import CatalogError, NotAuthenticatedError
from app.models.product import Product, ProductCreate, ProductImage, ProductUpdate
from app.models.slug import SlugScope
from app.services.catalog_service import CatalogService
from app.services.image_service import PRODUCT_ENTITY_TYPE, ImageService, image_url


router = APIRouter(
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[Product])
async def list_products(service: CatalogService = Depends(get_catalog_service)):
    """List all products."""
    try:
        return await service.list_products()
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Create a new product.

    A missing slug is generated from the name with a numeric suffix if
    needed. Images are uploaded afterwards through ``/products/{id}/images``.

    Raises:
        HTTPException: If the slug is already used (409)
    """
    try:
        product.slug = await service.prepare_slug(
            SlugScope.PRODUCTS, product.name, product.slug
        )
        return await service.create_product(product)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get a product by id."""
    try:
        return await service.get_product(product_id)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.patch("/{product_id}", response_model=Product)
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Update a product.

    Raises:
        HTTPException: If the new slug is already used (409)
    """
    try:
        if product_update.slug:
            product_update.slug = await service.prepare_slug(
                SlugScope.PRODUCTS,
                product_update.name,
                product_update.slug,
                exclude_id=product_id,
            )
        return await service.update_product(product_id, product_update)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a product."""
    try:
        await service.delete_product(product_id)
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)


@router.post(
    "/{product_id}/images",
    response_model=list[ProductImage],
    status_code=status.HTTP_201_CREATED,
)
async def upload_product_images(
    product_id: int,
    files: list[UploadFile] = File(...),
    image_type: str = Form("product", alias="imageType"),
    images: ImageService = Depends(get_image_service),
):
    """
    Upload images for a product, in order.

    Files staged in the dialog before the product existed are sent here
    once the product has an id.

    Returns:
        Uploaded images with their console URLs
    """
    uploaded = []
    try:
        for upload in files:
            record = await images.upload(
                content=await upload.read(),
                filename=upload.filename or "image",
                content_type=upload.content_type or "application/octet-stream",
                entity_type=PRODUCT_ENTITY_TYPE,
                entity_id=str(product_id),
                image_type=image_type,
            )
            external_id = record.get("externalId") or ""
            uploaded.append(
                ProductImage(
                    url=image_url(external_id),
                    type=image_type,
                    external_id=external_id or None,
                )
            )
    except (CatalogError, NotAuthenticatedError) as e:
        raise backend_error(e)

    return uploaded
