"""Image router - serves images from the image backend by external id."""
from fastapi import APIRouter, Depends, Response

from app.dependencies import backend_error, get_image_service
from app.errors import CatalogError
from app.services.image_service import ImageService


router = APIRouter(prefix="/images", tags=["images"])


@router.get("/{external_id}")
async def get_image(
    external_id: str,
    images: ImageService = Depends(get_image_service),
):
    """
    Get an image by its external id.

    Raises:
        HTTPException: With the backend's status if the image is missing
    """
    try:
        upstream = await images.fetch(external_id)
    except CatalogError as e:
        raise backend_error(e)

    return Response(
        content=upstream.content,
        media_type=upstream.headers.get("content-type", "application/octet-stream"),
    )
