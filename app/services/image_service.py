"""Image service - uploads to and reads from the image backend."""
import logging

import httpx

from app.errors import CatalogError
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

PRODUCT_ENTITY_TYPE = "catalog.product"


def image_url(external_id: str) -> str:
    """Console path serving an image by its external id."""
    return f"/images/{external_id}"


class ImageService:
    """Service for the image backend."""

    def __init__(self, client: httpx.AsyncClient, auth: AuthService):
        """Initialize service with the image client and the auth session."""
        self.client = client
        self.auth = auth

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        entity_type: str,
        entity_id: str,
        image_type: str = "product",
    ) -> dict:
        """
        Upload an image and bind it to an entity.

        Args:
            content: Raw file bytes
            filename: Original file name
            content_type: MIME type of the file
            entity_type: Owner type, e.g. ``catalog.product``
            entity_id: Owner id as a string
            image_type: Image role within the owner

        Returns:
            Image record from the backend (carries ``externalId``)

        Raises:
            CatalogError: If the upload fails
        """
        try:
            response = await self.auth.request(
                self.client,
                "POST",
                "/images/upload",
                files={"file": (filename, content, content_type)},
                data={
                    "entityType": entity_type,
                    "entityId": entity_id,
                    "imageType": image_type,
                },
            )
        except httpx.HTTPError as e:
            logger.error("Image upload failed: %s", e)
            raise CatalogError("Failed to upload image")

        if not response.is_success:
            logger.warning("Image upload -> HTTP %d", response.status_code)
            raise CatalogError(
                "Failed to upload image", status=response.status_code, body=response.text
            )

        return response.json()

    async def fetch(self, external_id: str) -> httpx.Response:
        """
        Read an image by its external id.

        Raises:
            CatalogError: If the image cannot be read
        """
        try:
            response = await self.client.get(f"/images/{external_id}")
        except httpx.HTTPError as e:
            logger.error("Image %s unreadable: %s", external_id, e)
            raise CatalogError("Failed to load image")

        if not response.is_success:
            raise CatalogError(
                "Failed to load image", status=response.status_code, body=response.text
            )
        return response
