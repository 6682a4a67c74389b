"""HTTP clients for the catalog, auth and image backends."""
import logging

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class Gateway:
    """Backend HTTP client manager."""

    catalog: httpx.AsyncClient | None = None
    auth: httpx.AsyncClient | None = None
    images: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Open one client per backend."""
        timeout = httpx.Timeout(settings.http_timeout)
        self.catalog = httpx.AsyncClient(base_url=settings.catalog_api_url, timeout=timeout)
        self.auth = httpx.AsyncClient(base_url=settings.auth_api_url, timeout=timeout)
        self.images = httpx.AsyncClient(base_url=settings.image_api_url, timeout=timeout)
        logger.info(
            "Backends: catalog=%s auth=%s images=%s",
            settings.catalog_api_url,
            settings.auth_api_url,
            settings.image_api_url,
        )

    async def disconnect(self) -> None:
        """Close all backend clients."""
        for client in (self.catalog, self.auth, self.images):
            if client is not None:
                await client.aclose()
        self.catalog = self.auth = self.images = None
        logger.info("Backend clients closed")

    @property
    def connected(self) -> bool:
        return None not in (self.catalog, self.auth, self.images)


# Global gateway instance
gateway = Gateway()


async def get_gateway() -> Gateway:
    """Dependency to get the backend gateway."""
    if not gateway.connected:
        raise RuntimeError("Backend clients not connected")
    return gateway
