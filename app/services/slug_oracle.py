"""Slug existence checks against the catalog backend."""
import logging
from typing import Awaitable, Callable, Optional

import httpx

from app.errors import CatalogError, NotAuthenticatedError
from app.models.slug import SlugScope

logger = logging.getLogger(__name__)


class SlugOracle:
    """
    Answers whether a slug is already used within one entity type.

    The backend has no "does this slug exist" endpoint, so every check
    lists the entities and scans their slugs. Failures are reported as
    "not taken": the backend still enforces uniqueness when saving.
    """

    def __init__(
        self,
        fetch_items: Callable[[], Awaitable[list[dict]]],
        scope: SlugScope,
    ):
        self.fetch_items = fetch_items
        self.scope = scope

    async def exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """
        Check whether a slug is used by another entity.

        Args:
            slug: Candidate slug (compared case-insensitively)
            exclude_id: Id of the entity being edited, ignored in the scan

        Returns:
            True if some other entity already has this slug
        """
        candidate = (slug or "").strip().lower()
        if not candidate:
            return False

        try:
            items = await self.fetch_items()
        except (httpx.HTTPError, CatalogError, NotAuthenticatedError, ValueError) as e:
            logger.warning("Slug check for %s/%s failed: %s", self.scope.value, candidate, e)
            return False

        for item in items or []:
            if not isinstance(item, dict):
                continue
            if str(item.get("slug") or "").lower() != candidate:
                continue
            if exclude_id is not None and str(item.get("id")) == str(exclude_id):
                continue
            return True

        return False

    def excluding(self, exclude_id: Optional[int]) -> Callable[[str], Awaitable[bool]]:
        """Bind ``exclude_id`` for use as a single-argument predicate."""

        async def exists(slug: str) -> bool:
            return await self.exists(slug, exclude_id)

        return exists
