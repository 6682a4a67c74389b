"""Catalog service - categories, products, branches and branch products."""
import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from app.config import settings
from app.errors import CatalogError, SlugConflictError
from app.models.branch import (
    Branch,
    BranchCreate,
    BranchProduct,
    BranchProductCreate,
    BranchProductUpdate,
    BranchUpdate,
)
from app.models.category import Category, CategoryCreate, CategoryPage, CategoryUpdate
from app.models.product import Product, ProductCreate, ProductUpdate
from app.models.slug import SlugScope
from app.services.auth_service import AuthService
from app.services.slug_oracle import SlugOracle
from app.utils.slug import resolve_unique

logger = logging.getLogger(__name__)

SLUG_CONFLICT_MESSAGE = "Slug already in use, choose another"


def _items(payload: Any) -> list:
    """Unwrap ``{items: [...]}`` pages; bare lists pass through."""
    if isinstance(payload, dict):
        return payload.get("items") or []
    if isinstance(payload, list):
        return payload
    return []


def _is_slug_conflict(response: httpx.Response) -> bool:
    if response.status_code == 409:
        return True
    if response.status_code in (400, 422):
        return "slug" in response.text.lower()
    return False


def _payload(model: BaseModel, partial: bool = False) -> dict:
    if partial:
        data = model.model_dump(by_alias=True, exclude_unset=True)
        # A blank slug keeps the stored one.
        if "slug" in data and not (data["slug"] or "").strip():
            del data["slug"]
        return data
    return model.model_dump(by_alias=True, exclude_none=True)


class CatalogService:
    """Service for the catalog backend."""

    def __init__(self, client: httpx.AsyncClient, auth: AuthService):
        """Initialize service with the catalog client and the auth session."""
        self.client = client
        self.auth = auth

    async def _send(
        self,
        method: str,
        url: str,
        error: str,
        slug_sensitive: bool = False,
        **kwargs,
    ) -> httpx.Response:
        """
        Send an authorized request and raise on a non-2xx answer.

        Raises:
            SlugConflictError: If ``slug_sensitive`` and the backend refused
                a duplicate slug
            CatalogError: For any other failure
            NotAuthenticatedError: If the session cannot be refreshed
        """
        try:
            response = await self.auth.request(self.client, method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise CatalogError(error)

        if response.is_success:
            return response

        logger.warning(
            "%s %s -> HTTP %d: %s", method, url, response.status_code, response.text[:200]
        )
        if slug_sensitive and _is_slug_conflict(response):
            raise SlugConflictError(
                SLUG_CONFLICT_MESSAGE, status=response.status_code, body=response.text
            )
        raise CatalogError(error, status=response.status_code, body=response.text)

    # ---- Categories ----

    async def list_categories(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        name: Optional[str] = None,
    ) -> CategoryPage:
        """
        List categories with optional paging and name filter.

        Args:
            page: 1-based page number
            limit: Page size
            name: Name filter applied by the backend

        Returns:
            One page of categories
        """
        params = {}
        if page:
            params["page"] = page
        if limit:
            params["limit"] = limit
        if name:
            params["name"] = name

        response = await self._send(
            "GET", "/categories", "Failed to load categories", params=params
        )
        return CategoryPage.from_payload(response.json())

    async def all_categories(self) -> list[dict]:
        """Raw category records, one large page."""
        response = await self._send(
            "GET",
            "/categories",
            "Failed to load categories",
            params={"page": 1, "limit": settings.slug_scan_limit},
        )
        return _items(response.json())

    async def create_category(self, category: CategoryCreate) -> Category:
        """
        Create a category.

        Raises:
            SlugConflictError: If the slug is already used
        """
        response = await self._send(
            "POST",
            "/categories",
            "Failed to create category",
            slug_sensitive=True,
            json=_payload(category),
        )
        return Category.model_validate(response.json())

    async def update_category(self, category_id: int, update: CategoryUpdate) -> Category:
        """
        Update a category.

        Raises:
            SlugConflictError: If the new slug is already used
        """
        response = await self._send(
            "PATCH",
            f"/categories/{category_id}",
            "Failed to update category",
            slug_sensitive=True,
            json=_payload(update, partial=True),
        )
        return Category.model_validate(response.json())

    async def delete_category(self, category_id: int) -> None:
        await self._send("DELETE", f"/categories/{category_id}", "Failed to delete category")

    # ---- Products ----

    async def all_products(self) -> list[dict]:
        """Raw product records from the admin listing."""
        response = await self._send("GET", "/products/admin", "Failed to load products")
        return _items(response.json())

    async def list_products(self) -> list[Product]:
        return [Product.model_validate(item) for item in await self.all_products()]

    async def get_product(self, product_id: int) -> Product:
        response = await self._send(
            "GET", f"/products/admin/{product_id}", "Failed to load product"
        )
        return Product.model_validate(response.json())

    async def create_product(self, product: ProductCreate) -> Product:
        """
        Create a product.

        Raises:
            SlugConflictError: If the slug is already used
        """
        response = await self._send(
            "POST",
            "/products/admin",
            "Failed to create product",
            slug_sensitive=True,
            json=_payload(product),
        )
        data = response.json()
        # Some backend versions wrap the created record in {"data": ...}
        if isinstance(data, dict) and "id" not in data and isinstance(data.get("data"), dict):
            data = data["data"]
        return Product.model_validate(data)

    async def update_product(self, product_id: int, update: ProductUpdate) -> Product:
        """
        Update a product.

        Raises:
            SlugConflictError: If the new slug is already used
        """
        response = await self._send(
            "PATCH",
            f"/products/admin/{product_id}",
            "Failed to update product",
            slug_sensitive=True,
            json=_payload(update, partial=True),
        )
        return Product.model_validate(response.json())

    async def delete_product(self, product_id: int) -> None:
        await self._send("DELETE", f"/products/admin/{product_id}", "Failed to delete product")

    # ---- Branches ----

    async def list_branches(self) -> list[Branch]:
        response = await self._send("GET", "/branches", "Failed to load branches")
        return [Branch.model_validate(item) for item in _items(response.json())]

    async def get_branch(self, branch_id: int) -> Branch:
        response = await self._send("GET", f"/branches/{branch_id}", "Failed to load branch")
        return Branch.model_validate(response.json())

    async def create_branch(self, branch: BranchCreate) -> Branch:
        response = await self._send(
            "POST", "/branches", "Failed to create branch", json=_payload(branch)
        )
        return Branch.model_validate(response.json())

    async def update_branch(self, branch_id: int, update: BranchUpdate) -> Branch:
        response = await self._send(
            "PATCH",
            f"/branches/{branch_id}",
            "Failed to update branch",
            json=_payload(update, partial=True),
        )
        return Branch.model_validate(response.json())

    async def delete_branch(self, branch_id: int) -> None:
        await self._send("DELETE", f"/branches/{branch_id}", "Failed to delete branch")

    # ---- Branch products ----

    async def list_branch_products(self) -> list[BranchProduct]:
        response = await self._send(
            "GET", "/branch-products", "Failed to load branch products"
        )
        return [BranchProduct.model_validate(item) for item in _items(response.json())]

    async def create_branch_product(self, link: BranchProductCreate) -> BranchProduct:
        response = await self._send(
            "POST",
            "/branch-products",
            "Failed to attach product to branch",
            json=_payload(link),
        )
        return BranchProduct.model_validate(response.json())

    async def update_branch_product(
        self, link_id: int, update: BranchProductUpdate
    ) -> BranchProduct:
        response = await self._send(
            "PATCH",
            f"/branch-products/{link_id}",
            "Failed to update branch product",
            json=_payload(update, partial=True),
        )
        return BranchProduct.model_validate(response.json())

    async def delete_branch_product(self, link_id: int) -> None:
        await self._send(
            "DELETE", f"/branch-products/{link_id}", "Failed to detach product from branch"
        )

    # ---- Slugs ----

    def slug_oracle(self, scope: SlugScope) -> SlugOracle:
        """Existence oracle for the slug namespace of one entity type."""
        if scope == SlugScope.CATEGORIES:
            return SlugOracle(self.all_categories, scope)
        return SlugOracle(self.all_products, scope)

    async def prepare_slug(
        self,
        scope: SlugScope,
        name: Optional[str],
        slug: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> Optional[str]:
        """
        Pick the slug to save with an entity.

        A missing slug on create is generated from the name and made
        unique. A given slug is checked and refused if another entity of
        the same type already uses it.

        Args:
            scope: Entity type
            name: Display name (used when no slug is given)
            slug: Slug typed by the user, if any
            exclude_id: Id of the entity being updated

        Returns:
            Slug to send, or None when an update leaves the slug untouched

        Raises:
            SlugConflictError: If the given slug is already used
        """
        oracle = self.slug_oracle(scope)

        if slug is None or not slug.strip():
            if exclude_id is not None:
                return None
            return await resolve_unique(name or "", oracle.excluding(None))

        slug = slug.strip()
        if await oracle.exists(slug, exclude_id):
            raise SlugConflictError(SLUG_CONFLICT_MESSAGE, status=409)
        return slug
