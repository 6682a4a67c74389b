"""Tests for SlugOracle."""
import json

import httpx
import pytest
from unittest.mock import AsyncMock

from app.models.slug import SlugScope

PRODUCTS = [
    {"id": 7, "name": "Foo", "slug": "foo"},
    {"id": 8, "name": "Milk", "slug": "Milk-3-2"},
]


@pytest.mark.asyncio
class TestSlugOracle:
    """Tests for slug existence checks."""

    async def test_exists_true(self):
        """Test a slug used by another entity is reported taken."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(AsyncMock(return_value=PRODUCTS), SlugScope.PRODUCTS)

        assert await oracle.exists("foo") is True

    async def test_exists_false(self):
        """Test an unused slug is reported free."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(AsyncMock(return_value=PRODUCTS), SlugScope.PRODUCTS)

        assert await oracle.exists("bar") is False

    async def test_exists_case_insensitive(self):
        """Test comparison ignores case on both sides."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(AsyncMock(return_value=PRODUCTS), SlugScope.PRODUCTS)

        assert await oracle.exists("milk-3-2") is True
        assert await oracle.exists("FOO") is True

    async def test_exclude_self(self):
        """Test an entity's own slug is not a collision while editing it."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(AsyncMock(return_value=PRODUCTS), SlugScope.PRODUCTS)

        assert await oracle.exists("foo", 7) is False
        assert await oracle.exists("foo", 8) is True

    async def test_empty_slug_skips_fetch(self):
        """Test a blank candidate is reported free without a request."""
        from app.services.slug_oracle import SlugOracle

        fetch = AsyncMock(return_value=PRODUCTS)
        oracle = SlugOracle(fetch, SlugScope.PRODUCTS)

        assert await oracle.exists("") is False
        assert await oracle.exists("  ") is False
        fetch.assert_not_awaited()

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("unreachable"),
        ],
    )
    async def test_fetch_failure_reports_free(self, error):
        """Test a failed lookup fails soft."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(AsyncMock(side_effect=error), SlugScope.CATEGORIES)

        assert await oracle.exists("foo") is False

    async def test_catalog_error_reports_free(self):
        """Test a backend error fails soft."""
        from app.errors import CatalogError, NotAuthenticatedError
        from app.services.slug_oracle import SlugOracle

        for error in (CatalogError("down", status=500), NotAuthenticatedError("expired")):
            oracle = SlugOracle(AsyncMock(side_effect=error), SlugScope.CATEGORIES)
            assert await oracle.exists("foo") is False

    async def test_undecodable_listing_reports_free(self):
        """Test a listing that is not JSON fails soft."""
        from app.services.slug_oracle import SlugOracle

        error = json.JSONDecodeError("Expecting value", "<html>", 0)
        oracle = SlugOracle(AsyncMock(side_effect=error), SlugScope.PRODUCTS)

        assert await oracle.exists("milk") is False

    async def test_malformed_items_skipped(self):
        """Test entries that are not records are ignored."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(
            AsyncMock(return_value=["milk", None, {"id": 2, "slug": "foo"}]),
            SlugScope.PRODUCTS,
        )

        assert await oracle.exists("milk") is False
        assert await oracle.exists("foo") is True

    async def test_excluding_binds_id(self):
        """Test the bound predicate passes exclude_id through."""
        from app.services.slug_oracle import SlugOracle

        oracle = SlugOracle(AsyncMock(return_value=PRODUCTS), SlugScope.PRODUCTS)

        assert await oracle.excluding(7)("foo") is False
        assert await oracle.excluding(None)("foo") is True
