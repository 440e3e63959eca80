"""Tests for the tag and time-signature lookup endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from sheetshare.catalog import CatalogError
from sheetshare.catalog.lookups import list_tags


class TestTags:
    @pytest.mark.asyncio
    async def test_sorted_by_name(self, test_client, catalog_data):
        response = await test_client.get("/api/tags")

        assert response.status_code == 200
        body = response.json()
        assert [tag["name"] for tag in body["data"]] == ["Advanced", "Baroque", "Piano", "Romantic"]
        assert body["meta"] == {"totalItems": 4, "totalPages": 1, "currentPage": 1, "limit": 10}

    @pytest.mark.asyncio
    async def test_paginated(self, test_client, catalog_data):
        body = (await test_client.get("/api/tags", params={"page": 2, "limit": 3})).json()
        assert body["data"] == [{"id": 2, "name": "Romantic"}]
        assert body["meta"] == {"totalItems": 4, "totalPages": 2, "currentPage": 2, "limit": 3}

    @pytest.mark.asyncio
    async def test_empty(self, test_client):
        body = (await test_client.get("/api/tags")).json()
        assert body["data"] == []
        assert body["meta"]["totalPages"] == 0

    @pytest.mark.asyncio
    async def test_huge_page_is_empty(self, test_client, catalog_data):
        response = await test_client.get("/api/tags?page=100000000000000000000")

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["meta"]["totalItems"] == 4


class TestTimeSignatures:
    @pytest.mark.asyncio
    async def test_sorted_by_name(self, test_client, catalog_data):
        body = (await test_client.get("/api/time-signatures")).json()
        assert body["data"] == [
            {"id": 2, "name": "3/4"},
            {"id": 1, "name": "4/4"},
            {"id": 3, "name": "6/8"},
        ]
        assert body["meta"]["totalItems"] == 3


@pytest.mark.asyncio
async def test_lookup_store_error_raises_catalog_error():
    session = MagicMock()
    session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

    with pytest.raises(CatalogError):
        await list_tags(session, page=1, limit=10)


@pytest.mark.asyncio
async def test_health(test_client):
    response = await test_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
