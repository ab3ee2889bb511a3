from unittest.mock import AsyncMock, patch

import pytest
from httpx import Response

from versekeep.mcp.client import VersekeepClient
from versekeep.services.kv_store import StorageError


@pytest.mark.asyncio
async def test_client_get_success(client):
    """Client.get returns parsed JSON for a successful response."""
    await client.post("/api/bookmarks", json={"book": "john", "chapter": 3})

    vk = VersekeepClient(client)
    result = await vk.get("/api/bookmarks")
    assert isinstance(result, list)
    assert len(result) == 1
    assert result[0]["book"] == "john"


@pytest.mark.asyncio
async def test_client_get_null(client):
    """A JSON null body comes back as None."""
    vk = VersekeepClient(client)
    assert await vk.get("/api/reading/position") is None


@pytest.mark.asyncio
async def test_client_get_404(client):
    """Client.get returns error dict for 404."""
    vk = VersekeepClient(client)
    result = await vk.get("/api/bookmarks/john/3")
    assert result["error"] is True
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_client_delete_204(client):
    vk = VersekeepClient(client)
    assert await vk.delete("/api/bookmarks/john/3") == {"ok": True}


@pytest.mark.asyncio
async def test_client_storage_outage_is_retryable(client, kv):
    vk = VersekeepClient(client)
    await vk.get("/api/progress/today")
    with patch.object(kv, "set", new_callable=AsyncMock, side_effect=StorageError("disk full")):
        result = await vk.post("/api/bookmarks", json={"book": "john", "chapter": 3})
    assert result["error"] is True
    assert result["status"] == 503
    assert result["retryable"] is True
    assert "disk full" in result["detail"]


def test_client_raises_on_other_5xx(client):
    vk = VersekeepClient(client)
    with pytest.raises(RuntimeError):
        vk._handle(Response(500, text="boom"))
