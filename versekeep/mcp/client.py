from httpx import AsyncClient, Response

# Raised by the API when the key-value store cannot be read or written.
STORAGE_UNAVAILABLE = 503


class VersekeepClient:
    """Thin wrapper around httpx.AsyncClient that translates HTTP responses
    into values suitable for MCP tool returns.

    A storage outage comes back as a retryable error so the assistant can
    tell the reader their progress was not saved, instead of failing the tool.
    """

    def __init__(self, http: AsyncClient) -> None:
        self.http = http

    async def get(self, path: str, **kwargs) -> dict | list | None:
        resp = await self.http.get(path, **kwargs)
        return self._handle(resp)

    async def post(self, path: str, **kwargs) -> dict | list | None:
        resp = await self.http.post(path, **kwargs)
        return self._handle(resp)

    async def put(self, path: str, **kwargs) -> dict | list | None:
        resp = await self.http.put(path, **kwargs)
        return self._handle(resp)

    async def delete(self, path: str, **kwargs) -> dict | list | None:
        resp = await self.http.delete(path, **kwargs)
        return self._handle(resp)

    def _handle(self, resp: Response) -> dict | list | None:
        if resp.status_code == 204:
            return {"ok": True}
        if resp.status_code == STORAGE_UNAVAILABLE:
            return {
                "error": True,
                "status": resp.status_code,
                "detail": resp.json().get("detail", resp.text),
                "retryable": True,
            }
        if resp.status_code >= 500:
            raise RuntimeError(f"Server error {resp.status_code}: {resp.text}")
        if resp.status_code >= 400:
            detail = resp.json().get("detail", resp.text)
            return {"error": True, "status": resp.status_code, "detail": detail}
        return resp.json()
