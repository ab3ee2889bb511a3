from versekeep.mcp.client import VersekeepClient


async def visit_chapter(
    client: VersekeepClient,
    book: str,
    chapter: int,
    verses_read: int | None = None,
) -> dict:
    body = {}
    if verses_read is not None:
        body["versesRead"] = verses_read
    return await client.post(f"/api/reading/chapters/{book}/{chapter}/visit", json=body)


async def bookmark_chapter(
    client: VersekeepClient,
    book: str,
    chapter: int,
    verse: int | None = None,
    note: str | None = None,
) -> dict:
    body = {"book": book, "chapter": chapter}
    if verse is not None:
        body["verse"] = verse
    if note is not None:
        body["note"] = note
    return await client.post("/api/bookmarks", json=body)


async def list_bookmarks(client: VersekeepClient) -> list[dict]:
    result = await client.get("/api/bookmarks")
    if isinstance(result, dict) and result.get("error"):
        return []
    return result


async def remove_bookmark(client: VersekeepClient, book: str, chapter: int) -> dict:
    return await client.delete(f"/api/bookmarks/{book}/{chapter}")
