from versekeep.mcp.client import VersekeepClient


async def highlight_verse(
    client: VersekeepClient,
    book: str,
    chapter: int,
    verse: int,
    color: str | None = "yellow",
) -> dict:
    """Highlight a verse, or clear its highlight when color is None."""
    path = f"/api/annotations/{book}/{chapter}/{verse}/highlight"
    if color is None:
        return await client.delete(path)
    return await client.put(path, json={"color": color})


async def note_verse(
    client: VersekeepClient,
    book: str,
    chapter: int,
    verse: int,
    text: str,
) -> dict:
    result = await client.put(f"/api/annotations/{book}/{chapter}/{verse}/note", json={"text": text})
    if result is None:
        return {"ok": True, "deleted": True}
    return result


async def chapter_annotations(client: VersekeepClient, book: str, chapter: int) -> dict:
    return await client.get(f"/api/annotations/{book}/{chapter}")
