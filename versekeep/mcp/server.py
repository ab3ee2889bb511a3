from fastmcp import FastMCP

from versekeep.mcp.client import VersekeepClient
from versekeep.mcp.tools.progress import log_reading as _log_reading, reading_progress as _reading_progress
from versekeep.mcp.tools.reading import (
    visit_chapter as _visit_chapter,
    bookmark_chapter as _bookmark_chapter,
    list_bookmarks as _list_bookmarks,
    remove_bookmark as _remove_bookmark,
)
from versekeep.mcp.tools.annotations import (
    highlight_verse as _highlight_verse,
    note_verse as _note_verse,
    chapter_annotations as _chapter_annotations,
)


def create_mcp_server(client: VersekeepClient) -> FastMCP:
    mcp = FastMCP(
        name="versekeep",
        instructions=(
            "Versekeep tracks Bible reading: daily progress and streaks, the "
            "chapters visited, bookmarks, and verse highlights and notes. Books "
            "are identified by lowercase slug (e.g. 'john', '1-corinthians')."
        ),
    )

    @mcp.tool()
    async def log_reading(chapters_read: int = 1, verses_read: int = 0) -> dict:
        """Record reading done today. Repeated calls on the same day add up."""
        return await _log_reading(client, chapters_read=chapters_read, verses_read=verses_read)

    @mcp.tool()
    async def reading_progress() -> dict:
        """Get the current and longest reading streak, today's progress,
        weekly/monthly/lifetime totals and a 7-day breakdown."""
        return await _reading_progress(client)

    @mcp.tool()
    async def visit_chapter(book: str, chapter: int, verses_read: int | None = None) -> dict:
        """Mark a chapter as visited and make it the last-read position.
        Pass verses_read to also count it toward today's progress."""
        return await _visit_chapter(client, book=book, chapter=chapter, verses_read=verses_read)

    @mcp.tool()
    async def bookmark_chapter(
        book: str,
        chapter: int,
        verse: int | None = None,
        note: str | None = None,
    ) -> dict:
        """Bookmark a chapter, optionally pointing at a verse with a note.
        Replaces any existing bookmark on that chapter."""
        return await _bookmark_chapter(client, book=book, chapter=chapter, verse=verse, note=note)

    @mcp.tool()
    async def list_bookmarks() -> list[dict]:
        """List bookmarks, most recent first."""
        return await _list_bookmarks(client)

    @mcp.tool()
    async def remove_bookmark(book: str, chapter: int) -> dict:
        """Remove the bookmark on a chapter, if there is one."""
        return await _remove_bookmark(client, book=book, chapter=chapter)

    @mcp.tool()
    async def highlight_verse(book: str, chapter: int, verse: int, color: str | None = "yellow") -> dict:
        """Highlight a verse in yellow, green, blue, pink or orange.
        Pass color=None to remove the highlight."""
        return await _highlight_verse(client, book=book, chapter=chapter, verse=verse, color=color)

    @mcp.tool()
    async def note_verse(book: str, chapter: int, verse: int, text: str) -> dict:
        """Attach a note to a verse, replacing any existing note. Empty text deletes it."""
        return await _note_verse(client, book=book, chapter=chapter, verse=verse, text=text)

    @mcp.tool()
    async def chapter_annotations(book: str, chapter: int) -> dict:
        """Get all highlights and notes in a chapter."""
        return await _chapter_annotations(client, book=book, chapter=chapter)

    return mcp
