"""Per-verse highlights and notes."""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from pydantic import TypeAdapter

from versekeep import dates
from versekeep.schemas.annotation import HIGHLIGHT_COLORS, Highlight, Note, verse_id
from versekeep.services.kv_store import KeyValueStore, StorageError
from versekeep.services.results import StoreResult, dump_json, load_json

logger = logging.getLogger(__name__)

HIGHLIGHTS_KEY = "highlights"
NOTES_KEY = "notes"

_highlights_adapter = TypeAdapter(list[Highlight])
_notes_adapter = TypeAdapter(list[Note])


def _matches(item: Highlight | Note, book: str, chapter: int, verse_number: int) -> bool:
    return item.book == book and item.chapter == chapter and item.verse_number == verse_number


class AnnotationStore:
    """At most one highlight and one note per (book, chapter, verse)."""

    def __init__(self, store: KeyValueStore, now: Callable[[], datetime] = dates.now) -> None:
        self.store = store
        self.now = now
        self.highlights: list[Highlight] = []
        self.notes: list[Note] = []
        self.is_loading = True
        self._lock = asyncio.Lock()

    async def load(self) -> StoreResult:
        try:
            raw_highlights, raw_notes = await self.store.multi_get([HIGHLIGHTS_KEY, NOTES_KEY])
        except StorageError as e:
            logger.error("Error loading notes data: %s", e)
            self.is_loading = False
            return StoreResult.failed(e)

        self.highlights = load_json(raw_highlights, _highlights_adapter, list, HIGHLIGHTS_KEY)
        self.notes = load_json(raw_notes, _notes_adapter, list, NOTES_KEY)
        self.is_loading = False
        return StoreResult.done(changed=False)

    # --- highlights ---

    async def add_highlight(self, book: str, chapter: int, verse_number: int, color: str) -> StoreResult:
        """Highlight a verse, replacing the colour of an existing highlight."""
        if color not in HIGHLIGHT_COLORS:
            raise ValueError(f"Unknown highlight color: {color!r}")
        async with self._lock:
            highlight = Highlight(
                id=verse_id(book, chapter, verse_number),
                book=book,
                chapter=chapter,
                verse_number=verse_number,
                color=color,
                timestamp=self.now(),
            )
            updated = list(self.highlights)
            for i, existing in enumerate(updated):
                if _matches(existing, book, chapter, verse_number):
                    updated[i] = highlight
                    break
            else:
                updated.append(highlight)
            return await self._save_highlights(updated, "adding highlight")

    async def remove_highlight(self, book: str, chapter: int, verse_number: int) -> StoreResult:
        async with self._lock:
            updated = [h for h in self.highlights if not _matches(h, book, chapter, verse_number)]
            if len(updated) == len(self.highlights):
                return StoreResult.done(changed=False)
            return await self._save_highlights(updated, "removing highlight")

    def get_highlight(self, book: str, chapter: int, verse_number: int) -> Highlight | None:
        return next((h for h in self.highlights if _matches(h, book, chapter, verse_number)), None)

    def get_chapter_highlights(self, book: str, chapter: int) -> list[Highlight]:
        return [h for h in self.highlights if h.book == book and h.chapter == chapter]

    async def _save_highlights(self, updated: list[Highlight], action: str) -> StoreResult:
        try:
            await self.store.set(HIGHLIGHTS_KEY, dump_json(updated, _highlights_adapter))
        except StorageError as e:
            logger.error("Error %s: %s", action, e)
            return StoreResult.failed(e)
        self.highlights = updated
        return StoreResult.done()

    # --- notes ---

    async def upsert_note(self, book: str, chapter: int, verse_number: int, text: str) -> StoreResult:
        """Create the note for a verse or replace its text."""
        async with self._lock:
            return await self._upsert_note(book, chapter, verse_number, text)

    async def add_note(self, book: str, chapter: int, verse_number: int, text: str) -> StoreResult:
        # A second add for the same verse replaces the first rather than duplicating it
        return await self.upsert_note(book, chapter, verse_number, text)

    async def update_note(self, book: str, chapter: int, verse_number: int, text: str) -> StoreResult:
        """Replace the text of an existing note; no-op if the verse has none."""
        async with self._lock:
            if self.get_note(book, chapter, verse_number) is None:
                return StoreResult.done(changed=False)
            return await self._upsert_note(book, chapter, verse_number, text)

    async def remove_note(self, book: str, chapter: int, verse_number: int) -> StoreResult:
        async with self._lock:
            updated = [n for n in self.notes if not _matches(n, book, chapter, verse_number)]
            if len(updated) == len(self.notes):
                return StoreResult.done(changed=False)
            return await self._save_notes(updated, "removing note")

    async def save_note(self, book: str, chapter: int, verse_number: int, text: str) -> StoreResult:
        """Save from the note editor: blank text deletes the note."""
        if not text.strip():
            return await self.remove_note(book, chapter, verse_number)
        return await self.upsert_note(book, chapter, verse_number, text)

    def get_note(self, book: str, chapter: int, verse_number: int) -> Note | None:
        return next((n for n in self.notes if _matches(n, book, chapter, verse_number)), None)

    def get_chapter_notes(self, book: str, chapter: int) -> list[Note]:
        return [n for n in self.notes if n.book == book and n.chapter == chapter]

    async def _upsert_note(self, book: str, chapter: int, verse_number: int, text: str) -> StoreResult:
        note = Note(
            id=verse_id(book, chapter, verse_number),
            book=book,
            chapter=chapter,
            verse_number=verse_number,
            text=text,
            timestamp=self.now(),
        )
        updated = list(self.notes)
        for i, existing in enumerate(updated):
            if _matches(existing, book, chapter, verse_number):
                updated[i] = note
                break
        else:
            updated.append(note)
        return await self._save_notes(updated, "saving note")

    async def _save_notes(self, updated: list[Note], action: str) -> StoreResult:
        try:
            await self.store.set(NOTES_KEY, dump_json(updated, _notes_adapter))
        except StorageError as e:
            logger.error("Error %s: %s", action, e)
            return StoreResult.failed(e)
        self.notes = updated
        return StoreResult.done()
