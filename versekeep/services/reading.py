"""Last-read position, chapter visit history and chapter bookmarks."""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from pydantic import TypeAdapter

from versekeep import dates
from versekeep.schemas.reading import Bookmark, LastPosition, ReadingHistoryItem
from versekeep.services.kv_store import KeyValueStore, StorageError
from versekeep.services.results import StoreResult, dump_json, load_json

logger = logging.getLogger(__name__)

LAST_BOOK_KEY = "lastBook"
LAST_CHAPTER_KEY = "lastChapter"
HISTORY_KEY = "readingHistory"
BOOKMARKS_KEY = "bookmarks"

_history_adapter = TypeAdapter(list[ReadingHistoryItem])
_bookmarks_adapter = TypeAdapter(list[Bookmark])


def _check_chapter(chapter: int) -> None:
    if chapter < 1:
        raise ValueError("chapter must be a positive integer")


def _parse_chapter(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Discarding malformed data stored under %s: %r", LAST_CHAPTER_KEY, raw)
        return None


class ReadingTracker:
    def __init__(self, store: KeyValueStore, now: Callable[[], datetime] = dates.now) -> None:
        self.store = store
        self.now = now
        self.last_position: LastPosition | None = None
        self.history: list[ReadingHistoryItem] = []
        self.bookmarks: list[Bookmark] = []
        self.is_loading = True
        self._lock = asyncio.Lock()

    async def load(self) -> StoreResult:
        try:
            last_book, last_chapter, raw_history, raw_bookmarks = await self.store.multi_get(
                [LAST_BOOK_KEY, LAST_CHAPTER_KEY, HISTORY_KEY, BOOKMARKS_KEY]
            )
        except StorageError as e:
            logger.error("Error loading reading data: %s", e)
            self.is_loading = False
            return StoreResult.failed(e)

        chapter = _parse_chapter(last_chapter)
        if last_book and chapter is not None and chapter >= 1:
            self.last_position = LastPosition(book=last_book, chapter=chapter)
        else:
            self.last_position = None
        self.history = load_json(raw_history, _history_adapter, list, HISTORY_KEY)
        self.bookmarks = load_json(raw_bookmarks, _bookmarks_adapter, list, BOOKMARKS_KEY)
        self.is_loading = False
        return StoreResult.done(changed=False)

    async def set_last_position(self, book: str, chapter: int) -> StoreResult:
        _check_chapter(chapter)
        async with self._lock:
            try:
                await self.store.multi_set([(LAST_BOOK_KEY, book), (LAST_CHAPTER_KEY, str(chapter))])
            except StorageError as e:
                logger.error("Error saving last position: %s", e)
                return StoreResult.failed(e)
            self.last_position = LastPosition(book=book, chapter=chapter)
            return StoreResult.done()

    async def add_to_history(self, book: str, chapter: int) -> StoreResult:
        """Record the first visit to a chapter; later visits are no-ops."""
        _check_chapter(chapter)
        async with self._lock:
            if self.has_read_chapter(book, chapter):
                return StoreResult.done(changed=False)

            updated = [*self.history, ReadingHistoryItem(book=book, chapter=chapter, timestamp=self.now())]
            try:
                await self.store.set(HISTORY_KEY, dump_json(updated, _history_adapter))
            except StorageError as e:
                logger.error("Error adding to history: %s", e)
                return StoreResult.failed(e)
            self.history = updated
            return StoreResult.done()

    def has_read_chapter(self, book: str, chapter: int) -> bool:
        return any(item.book == book and item.chapter == chapter for item in self.history)

    async def add_bookmark(
        self,
        book: str,
        chapter: int,
        verse: int | None = None,
        note: str | None = None,
    ) -> StoreResult:
        """Bookmark a chapter, replacing any existing bookmark for it."""
        _check_chapter(chapter)
        async with self._lock:
            bookmark = Bookmark(book=book, chapter=chapter, verse=verse, note=note, timestamp=self.now())
            updated = [b for b in self.bookmarks if not (b.book == book and b.chapter == chapter)]
            updated.append(bookmark)
            return await self._save_bookmarks(updated, "adding bookmark")

    async def remove_bookmark(self, book: str, chapter: int) -> StoreResult:
        async with self._lock:
            updated = [b for b in self.bookmarks if not (b.book == book and b.chapter == chapter)]
            if len(updated) == len(self.bookmarks):
                return StoreResult.done(changed=False)
            return await self._save_bookmarks(updated, "removing bookmark")

    async def _save_bookmarks(self, updated: list[Bookmark], action: str) -> StoreResult:
        try:
            await self.store.set(BOOKMARKS_KEY, dump_json(updated, _bookmarks_adapter))
        except StorageError as e:
            logger.error("Error %s: %s", action, e)
            return StoreResult.failed(e)
        self.bookmarks = updated
        return StoreResult.done()

    def get_bookmark(self, book: str, chapter: int) -> Bookmark | None:
        return next((b for b in self.bookmarks if b.book == book and b.chapter == chapter), None)

    def is_chapter_bookmarked(self, book: str, chapter: int) -> bool:
        return self.get_bookmark(book, chapter) is not None
