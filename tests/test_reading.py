"""Tests for last position, visit history and bookmarks."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from versekeep.services.kv_store import StorageError
from versekeep.services.reading import (
    BOOKMARKS_KEY,
    HISTORY_KEY,
    LAST_BOOK_KEY,
    LAST_CHAPTER_KEY,
    ReadingTracker,
)


@pytest.fixture
async def tracker(kv, clock):
    tracker = ReadingTracker(kv, now=clock.now)
    await tracker.load()
    return tracker


# --- last position ---

async def test_set_last_position(tracker, kv):
    result = await tracker.set_last_position("john", 3)
    assert result.ok

    assert tracker.last_position.book == "john"
    assert tracker.last_position.chapter == 3
    assert await kv.multi_get([LAST_BOOK_KEY, LAST_CHAPTER_KEY]) == ["john", "3"]


async def test_last_position_is_single_slot(tracker, kv, clock):
    await tracker.set_last_position("john", 3)
    await tracker.set_last_position("romans", 8)

    reloaded = ReadingTracker(kv, now=clock.now)
    await reloaded.load()
    assert reloaded.last_position.book == "romans"
    assert reloaded.last_position.chapter == 8


async def test_last_position_rejects_bad_chapter(tracker):
    with pytest.raises(ValueError):
        await tracker.set_last_position("john", 0)


async def test_load_ignores_malformed_chapter(kv, clock):
    await kv.multi_set([(LAST_BOOK_KEY, "john"), (LAST_CHAPTER_KEY, "three")])
    tracker = ReadingTracker(kv, now=clock.now)
    await tracker.load()
    assert tracker.last_position is None


# --- history ---

async def test_add_to_history_is_idempotent(tracker):
    first = await tracker.add_to_history("john", 3)
    original_timestamp = tracker.history[0].timestamp
    second = await tracker.add_to_history("john", 3)

    assert first.changed is True
    assert second.ok is True
    assert second.changed is False
    assert len(tracker.history) == 1
    assert tracker.history[0].timestamp == original_timestamp


async def test_has_read_chapter(tracker):
    await tracker.add_to_history("genesis", 1)
    assert tracker.has_read_chapter("genesis", 1)
    assert not tracker.has_read_chapter("genesis", 2)
    assert not tracker.has_read_chapter("exodus", 1)


async def test_history_is_persisted(tracker, kv, clock):
    await tracker.add_to_history("genesis", 1)
    await tracker.add_to_history("genesis", 2)

    reloaded = ReadingTracker(kv, now=clock.now)
    await reloaded.load()
    assert [(h.book, h.chapter) for h in reloaded.history] == [("genesis", 1), ("genesis", 2)]


async def test_duplicate_history_insert_skips_write(tracker, kv):
    await tracker.add_to_history("john", 3)
    with patch.object(kv, "set", new_callable=AsyncMock) as mock_set:
        await tracker.add_to_history("john", 3)
    mock_set.assert_not_called()


async def test_load_corrupt_history(kv, clock):
    await kv.multi_set([(HISTORY_KEY, '[{"book": "john"}]'), (BOOKMARKS_KEY, "null")])
    tracker = ReadingTracker(kv, now=clock.now)
    result = await tracker.load()

    assert result.ok
    assert tracker.history == []
    assert tracker.bookmarks == []


# --- bookmarks ---

async def test_add_bookmark(tracker):
    result = await tracker.add_bookmark("john", 3, verse=16)
    assert result.ok
    assert tracker.is_chapter_bookmarked("john", 3)
    assert tracker.get_bookmark("john", 3).verse == 16


async def test_bookmark_replaces_existing(tracker):
    await tracker.add_bookmark("john", 3)
    first_timestamp = tracker.get_bookmark("john", 3).timestamp
    await tracker.add_bookmark("john", 3, note="x")

    matching = [b for b in tracker.bookmarks if b.book == "john" and b.chapter == 3]
    assert len(matching) == 1
    assert matching[0].note == "x"
    assert matching[0].timestamp > first_timestamp


async def test_bookmarks_are_per_chapter(tracker):
    await tracker.add_bookmark("john", 3)
    await tracker.add_bookmark("john", 4)
    assert len(tracker.bookmarks) == 2


async def test_remove_bookmark(tracker, kv):
    await tracker.add_bookmark("john", 3)
    result = await tracker.remove_bookmark("john", 3)

    assert result.changed
    assert not tracker.is_chapter_bookmarked("john", 3)
    assert json.loads(await kv.get(BOOKMARKS_KEY)) == []


async def test_remove_missing_bookmark_is_noop(tracker):
    result = await tracker.remove_bookmark("john", 3)
    assert result.ok is True
    assert result.changed is False


async def test_bookmark_write_failure(tracker, kv):
    with patch.object(kv, "set", new_callable=AsyncMock, side_effect=StorageError("quota exceeded")):
        result = await tracker.add_bookmark("john", 3)

    assert result.ok is False
    assert not tracker.is_chapter_bookmarked("john", 3)


async def test_position_write_failure(tracker, kv):
    await tracker.set_last_position("john", 3)
    with patch.object(kv, "multi_set", new_callable=AsyncMock, side_effect=StorageError("unavailable")):
        result = await tracker.set_last_position("acts", 2)

    assert result.ok is False
    assert tracker.last_position.book == "john"
