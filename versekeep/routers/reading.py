from fastapi import APIRouter, Depends, HTTPException, Path

from versekeep import config
from versekeep.schemas.reading import (
    Bookmark,
    BookmarkCreate,
    ChapterReadResponse,
    ChapterVisit,
    LastPosition,
    ReadingHistoryItem,
)
from versekeep.services.container import Services, ensure_ok, get_services

router = APIRouter(tags=["reading"])


@router.post("/api/reading/chapters/{book}/{chapter}/visit", response_model=LastPosition)
async def visit_chapter(
    book: str,
    chapter: int = Path(ge=1),
    data: ChapterVisit | None = None,
    services: Services = Depends(get_services),
):
    """Called after a chapter is loaded: updates history, position and, optionally, progress."""
    ensure_ok(await services.reading.add_to_history(book, chapter))
    ensure_ok(await services.reading.set_last_position(book, chapter))
    if data is not None and data.verses_read is not None and config.PROGRESS_TRACKING_ENABLED:
        ensure_ok(await services.progress.record_activity(data.chapters_read, data.verses_read))
    return services.reading.last_position


@router.get("/api/reading/position", response_model=LastPosition | None)
async def get_position(services: Services = Depends(get_services)):
    return services.reading.last_position


@router.put("/api/reading/position", response_model=LastPosition)
async def set_position(data: LastPosition, services: Services = Depends(get_services)):
    ensure_ok(await services.reading.set_last_position(data.book, data.chapter))
    return services.reading.last_position


@router.get("/api/reading/history", response_model=list[ReadingHistoryItem])
async def list_history(services: Services = Depends(get_services)):
    return services.reading.history


@router.get("/api/reading/history/{book}/{chapter}", response_model=ChapterReadResponse)
async def has_read_chapter(
    book: str,
    chapter: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    return ChapterReadResponse(read=services.reading.has_read_chapter(book, chapter))


@router.get("/api/bookmarks", response_model=list[Bookmark])
async def list_bookmarks(services: Services = Depends(get_services)):
    return sorted(services.reading.bookmarks, key=lambda b: b.timestamp, reverse=True)


@router.post("/api/bookmarks", response_model=Bookmark, status_code=201)
async def add_bookmark(data: BookmarkCreate, services: Services = Depends(get_services)):
    ensure_ok(
        await services.reading.add_bookmark(data.book, data.chapter, verse=data.verse, note=data.note)
    )
    return services.reading.get_bookmark(data.book, data.chapter)


@router.get("/api/bookmarks/{book}/{chapter}", response_model=Bookmark)
async def get_bookmark(
    book: str,
    chapter: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    bookmark = services.reading.get_bookmark(book, chapter)
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return bookmark


@router.delete("/api/bookmarks/{book}/{chapter}", status_code=204)
async def remove_bookmark(
    book: str,
    chapter: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    ensure_ok(await services.reading.remove_bookmark(book, chapter))
