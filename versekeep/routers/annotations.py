from fastapi import APIRouter, Depends, Path

from versekeep.schemas.annotation import (
    HIGHLIGHT_COLORS,
    ChapterAnnotations,
    Highlight,
    HighlightUpdate,
    Note,
    NoteUpdate,
)
from versekeep.services.container import Services, ensure_ok, get_services

router = APIRouter(prefix="/api/annotations", tags=["annotations"])


@router.get("/colors", response_model=dict[str, str])
async def list_colors():
    return HIGHLIGHT_COLORS


@router.get("/{book}/{chapter}", response_model=ChapterAnnotations)
async def get_chapter_annotations(
    book: str,
    chapter: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    store = services.annotations
    return ChapterAnnotations(
        book=book,
        chapter=chapter,
        highlights=sorted(store.get_chapter_highlights(book, chapter), key=lambda h: h.verse_number),
        notes=sorted(store.get_chapter_notes(book, chapter), key=lambda n: n.verse_number),
    )


@router.put("/{book}/{chapter}/{verse}/highlight", response_model=Highlight)
async def set_highlight(
    book: str,
    data: HighlightUpdate,
    chapter: int = Path(ge=1),
    verse: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    ensure_ok(await services.annotations.add_highlight(book, chapter, verse, data.color))
    return services.annotations.get_highlight(book, chapter, verse)


@router.delete("/{book}/{chapter}/{verse}/highlight", status_code=204)
async def remove_highlight(
    book: str,
    chapter: int = Path(ge=1),
    verse: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    ensure_ok(await services.annotations.remove_highlight(book, chapter, verse))


@router.put("/{book}/{chapter}/{verse}/note", response_model=Note | None)
async def save_note(
    book: str,
    data: NoteUpdate,
    chapter: int = Path(ge=1),
    verse: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    """Save a verse note. Blank text deletes it and returns null."""
    ensure_ok(await services.annotations.save_note(book, chapter, verse, data.text))
    return services.annotations.get_note(book, chapter, verse)


@router.delete("/{book}/{chapter}/{verse}/note", status_code=204)
async def remove_note(
    book: str,
    chapter: int = Path(ge=1),
    verse: int = Path(ge=1),
    services: Services = Depends(get_services),
):
    ensure_ok(await services.annotations.remove_note(book, chapter, verse))
