import datetime as dt
from typing import Literal

from pydantic import Field

from versekeep.schemas.base import CamelModel

HighlightColor = Literal["yellow", "green", "blue", "pink", "orange"]

HIGHLIGHT_COLORS: dict[str, str] = {
    "yellow": "#FFF59D",
    "green": "#A5D6A7",
    "blue": "#90CAF9",
    "pink": "#F48FB1",
    "orange": "#FFCC80",
}


def verse_id(book: str, chapter: int, verse_number: int) -> str:
    return f"{book}-{chapter}-{verse_number}"


class Highlight(CamelModel):
    id: str
    book: str
    chapter: int = Field(ge=1)
    verse_number: int = Field(ge=1)
    color: HighlightColor
    timestamp: dt.datetime


class Note(CamelModel):
    id: str
    book: str
    chapter: int = Field(ge=1)
    verse_number: int = Field(ge=1)
    text: str
    timestamp: dt.datetime


class HighlightUpdate(CamelModel):
    color: HighlightColor


class NoteUpdate(CamelModel):
    text: str = ""


class ChapterAnnotations(CamelModel):
    book: str
    chapter: int
    highlights: list[Highlight] = []
    notes: list[Note] = []
