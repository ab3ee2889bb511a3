import datetime as dt

from pydantic import Field

from versekeep.schemas.base import CamelModel


class ReadingHistoryItem(CamelModel):
    book: str
    chapter: int = Field(ge=1)
    timestamp: dt.datetime


class LastPosition(CamelModel):
    book: str
    chapter: int = Field(ge=1)


class Bookmark(CamelModel):
    book: str
    chapter: int = Field(ge=1)
    verse: int | None = Field(None, ge=1)
    note: str | None = None
    timestamp: dt.datetime


class BookmarkCreate(CamelModel):
    book: str = Field(min_length=1)
    chapter: int = Field(ge=1)
    verse: int | None = Field(None, ge=1)
    note: str | None = None


class ChapterVisit(CamelModel):
    chapters_read: int = Field(1, ge=0)
    verses_read: int | None = Field(None, ge=0, description="Verses in the chapter; records activity when set")


class ChapterReadResponse(CamelModel):
    read: bool
