import datetime as dt

from pydantic import Field, field_serializer, field_validator

from versekeep.schemas.base import CamelModel


class DailyProgress(CamelModel):
    date: dt.date
    chapters_read: int = Field(0, ge=0)
    verses_read: int = Field(0, ge=0)
    timestamp: dt.datetime


class Streak(CamelModel):
    current: int = Field(0, ge=0)
    longest: int = Field(0, ge=0)
    last_read_date: dt.date | None = None

    @field_validator("last_read_date", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        # Stored as an empty string until the first day is read
        if value == "":
            return None
        return value

    @field_serializer("last_read_date")
    def blank_for_none(self, value: dt.date | None) -> str:
        if value is None:
            return ""
        return value.isoformat()


class ActivityCreate(CamelModel):
    chapters_read: int = Field(0, ge=0)
    verses_read: int = Field(0, ge=0)


class PeriodStats(CamelModel):
    chapters_read: int = 0
    verses_read: int = 0


class LifetimeStats(CamelModel):
    chapters_read: int = 0
    verses_read: int = 0
    days_active: int = 0


class DayBreakdown(CamelModel):
    date: dt.date
    day_name: str
    chapters_read: int = 0


class ProgressStatsResponse(CamelModel):
    weekly: PeriodStats
    monthly: PeriodStats
    lifetime: LifetimeStats
    monthly_average: float
