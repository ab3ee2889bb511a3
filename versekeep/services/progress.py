"""Daily reading ledger with aggregate queries and streak upkeep."""

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Callable

from pydantic import TypeAdapter

from versekeep import dates
from versekeep.schemas.progress import (
    DailyProgress,
    DayBreakdown,
    LifetimeStats,
    PeriodStats,
    Streak,
)
from versekeep.services.kv_store import KeyValueStore, StorageError
from versekeep.services.results import StoreResult, dump_json, load_json
from versekeep.services.streak import calculate_streak

logger = logging.getLogger(__name__)

DAILY_PROGRESS_KEY = "dailyProgress"
STREAK_KEY = "streakData"

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30

_progress_adapter = TypeAdapter(list[DailyProgress])
_streak_adapter = TypeAdapter(Streak)


def activity_level(chapters_read: int) -> int:
    """Calendar intensity bucket: 0 none, 1 for 1-2 chapters, 2 for 3-4, 3 for 5+."""
    if chapters_read <= 0:
        return 0
    if chapters_read <= 2:
        return 1
    if chapters_read <= 4:
        return 2
    return 3


def _merge_same_day(records: list[DailyProgress]) -> list[DailyProgress]:
    """Collapse records sharing a date into one, summing counts and keeping the latest timestamp."""
    merged: dict[date, DailyProgress] = {}
    for record in records:
        existing = merged.get(record.date)
        if existing is None:
            merged[record.date] = record
            continue
        merged[record.date] = DailyProgress(
            date=record.date,
            chapters_read=existing.chapters_read + record.chapters_read,
            verses_read=existing.verses_read + record.verses_read,
            timestamp=max(existing.timestamp, record.timestamp),
        )
    return list(merged.values())


class ProgressLedger:
    """One DailyProgress record per calendar day, plus the derived Streak.

    Every write re-derives the streak so the two never drift apart.
    """

    def __init__(
        self,
        store: KeyValueStore,
        today: Callable[[], date] = dates.today,
        now: Callable[[], datetime] = dates.now,
    ) -> None:
        self.store = store
        self.today = today
        self.now = now
        self.daily_progress: list[DailyProgress] = []
        self.streak = Streak()
        self.is_loading = True
        self._lock = asyncio.Lock()

    async def load(self) -> StoreResult:
        try:
            raw_progress, raw_streak = await self.store.multi_get([DAILY_PROGRESS_KEY, STREAK_KEY])
        except StorageError as e:
            logger.error("Error loading progress data: %s", e)
            self.is_loading = False
            return StoreResult.failed(e)

        loaded = load_json(raw_progress, _progress_adapter, list, DAILY_PROGRESS_KEY)
        self.daily_progress = _merge_same_day(loaded)
        self.streak = load_json(raw_streak, _streak_adapter, Streak, STREAK_KEY)
        self.is_loading = False

        async with self._lock:
            if len(self.daily_progress) != len(loaded):
                logger.warning(
                    "Merged %d duplicate daily progress records",
                    len(loaded) - len(self.daily_progress),
                )
                return await self._save(self.daily_progress)
            return await self._recalculate_streak()

    async def record_activity(self, chapters_read: int, verses_read: int) -> StoreResult:
        """Add reading activity to today's record, creating it if needed."""
        if chapters_read < 0 or verses_read < 0:
            raise ValueError("chapters_read and verses_read must be non-negative")

        async with self._lock:
            today = self.today()
            updated = []
            found = False
            for entry in self.daily_progress:
                if entry.date == today:
                    entry = DailyProgress(
                        date=today,
                        chapters_read=entry.chapters_read + chapters_read,
                        verses_read=entry.verses_read + verses_read,
                        timestamp=self.now(),
                    )
                    found = True
                updated.append(entry)
            if not found:
                updated.append(
                    DailyProgress(
                        date=today,
                        chapters_read=chapters_read,
                        verses_read=verses_read,
                        timestamp=self.now(),
                    )
                )
            return await self._save(updated)

    async def _save(self, progress: list[DailyProgress]) -> StoreResult:
        """Write the ledger and its derived streak together; the mirror moves only if both land."""
        streak = self._streak_for(progress)
        try:
            await self.store.multi_set([
                (DAILY_PROGRESS_KEY, dump_json(progress, _progress_adapter)),
                (STREAK_KEY, dump_json(streak, _streak_adapter)),
            ])
        except StorageError as e:
            logger.error("Error updating daily progress: %s", e)
            return StoreResult.failed(e)
        self.daily_progress = progress
        self.streak = streak
        return StoreResult.done()

    async def recalculate_streak(self) -> StoreResult:
        async with self._lock:
            return await self._recalculate_streak()

    def _streak_for(self, progress: list[DailyProgress]) -> Streak:
        return calculate_streak(
            (p.date for p in progress),
            today=self.today(),
            previous_longest=self.streak.longest,
        )

    async def _recalculate_streak(self) -> StoreResult:
        streak = self._streak_for(self.daily_progress)
        try:
            await self.store.set(STREAK_KEY, dump_json(streak, _streak_adapter))
        except StorageError as e:
            logger.error("Error saving streak data: %s", e)
            return StoreResult.failed(e)
        changed = streak != self.streak
        self.streak = streak
        return StoreResult.done(changed=changed)

    def get_current_streak(self) -> int:
        return self.streak.current

    def get_longest_streak(self) -> int:
        return self.streak.longest

    def get_today_progress(self) -> DailyProgress | None:
        today = self.today()
        return next((p for p in self.daily_progress if p.date == today), None)

    def _window_stats(self, days: int) -> PeriodStats:
        today = self.today()
        start = dates.days_ago(days, today)
        window = [p for p in self.daily_progress if start <= p.date <= today]
        return PeriodStats(
            chapters_read=sum(p.chapters_read for p in window),
            verses_read=sum(p.verses_read for p in window),
        )

    def get_weekly_stats(self) -> PeriodStats:
        """Totals for the trailing window from 7 days ago through today."""
        return self._window_stats(WEEKLY_WINDOW_DAYS)

    def get_monthly_stats(self) -> PeriodStats:
        """Totals for the trailing window from 30 days ago through today."""
        return self._window_stats(MONTHLY_WINDOW_DAYS)

    def get_lifetime_stats(self) -> LifetimeStats:
        return LifetimeStats(
            chapters_read=sum(p.chapters_read for p in self.daily_progress),
            verses_read=sum(p.verses_read for p in self.daily_progress),
            days_active=len(self.daily_progress),
        )

    def get_last_7_days(self) -> list[DayBreakdown]:
        """Chapters read on each of the last 7 days, oldest first, zero-filled."""
        by_date = {p.date: p.chapters_read for p in self.daily_progress}
        today = self.today()
        days = []
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            days.append(
                DayBreakdown(date=day, day_name=day.strftime("%a"), chapters_read=by_date.get(day, 0))
            )
        return days

    def get_recent_activity(self, limit: int = 10) -> list[DailyProgress]:
        return sorted(self.daily_progress, key=lambda p: p.date, reverse=True)[:limit]

    def get_monthly_average(self) -> float:
        """Monthly-window chapters per active day of the current calendar month."""
        today = self.today()
        active_days = sum(
            1 for p in self.daily_progress if p.date.year == today.year and p.date.month == today.month
        )
        if active_days == 0:
            return 0.0
        return round(self.get_monthly_stats().chapters_read / active_days, 1)

    def get_calendar(self) -> dict[date, int]:
        return {p.date: activity_level(p.chapters_read) for p in self.daily_progress}
