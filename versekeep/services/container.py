import asyncio
import logging
from datetime import date, datetime
from typing import Callable

from fastapi import HTTPException, Request

from versekeep import dates
from versekeep.services.annotations import AnnotationStore
from versekeep.services.kv_store import KeyValueStore
from versekeep.services.progress import ProgressLedger
from versekeep.services.reading import ReadingTracker
from versekeep.services.results import StoreResult

logger = logging.getLogger(__name__)


class Services:
    """The stores of one app instance, all sharing a single key-value store.

    Loaded lazily on first use; a failed load is retried on the next request.
    """

    def __init__(
        self,
        store: KeyValueStore,
        today: Callable[[], date] = dates.today,
        now: Callable[[], datetime] = dates.now,
    ) -> None:
        self.store = store
        self.progress = ProgressLedger(store, today=today, now=now)
        self.reading = ReadingTracker(store, now=now)
        self.annotations = AnnotationStore(store, now=now)
        self._loaded = False
        self._load_lock = asyncio.Lock()

    async def ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._load_lock:
            if self._loaded:
                return
            results = [
                await self.progress.load(),
                await self.reading.load(),
                await self.annotations.load(),
            ]
            failed = [r for r in results if not r.ok]
            if failed:
                logger.error("Store load failed: %s", failed[0].error)
                raise HTTPException(status_code=503, detail="Storage unavailable")
            self._loaded = True


async def get_services(request: Request) -> Services:
    services: Services = request.app.state.services
    await services.ensure_loaded()
    return services


def ensure_ok(result: StoreResult) -> StoreResult:
    """Turn a failed store write into a 503 for the HTTP layer."""
    if not result.ok:
        raise HTTPException(status_code=503, detail=f"Storage write failed: {result.error}")
    return result
