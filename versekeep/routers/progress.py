import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query

from versekeep import config
from versekeep.schemas.progress import (
    ActivityCreate,
    DailyProgress,
    DayBreakdown,
    ProgressStatsResponse,
    Streak,
)
from versekeep.services.container import Services, ensure_ok, get_services

router = APIRouter(prefix="/api/progress", tags=["progress"])


def _require_tracking() -> None:
    if not config.PROGRESS_TRACKING_ENABLED:
        raise HTTPException(status_code=403, detail="Progress tracking is disabled")


@router.post("/activity", response_model=DailyProgress, status_code=201)
async def record_activity(data: ActivityCreate, services: Services = Depends(get_services)):
    _require_tracking()
    ensure_ok(await services.progress.record_activity(data.chapters_read, data.verses_read))
    return services.progress.get_today_progress()


@router.get("/today", response_model=DailyProgress | None)
async def get_today(services: Services = Depends(get_services)):
    return services.progress.get_today_progress()


@router.get("/stats", response_model=ProgressStatsResponse)
async def get_stats(services: Services = Depends(get_services)):
    ledger = services.progress
    return ProgressStatsResponse(
        weekly=ledger.get_weekly_stats(),
        monthly=ledger.get_monthly_stats(),
        lifetime=ledger.get_lifetime_stats(),
        monthly_average=ledger.get_monthly_average(),
    )


@router.get("/streak", response_model=Streak)
async def get_streak(services: Services = Depends(get_services)):
    return services.progress.streak


@router.get("/last-7-days", response_model=list[DayBreakdown])
async def get_last_7_days(services: Services = Depends(get_services)):
    return services.progress.get_last_7_days()


@router.get("/recent", response_model=list[DailyProgress])
async def get_recent(
    limit: int = Query(config.RECENT_ACTIVITY_LIMIT, ge=1, le=366),
    services: Services = Depends(get_services),
):
    return services.progress.get_recent_activity(limit)


@router.get("/calendar", response_model=dict[dt.date, int])
async def get_calendar(services: Services = Depends(get_services)):
    return services.progress.get_calendar()
