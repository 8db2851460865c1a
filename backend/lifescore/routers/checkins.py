"""Daily check-ins API router."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List
from datetime import date, timedelta

from lifescore.dimensions import DIMENSION_KEYS
from lifescore.errors import CheckInValidationError, PersistenceError
from lifescore.routers.player import get_checkin_service
from lifescore.schemas import (
    CheckInResult,
    CheckInSummary,
    DailyCheckIn,
    DailyCheckInCreate,
)
from lifescore.services import CheckInService
from lifescore.services.scoring import calculate_daily_score

router = APIRouter(prefix="/checkins", tags=["checkins"])


@router.get("/", response_model=List[DailyCheckIn])
def list_checkins(
    limit: int = 7,
    service: CheckInService = Depends(get_checkin_service),
):
    """List recent check-ins, newest first."""
    return service.recent_check_ins(limit)


@router.get("/today", response_model=DailyCheckIn)
def get_today_checkin(service: CheckInService = Depends(get_checkin_service)):
    """Get today's check-in."""
    checkin = service.get_today_check_in()
    if not checkin:
        raise HTTPException(status_code=404, detail="No check-in for today")
    return checkin


@router.post("/", response_model=CheckInResult)
def create_checkin(
    checkin_data: DailyCheckInCreate,
    service: CheckInService = Depends(get_checkin_service),
):
    """Create or replace the check-in for a date and update progression."""
    try:
        return service.submit(checkin_data)
    except CheckInValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors or str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/history/summary", response_model=CheckInSummary)
def get_checkin_summary(
    days: int = 7,
    service: CheckInService = Depends(get_checkin_service),
):
    """Get summary of recent check-ins."""
    since = date.today() - timedelta(days=days)

    checkins = [c for c in service.get_player().check_ins if c.date >= since]

    if not checkins:
        return CheckInSummary(
            period_days=days,
            checkin_count=0,
            average_score=None,
            averages={key: None for key in DIMENSION_KEYS},
        )

    scores = [calculate_daily_score(c) for c in checkins]
    averages = {
        key: round(sum(getattr(c, key) for c in checkins) / len(checkins), 1)
        for key in DIMENSION_KEYS
    }

    return CheckInSummary(
        period_days=days,
        checkin_count=len(checkins),
        average_score=round(sum(scores) / len(scores), 1),
        averages=averages,
    )
