from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from reptrack.clock import Clock
from reptrack.db import get_db
from reptrack.deps.providers import get_clock
from reptrack.repositories.routine_repo import RoutineRepository
from reptrack.repositories.set_repo import SetRepository
from reptrack.schemas.analytics import ConsistencyDayRead, MuscleSplitRead, StreakRead
from reptrack.services import analytics
from reptrack.settings import get_settings

router = APIRouter(prefix="/users", tags=["analytics"])

@router.get("/{user_id}/consistency", response_model=list[ConsistencyDayRead])
def consistency(
    user_id: str,
    days: int = Query(90, ge=1, le=3650),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return analytics.consistency_for_user(SetRepository(db, clock=clock), user_id, window_days=days)

@router.get("/{user_id}/streak", response_model=StreakRead)
def streak(
    user_id: str,
    days: int = Query(90, ge=1, le=3650),
    allow_yesterday: bool | None = None,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    if allow_yesterday is None:
        allow_yesterday = get_settings().STREAK_ALLOW_YESTERDAY
    now = clock()
    days_seen = analytics.consistency_for_user(SetRepository(db, clock=clock), user_id, window_days=days, now=now)
    return analytics.streak_stats(
        days_seen, today=analytics.calendar_day(now), window_days=days, allow_yesterday=allow_yesterday
    )

@router.get("/{user_id}/muscle-split", response_model=MuscleSplitRead)
def muscle_split(
    user_id: str,
    days: int = Query(30, ge=1, le=3650),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return analytics.muscle_split_for_user(
        SetRepository(db, clock=clock), RoutineRepository(db, clock=clock), user_id, window_days=days
    )
