from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from reptrack.clock import Clock
from reptrack.db import get_db
from reptrack.deps.providers import get_clock, get_coach
from reptrack.repositories.coach_repo import CoachRepository
from reptrack.repositories.profile_repo import ProfileRepository
from reptrack.repositories.routine_repo import RoutineRepository
from reptrack.repositories.set_repo import SetRepository
from reptrack.schemas.coach import CoachRecommendationRead, CoachRequest
from reptrack.services.coach import CoachClient, generate_advice

router = APIRouter(prefix="/coach", tags=["coach"])

@router.post("/recommend", response_model=CoachRecommendationRead)
def recommend(
    payload: CoachRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    coach: CoachClient = Depends(get_coach),
):
    return generate_advice(
        coach,
        SetRepository(db, clock=clock),
        RoutineRepository(db, clock=clock),
        CoachRepository(db, clock=clock),
        ProfileRepository(db),
        payload.user_id,
    )

@router.get("/recommend/{user_id}", response_model=CoachRecommendationRead)
def latest_recommendation(user_id: str, db: Session = Depends(get_db)):
    rec = CoachRepository(db).get(user_id)
    if rec is None:
        return CoachRecommendationRead(cached=False)
    return rec
