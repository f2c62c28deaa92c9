from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from reptrack.clock import Clock
from reptrack.db import get_db
from reptrack.deps.providers import get_clock
from reptrack.repositories.set_repo import SetRepository
from reptrack.schemas.workout_set import SetCreate, SetRead, ExerciseHistoryRead
from reptrack.settings import get_settings

router = APIRouter(tags=["sets"])

@router.post("/sets", response_model=SetRead, status_code=status.HTTP_201_CREATED)
def log_set(payload: SetCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return SetRepository(db, clock=clock).log_set(
        payload.exercise_name,
        payload.weight,
        payload.reps,
        user_id=payload.user_id,
        notes=payload.notes,
        day=payload.day,
        rpe=payload.rpe,
    )

@router.get("/sets/exercise/{exercise_name}", response_model=list[SetRead])
def list_sets_for_exercise(exercise_name: str, db: Session = Depends(get_db)):
    # not scoped to a user: every logged set for the exercise
    return SetRepository(db).list_by_exercise(exercise_name)

@router.get("/users/{user_id}/sets", response_model=list[SetRead])
def list_sets_for_user(user_id: str, db: Session = Depends(get_db)):
    return SetRepository(db).list_by_user(user_id)

@router.get("/history/{exercise_name}", response_model=ExerciseHistoryRead)
def exercise_history(
    exercise_name: str,
    user_id: str | None = None,
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    uid = user_id or get_settings().DEFAULT_USER_ID
    return SetRepository(db).history_for_exercise(exercise_name, uid, session_limit=limit)
