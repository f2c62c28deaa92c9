from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from reptrack.clock import Clock
from reptrack.db import get_db
from reptrack.deps.providers import get_clock
from reptrack.repositories.routine_repo import RoutineRepository
from reptrack.schemas.day_routine import (
    AddExerciseRequest, DayRoutineRead, ReorderRequest, ScheduleSyncRead, ScheduleSyncRequest,
)
from reptrack.services.schedule import sync_exercise_days

router = APIRouter(prefix="/routines", tags=["routines"])

@router.get("/{user_id}", response_model=list[DayRoutineRead])
def list_routines(user_id: str, db: Session = Depends(get_db)):
    return RoutineRepository(db).list_by_user(user_id)

@router.get("/{user_id}/{day}", response_model=DayRoutineRead)
def get_routine(user_id: str, day: str, db: Session = Depends(get_db)):
    # a day that was never scheduled reads as an empty routine, not a 404
    return RoutineRepository(db).get(user_id, day)

@router.post("/{user_id}/{day}/exercises", response_model=DayRoutineRead, status_code=status.HTTP_201_CREATED)
def add_exercise(
    user_id: str,
    day: str,
    payload: AddExerciseRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return RoutineRepository(db, clock=clock).add_exercise(user_id, day, payload.exercise.model_dump())

@router.delete("/{user_id}/{day}/exercises/{exercise_name}", response_model=DayRoutineRead)
def remove_exercise(
    user_id: str,
    day: str,
    exercise_name: str,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return RoutineRepository(db, clock=clock).remove_exercise(user_id, day, exercise_name)

@router.put("/{user_id}/{day}/order", response_model=DayRoutineRead)
def reorder_exercises(
    user_id: str,
    day: str,
    payload: ReorderRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return RoutineRepository(db, clock=clock).reorder(
        user_id, day, [e.model_dump() for e in payload.exercises]
    )

@router.post("/{user_id}/batch-update", response_model=ScheduleSyncRead)
def batch_update_days(
    user_id: str,
    payload: ScheduleSyncRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return sync_exercise_days(
        RoutineRepository(db, clock=clock),
        user_id,
        payload.exercise_name,
        payload.selected_days,
        payload.exercise.model_dump(),
    )
