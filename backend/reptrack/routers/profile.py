from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from reptrack.clock import Clock
from reptrack.db import get_db
from reptrack.deps.providers import get_clock
from reptrack.repositories.profile_repo import ProfileRepository
from reptrack.schemas.profile import MeasurementCreate, MeasurementRead, ProfileRead, ProfileUpdate

router = APIRouter(tags=["profile"])

@router.post("/profile", response_model=ProfileRead)
def save_profile(payload: ProfileUpdate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    fields = payload.model_dump(exclude={"user_id"})
    return ProfileRepository(db, clock=clock).save(payload.user_id, **fields)

@router.post("/profile/history", response_model=MeasurementRead, status_code=status.HTTP_201_CREATED)
def add_measurement(payload: MeasurementCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return ProfileRepository(db, clock=clock).add_measurement(
        payload.user_id,
        weight=payload.weight,
        fat_mass=payload.fat_mass,
        muscle_mass=payload.muscle_mass,
        body_fat_percentage=payload.body_fat_percentage,
        notes=payload.notes,
    )

@router.get("/profile/{user_id}", response_model=ProfileRead)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    # a user who never saved a profile gets every field unset, not a 404
    return ProfileRepository(db).get_or_empty(user_id)

@router.get("/profile/{user_id}/history", response_model=list[MeasurementRead])
def measurement_history(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return ProfileRepository(db).history(user_id, limit=limit)
