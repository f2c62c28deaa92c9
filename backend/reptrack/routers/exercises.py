from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from reptrack.db import get_db
from reptrack.clock import Clock
from reptrack.deps.providers import get_catalog, get_clock
from reptrack.errors import NotFoundError
from reptrack.repositories.custom_exercise_repo import CustomExerciseRepository
from reptrack.schemas.custom_exercise import (
    CustomExerciseCreate, CustomExerciseRead, CustomExerciseUpdate, SearchResult,
)
from reptrack.services.catalog import ExerciseCatalog
from reptrack.validation import exercise_key

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("/search/{query}", response_model=list[SearchResult])
def search_exercises(
    query: str,
    db: Session = Depends(get_db),
    catalog: ExerciseCatalog = Depends(get_catalog),
):
    """Custom exercises first, then catalog hits whose name is not already listed."""
    custom = [
        SearchResult(**CustomExerciseRead.model_validate(e).model_dump(exclude={"id"}), id=str(e.id))
        for e in CustomExerciseRepository(db).search(query)
    ]
    seen = {exercise_key(e.name) for e in custom}
    external = [SearchResult(**e) for e in catalog.search(query) if exercise_key(e["name"]) not in seen]
    return custom + external

@router.get("/custom", response_model=list[CustomExerciseRead])
def list_custom(
    name: str | None = None,
    muscle: str | None = None,
    type: str | None = None,
    difficulty: str | None = None,
    db: Session = Depends(get_db),
):
    return CustomExerciseRepository(db).list(name=name, muscle=muscle, type=type, difficulty=difficulty)

@router.get("/custom/{name}", response_model=CustomExerciseRead)
def get_custom(name: str, db: Session = Depends(get_db)):
    ex = CustomExerciseRepository(db).get_by_name(name)
    if not ex:
        raise NotFoundError("custom exercise not found")
    return ex

@router.post("/custom", response_model=CustomExerciseRead, status_code=status.HTTP_201_CREATED)
def create_custom(payload: CustomExerciseCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return CustomExerciseRepository(db, clock=clock).create(**payload.model_dump())

@router.put("/custom/{exercise_id}", response_model=CustomExerciseRead)
def update_custom(
    exercise_id: int,
    payload: CustomExerciseUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return CustomExerciseRepository(db, clock=clock).update(exercise_id, **payload.model_dump(exclude_unset=True))

@router.delete("/custom/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_custom(exercise_id: int, db: Session = Depends(get_db)):
    CustomExerciseRepository(db).delete(exercise_id)
