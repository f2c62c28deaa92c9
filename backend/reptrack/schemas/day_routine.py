from typing import Annotated
import datetime as dt
from pydantic import BaseModel, Field, field_validator

NameStr = Annotated[str, Field(min_length=1, max_length=120)]

class RoutineExercise(BaseModel):
    """An exercise as embedded in a day routine."""
    name: NameStr
    muscle: str | None = None
    equipments: list[str] = []
    difficulty: str | None = None
    instructions: str | None = None
    type: str | None = None
    gif_url: str | None = None
    is_custom: bool = False

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

    @field_validator("equipments")
    @classmethod
    def unique_equipments(cls, v: list[str]) -> list[str]:
        # a set semantically; keep first-seen order
        return list(dict.fromkeys(v))

class DayRoutineRead(BaseModel):
    # id/timestamps are empty for a day that was never scheduled
    id: int | None = None
    user_id: str
    day: str
    exercises: list[RoutineExercise]
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}

class AddExerciseRequest(BaseModel):
    exercise: RoutineExercise

class ReorderRequest(BaseModel):
    exercises: list[RoutineExercise]

class ScheduleSyncRequest(BaseModel):
    exercise_name: NameStr
    selected_days: list[str]
    exercise: RoutineExercise

class ScheduleSyncRead(BaseModel):
    added: list[str]
    removed: list[str]
    operations: int
    modified_count: int
    upserted_count: int
    routines: list[DayRoutineRead]

    model_config = {"from_attributes": True}
