from typing import Annotated
import datetime as dt
from pydantic import BaseModel, Field, field_validator

# Keep max length via Field
ExerciseStr = Annotated[str, Field(max_length=120)]
UserIdStr = Annotated[str, Field(max_length=120)]

class SetCreate(BaseModel):
    exercise_name: ExerciseStr
    # numbers or numeric strings; coercion and range checks happen in the repository
    weight: float | int | str
    reps: int | float | str
    user_id: UserIdStr
    notes: str | None = None
    day: str | None = None
    rpe: int | str | None = None

    @field_validator("exercise_name", "user_id")
    @classmethod
    def non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("cannot be blank")
        return v2  # stored trimmed

class SetRead(BaseModel):
    id: int
    user_id: str
    exercise_name: str
    weight: float
    reps: int
    rpe: int | None = None
    notes: str | None = None
    day: str | None = None
    volume: float
    estimated_1rm: float
    created_at: dt.datetime

    model_config = {"from_attributes": True}

class ExerciseSessionRead(BaseModel):
    date: dt.date
    sets: list[SetRead]
    max_weight: float
    total_volume: float
    max_1rm: float
    avg_rpe: float

    model_config = {"from_attributes": True}

class ExerciseHistoryRead(BaseModel):
    exercise_name: str
    sessions: list[ExerciseSessionRead]
    total_sessions: int

    model_config = {"from_attributes": True}
