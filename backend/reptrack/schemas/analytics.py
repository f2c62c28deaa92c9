from pydantic import BaseModel

class MuscleShareRead(BaseModel):
    muscle: str
    sets: int
    percentage: int

    model_config = {"from_attributes": True}

class MuscleSplitRead(BaseModel):
    breakdown: list[MuscleShareRead]
    total_sets: int
    period: str

    model_config = {"from_attributes": True}

class ConsistencyDayRead(BaseModel):
    date: str
    set_count: int
    exercise_count: int

    model_config = {"from_attributes": True}

class StreakRead(BaseModel):
    streak: int
    workout_days: int
    window_days: int
    consistency_percentage: int
    allow_yesterday: bool

    model_config = {"from_attributes": True}
