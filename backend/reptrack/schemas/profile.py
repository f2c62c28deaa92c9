from typing import Annotated
import datetime as dt
from pydantic import BaseModel, Field, field_validator

UserIdStr = Annotated[str, Field(max_length=120)]
# numbers or numeric strings; range checks happen in the repository
Measure = float | int | str | None

class CustomField(BaseModel):
    """A user-defined measurement, e.g. {"name": "neck", "value": 38, "unit": "cm"}."""
    id: str | None = None
    name: str
    value: float | int | str
    unit: str = ""

class ProfileUpdate(BaseModel):
    user_id: UserIdStr
    weight: Measure = None
    height: Measure = None
    fat_mass: Measure = None
    muscle_mass: Measure = None
    body_fat_percentage: Measure = None
    bmi: Measure = None
    waist: Measure = None
    chest: Measure = None
    arms: Measure = None
    thighs: Measure = None
    age: Measure = None
    gender: str | None = None
    goal_weight: Measure = None
    notes: str | None = None
    custom_fields: list[CustomField] = []

    @field_validator("user_id")
    @classmethod
    def non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("cannot be blank")
        return v2

class ProfileRead(BaseModel):
    user_id: str
    weight: float | None = None
    height: float | None = None
    fat_mass: float | None = None
    muscle_mass: float | None = None
    body_fat_percentage: float | None = None
    bmi: float | None = None
    waist: float | None = None
    chest: float | None = None
    arms: float | None = None
    thighs: float | None = None
    age: int | None = None
    gender: str | None = None
    goal_weight: float | None = None
    notes: str = ""
    custom_fields: list[CustomField] = []
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}

class MeasurementCreate(BaseModel):
    user_id: UserIdStr
    weight: Measure = None
    fat_mass: Measure = None
    muscle_mass: Measure = None
    body_fat_percentage: Measure = None
    notes: str | None = None

    @field_validator("user_id")
    @classmethod
    def non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("cannot be blank")
        return v2

class MeasurementRead(BaseModel):
    id: int
    user_id: str
    weight: float | None = None
    fat_mass: float | None = None
    muscle_mass: float | None = None
    body_fat_percentage: float | None = None
    notes: str = ""
    recorded_at: dt.datetime

    model_config = {"from_attributes": True}
