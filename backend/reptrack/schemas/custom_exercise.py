from typing import Annotated
from pydantic import BaseModel, StringConstraints, field_validator

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
MuscleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=60)]

class CustomExerciseCreate(BaseModel):
    name: NameStr
    muscle: MuscleStr
    equipments: list[str] = []
    difficulty: str | None = None
    instructions: str | None = None
    type: str | None = None

class CustomExerciseUpdate(BaseModel):
    name: NameStr | None = None
    muscle: MuscleStr | None = None
    equipments: list[str] | None = None
    difficulty: str | None = None
    instructions: str | None = None
    type: str | None = None

    @field_validator("equipments")
    @classmethod
    def unique_equipments(cls, v: list[str] | None) -> list[str] | None:
        return list(dict.fromkeys(v)) if v is not None else v

class CustomExerciseRead(BaseModel):
    id: int
    name: str
    muscle: str
    equipments: list[str]
    difficulty: str
    instructions: str
    type: str
    is_custom: bool = True

    model_config = {"from_attributes": True}

class SearchResult(BaseModel):
    """Exercise from either source, shaped like a routine exercise."""
    id: str
    name: str
    muscle: str | None = None
    equipments: list[str] = []
    difficulty: str | None = None
    instructions: str | None = None
    type: str | None = None
    gif_url: str | None = None
    is_custom: bool
