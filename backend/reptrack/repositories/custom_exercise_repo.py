from __future__ import annotations
from typing import Any, Iterable, Optional
from sqlalchemy import select, func, or_

from reptrack.errors import ConflictError, NotFoundError
from reptrack.models import CustomExercise
from reptrack.repositories.base import BaseRepository
from reptrack.validation import exercise_key, require_text

# fields a partial update may touch
_UPDATABLE = ("name", "muscle", "equipments", "difficulty", "instructions", "type")

def _contains(column, needle: str):
    return func.lower(column).contains(needle.lower(), autoescape=True)

class CustomExerciseRepository(BaseRepository[CustomExercise]):
    model = CustomExercise

    # READS
    def get(self, exercise_id: int) -> Optional[CustomExercise]:
        return self.db.get(CustomExercise, exercise_id)

    def get_by_name(self, name: str) -> Optional[CustomExercise]:
        stmt = select(CustomExercise).where(func.lower(CustomExercise.name) == exercise_key(name))
        return self.db.execute(stmt).scalars().first()

    def list(
        self,
        *,
        name: Optional[str] = None,
        muscle: Optional[str] = None,
        type: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> list[CustomExercise]:
        stmt = select(CustomExercise)
        for column, needle in ((CustomExercise.name, name), (CustomExercise.muscle, muscle),
                               (CustomExercise.type, type), (CustomExercise.difficulty, difficulty)):
            if needle:
                stmt = stmt.where(_contains(column, needle))
        stmt = stmt.order_by(CustomExercise.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def search(self, query: str) -> list[CustomExercise]:
        """Name or muscle contains the query, any case."""
        stmt = select(CustomExercise).where(
            or_(_contains(CustomExercise.name, query), _contains(CustomExercise.muscle, query))
        ).order_by(CustomExercise.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def create(
        self,
        *,
        name: str,
        muscle: str,
        equipments: Iterable[str] = (),
        difficulty: Optional[str] = None,
        instructions: Optional[str] = None,
        type: Optional[str] = None,
    ) -> CustomExercise:
        name = require_text(name, "name")
        muscle = require_text(muscle, "muscle")
        if self.get_by_name(name):
            raise ConflictError("exercise with this name already exists")
        ex = CustomExercise(
            name=name,
            muscle=muscle.lower(),
            equipments=list(equipments or []),
            difficulty=difficulty or "beginner",
            instructions=instructions or "",
            type=type or "strength",
            created_at=self.clock(),
        )
        return self.add_and_refresh(ex)

    def update(self, exercise_id: int, **fields: Any) -> CustomExercise:
        ex = self.get(exercise_id)
        if not ex:
            raise NotFoundError("custom exercise not found")
        changes = {k: v for k, v in fields.items() if k in _UPDATABLE and v is not None}
        if "name" in changes:
            changes["name"] = require_text(changes["name"], "name")
            other = self.get_by_name(changes["name"])
            if other is not None and other.id != ex.id:
                raise ConflictError("exercise with this name already exists")
        if "muscle" in changes:
            changes["muscle"] = require_text(changes["muscle"], "muscle").lower()
        if "equipments" in changes:
            changes["equipments"] = list(changes["equipments"])
        for k, v in changes.items():
            setattr(ex, k, v)
        ex.updated_at = self.clock()
        self.commit()
        self.db.refresh(ex)
        return ex

    def delete(self, exercise_id: int) -> None:
        ex = self.get(exercise_id)
        if not ex:
            raise NotFoundError("custom exercise not found")
        self.db.delete(ex)
        self.commit()
