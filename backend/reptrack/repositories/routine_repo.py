from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from sqlalchemy import select

from reptrack.errors import NotFoundError, ValidationError
from reptrack.models import DayRoutine
from reptrack.repositories.base import BaseRepository
from reptrack.validation import WEEKDAYS, exercise_key, normalize_day, require_text


@dataclass(slots=True, frozen=True)
class RoutineLookup:
    """Result of reading one (user, day) routine: a stored row or nothing yet."""
    user_id: str
    day: str
    routine: Optional[DayRoutine]

    @property
    def found(self) -> bool:
        return self.routine is not None

    def or_empty(self) -> DayRoutine:
        # transient object, never added to the session
        if self.routine is not None:
            return self.routine
        return DayRoutine(user_id=self.user_id, day=self.day, exercises=[])


@dataclass(slots=True, frozen=True)
class PushExercise:
    day: str
    exercise: Mapping[str, Any]


@dataclass(slots=True, frozen=True)
class PullExercise:
    day: str
    exercise_name: str


RoutineOp = Union[PushExercise, PullExercise]


@dataclass(slots=True)
class BulkWriteResult:
    modified_count: int = 0
    upserted_count: int = 0


def _clean_exercise(exercise: Mapping[str, Any]) -> dict:
    ex = dict(exercise)
    ex["name"] = require_text(ex.get("name"), "exercise name")
    return ex


def _day_order(routine: DayRoutine) -> int:
    return WEEKDAYS.index(routine.day) if routine.day in WEEKDAYS else len(WEEKDAYS)


class RoutineRepository(BaseRepository[DayRoutine]):
    """
    One ordered exercise list per (user, day).

    Adding upserts the routine; reordering requires it to exist already.
    Exercise names are matched case-insensitively, stored verbatim.
    """
    model = DayRoutine

    # READS
    def lookup(self, user_id: str, day: str) -> RoutineLookup:
        uid = require_text(user_id, "user_id")
        d = normalize_day(day)
        stmt = select(DayRoutine).where(DayRoutine.user_id == uid, DayRoutine.day == d)
        return RoutineLookup(uid, d, self.db.execute(stmt).scalar_one_or_none())

    def get(self, user_id: str, day: str) -> DayRoutine:
        """The stored routine, or an empty one when the day was never scheduled."""
        return self.lookup(user_id, day).or_empty()

    def list_by_user(self, user_id: str) -> list[DayRoutine]:
        uid = require_text(user_id, "user_id")
        stmt = select(DayRoutine).where(DayRoutine.user_id == uid)
        return sorted(self.db.execute(stmt).scalars().all(), key=_day_order)

    # WRITES
    def add_exercise(self, user_id: str, day: str, exercise: Mapping[str, Any]) -> DayRoutine:
        """Append to the end of the day's list, creating the routine on first use. No dedup."""
        found = self.lookup(user_id, day)
        ex = _clean_exercise(exercise)
        now = self.clock()
        routine = found.routine
        if routine is None:
            routine = DayRoutine(user_id=found.user_id, day=found.day, exercises=[ex],
                                 created_at=now, updated_at=now)
            self.db.add(routine)
        else:
            routine.exercises = [*routine.exercises, ex]
            routine.updated_at = now
        self.commit()
        self.db.refresh(routine)
        return routine

    def remove_exercise(self, user_id: str, day: str, exercise_name: str) -> DayRoutine:
        """Drop every entry with that name (any case). Missing routine reads back as empty."""
        found = self.lookup(user_id, day)
        key = exercise_key(require_text(exercise_name, "exercise_name"))
        routine = found.routine
        if routine is None:
            return found.or_empty()
        routine.exercises = [e for e in routine.exercises if exercise_key(e.get("name") or "") != key]
        routine.updated_at = self.clock()
        self.commit()
        self.db.refresh(routine)
        return routine

    def reorder(self, user_id: str, day: str, exercises: Sequence[Mapping[str, Any]]) -> DayRoutine:
        """Replace the list wholesale with the caller's order. Does not upsert."""
        if exercises is None or isinstance(exercises, (str, bytes, Mapping)):
            raise ValidationError("exercises must be a list")
        found = self.lookup(user_id, day)
        if not found.found:
            raise NotFoundError(f"no routine for {found.day}")
        routine = found.routine
        routine.exercises = [_clean_exercise(e) for e in exercises]
        routine.updated_at = self.clock()
        self.commit()
        self.db.refresh(routine)
        return routine

    def bulk_write(self, user_id: str, ops: Sequence[RoutineOp]) -> BulkWriteResult:
        """
        Apply push/pull operations for one user as a single unit of work.

        One read of the affected rows, one commit. A push on a day without a
        routine creates it (counted as upserted); a pull on a missing routine
        matches nothing and is skipped.
        """
        uid = require_text(user_id, "user_id")
        result = BulkWriteResult()
        if not ops:
            return result

        days = {normalize_day(op.day) for op in ops}
        stmt = select(DayRoutine).where(DayRoutine.user_id == uid, DayRoutine.day.in_(sorted(days)))
        by_day = {r.day: r for r in self.db.execute(stmt).scalars().all()}
        now = self.clock()

        for op in ops:
            day = normalize_day(op.day)
            routine = by_day.get(day)
            if isinstance(op, PushExercise):
                ex = _clean_exercise(op.exercise)
                if routine is None:
                    routine = DayRoutine(user_id=uid, day=day, exercises=[ex], created_at=now, updated_at=now)
                    self.db.add(routine)
                    by_day[day] = routine
                    result.upserted_count += 1
                else:
                    routine.exercises = [*routine.exercises, ex]
                    routine.updated_at = now
                    result.modified_count += 1
            else:
                if routine is None:
                    continue
                key = exercise_key(op.exercise_name)
                routine.exercises = [e for e in routine.exercises if exercise_key(e.get("name") or "") != key]
                routine.updated_at = now
                result.modified_count += 1

        self.commit()
        return result
