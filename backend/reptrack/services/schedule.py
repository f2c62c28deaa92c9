"""Reconcile the weekdays an exercise is scheduled on against a desired set of days."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from reptrack.errors import ValidationError
from reptrack.models import DayRoutine
from reptrack.repositories.routine_repo import (
    BulkWriteResult, PullExercise, PushExercise, RoutineOp, RoutineRepository,
)
from reptrack.validation import WEEKDAYS, exercise_key, normalize_day, require_text

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ScheduleSync:
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    operations: int = 0
    modified_count: int = 0
    upserted_count: int = 0
    routines: list[DayRoutine] = field(default_factory=list)


def plan_sync(
    routines: Iterable[DayRoutine],
    exercise_name: str,
    desired_days: Iterable[str],
    exercise: Mapping[str, Any],
) -> tuple[list[RoutineOp], list[str], list[str]]:
    """Diff current routines against the desired days; returns (ops, added, removed)."""
    desired = {normalize_day(d) for d in desired_days}
    by_day = {r.day: r for r in routines}
    ops: list[RoutineOp] = []
    added: list[str] = []
    removed: list[str] = []
    for day in WEEKDAYS:
        current = by_day.get(day)
        has = current is not None and current.has_exercise(exercise_name)
        if day in desired and not has:
            ops.append(PushExercise(day=day, exercise=exercise))
            added.append(day)
        elif day not in desired and has:
            ops.append(PullExercise(day=day, exercise_name=exercise_name))
            removed.append(day)
    return ops, added, removed


def sync_exercise_days(
    repo: RoutineRepository,
    user_id: str,
    exercise_name: str,
    desired_days: Iterable[str],
    exercise: Mapping[str, Any],
) -> ScheduleSync:
    """
    Make ``exercise_name`` appear on exactly ``desired_days`` for this user.

    One read of all routines, one batched write, one read back. Calling it
    again with the same days plans no operations. Counts are whatever the
    batch reports; nothing is rolled back on the caller's behalf.
    """
    uid = require_text(user_id, "user_id")
    name = require_text(exercise_name, "exercise_name")
    if exercise is None or not isinstance(exercise, Mapping):
        raise ValidationError("exercise object is required")
    if desired_days is None or isinstance(desired_days, (str, bytes)):
        raise ValidationError("selected days must be a list")
    payload = dict(exercise)
    payload.setdefault("name", name)
    if exercise_key(str(payload["name"])) != exercise_key(name):
        raise ValidationError("exercise name does not match exercise_name")

    ops, added, removed = plan_sync(repo.list_by_user(uid), name, desired_days, payload)
    result = repo.bulk_write(uid, ops) if ops else BulkWriteResult()
    log.info("schedule sync user=%s exercise=%s added=%s removed=%s modified=%d upserted=%d",
             uid, name, added, removed, result.modified_count, result.upserted_count)
    return ScheduleSync(
        added=added,
        removed=removed,
        operations=len(ops),
        modified_count=result.modified_count,
        upserted_count=result.upserted_count,
        routines=repo.list_by_user(uid),
    )
