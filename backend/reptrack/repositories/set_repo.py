from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Optional
from sqlalchemy import select, func

from reptrack.errors import ValidationError
from reptrack.models import WorkoutSet
from reptrack.repositories.base import BaseRepository
from reptrack.services import metrics
from reptrack.services.analytics import ExerciseHistory, group_sessions
from reptrack.validation import (
    coerce_reps, coerce_rpe, coerce_weight, exercise_key, require_text,
)

log = logging.getLogger(__name__)

class SetRepository(BaseRepository[WorkoutSet]):
    """Append-only log of performed sets. There is deliberately no update or delete."""
    model = WorkoutSet

    # WRITES
    def log_set(
        self,
        exercise_name: str,
        weight: Any,
        reps: Any,
        *,
        user_id: str,
        notes: Optional[str] = None,
        day: Optional[str] = None,
        rpe: Any = None,
    ) -> WorkoutSet:
        name = require_text(exercise_name, "exercise_name")
        uid = require_text(user_id, "user_id")
        w = coerce_weight(weight)
        r = coerce_reps(reps)
        s = WorkoutSet(
            user_id=uid,
            exercise_name=name,
            weight=w,
            reps=r,
            rpe=coerce_rpe(rpe),
            notes=notes,
            day=day.strip() if day and day.strip() else None,
            volume=metrics.volume(w, r),
            estimated_1rm=metrics.estimated_one_rep_max(w, r),
            created_at=self.clock(),
        )
        s = self.add_and_refresh(s)
        log.info("logged set id=%s user=%s exercise=%s %gx%d e1rm=%g", s.id, uid, name, w, r, s.estimated_1rm)
        return s

    # READS
    def get(self, set_id: int) -> Optional[WorkoutSet]:
        return self.db.get(WorkoutSet, set_id)

    def list_by_exercise(self, exercise_name: str) -> list[WorkoutSet]:
        """Every user's sets for one exercise, newest first."""
        key = exercise_key(require_text(exercise_name, "exercise_name"))
        stmt = select(WorkoutSet).where(func.lower(WorkoutSet.exercise_name) == key)\
                                 .order_by(WorkoutSet.created_at.desc(), WorkoutSet.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_by_user(self, user_id: str) -> list[WorkoutSet]:
        uid = require_text(user_id, "user_id")
        stmt = select(WorkoutSet).where(WorkoutSet.user_id == uid)\
                                 .order_by(WorkoutSet.created_at.desc(), WorkoutSet.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def recent_for_exercise(self, exercise_name: str, user_id: str, *, limit: int) -> list[WorkoutSet]:
        key = exercise_key(require_text(exercise_name, "exercise_name"))
        uid = require_text(user_id, "user_id")
        stmt = select(WorkoutSet).where(
            WorkoutSet.user_id == uid,
            func.lower(WorkoutSet.exercise_name) == key,
        ).order_by(WorkoutSet.created_at.desc(), WorkoutSet.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def list_since(self, user_id: str, since: datetime, *, limit: Optional[int] = None) -> list[WorkoutSet]:
        uid = require_text(user_id, "user_id")
        stmt = select(WorkoutSet).where(WorkoutSet.user_id == uid, WorkoutSet.created_at >= since)\
                                 .order_by(WorkoutSet.created_at.desc(), WorkoutSet.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def history_for_exercise(self, exercise_name: str, user_id: str, *, session_limit: int = 10) -> ExerciseHistory:
        """
        Recent sessions (sets grouped by UTC calendar day) for one exercise.

        Fetches ``session_limit * 10`` sets so a typical session of several sets
        still fills the requested number of sessions.
        """
        if session_limit < 1:
            raise ValidationError("session_limit must be >= 1")
        sets = self.recent_for_exercise(exercise_name, user_id, limit=session_limit * 10)
        sessions = group_sessions(sets, limit=session_limit)
        return ExerciseHistory(
            exercise_name=exercise_name.strip(),
            sessions=sessions,
            total_sessions=len(sessions),
        )
