"""
Read-side summaries derived from logged sets and routines.

The pure functions here take already-loaded rows; the ``*_for_user`` helpers
wire them to the repositories. Calendar days are UTC dates throughout.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from reptrack.clock import as_utc
from reptrack.errors import ValidationError
from reptrack.services.metrics import round_half_up
from reptrack.validation import exercise_key

if TYPE_CHECKING:
    from reptrack.models import DayRoutine, WorkoutSet
    from reptrack.repositories.routine_repo import RoutineRepository
    from reptrack.repositories.set_repo import SetRepository

log = logging.getLogger(__name__)

UNKNOWN_MUSCLE = "Unknown"


@dataclass(slots=True)
class ExerciseSession:
    date: date
    sets: list = field(default_factory=list)
    max_weight: float = 0
    total_volume: float = 0
    max_1rm: float = 0
    avg_rpe: float = 0
    _rpe_count: int = 0

    def add(self, s: "WorkoutSet") -> None:
        self.sets.append(s)
        self.max_weight = max(self.max_weight, s.weight or 0)
        self.total_volume += s.volume or 0
        self.max_1rm = max(self.max_1rm, s.estimated_1rm or 0)
        if s.rpe:
            # running mean over the sets that carry an RPE
            self._rpe_count += 1
            self.avg_rpe = (self.avg_rpe * (self._rpe_count - 1) + s.rpe) / self._rpe_count


@dataclass(slots=True)
class ExerciseHistory:
    exercise_name: str
    sessions: list[ExerciseSession]
    total_sessions: int


@dataclass(slots=True)
class MuscleShare:
    muscle: str
    sets: int
    percentage: int


@dataclass(slots=True)
class MuscleSplit:
    breakdown: list[MuscleShare]
    total_sets: int
    window_days: int

    @property
    def period(self) -> str:
        return f"{self.window_days} days"


@dataclass(slots=True)
class ConsistencyDay:
    date: str  # ISO yyyy-mm-dd
    set_count: int
    exercise_count: int


@dataclass(slots=True)
class StreakStats:
    streak: int
    workout_days: int
    window_days: int
    consistency_percentage: int
    allow_yesterday: bool


def calendar_day(ts: datetime) -> date:
    return as_utc(ts).date()


def _check_window(window_days: int) -> None:
    if window_days < 1:
        raise ValidationError("window must be at least one day")


# --- sessions ---------------------------------------------------------------

def group_sessions(sets: Iterable["WorkoutSet"], *, limit: Optional[int] = None) -> list[ExerciseSession]:
    """Fold sets into one session per calendar day, newest day first."""
    by_day: dict[date, ExerciseSession] = {}
    for s in sets:
        d = calendar_day(s.created_at)
        session = by_day.get(d)
        if session is None:
            session = by_day[d] = ExerciseSession(date=d)
        session.add(s)
    sessions = sorted(by_day.values(), key=lambda x: x.date, reverse=True)
    return sessions[:limit] if limit is not None else sessions


# --- muscle split -----------------------------------------------------------

def build_muscle_map(routines: Iterable["DayRoutine"]) -> dict[str, str]:
    """exercise key -> muscle, scanning every routine (later days win on conflict)."""
    mapping: dict[str, str] = {}
    for routine in routines:
        for ex in routine.exercises or []:
            name = ex.get("name")
            if name:
                mapping[exercise_key(name)] = ex.get("muscle") or ""
    return mapping


def _logged_order(s: "WorkoutSet") -> tuple:
    return (as_utc(s.created_at), s.id or 0)


def muscle_breakdown(sets: Sequence["WorkoutSet"], muscle_map: dict[str, str]) -> list[MuscleShare]:
    """
    Share of sets per muscle, largest first.

    Ties keep the order in which each muscle was first logged, whatever order
    ``sets`` arrives in.
    """
    counts: dict[str, int] = {}
    for s in sorted(sets, key=_logged_order):
        muscle = muscle_map.get(exercise_key(s.exercise_name)) or UNKNOWN_MUSCLE
        counts[muscle] = counts.get(muscle, 0) + 1
    total = len(sets)
    shares = [
        MuscleShare(muscle=m, sets=n, percentage=round_half_up(100 * n / total) if total else 0)
        for m, n in counts.items()
    ]
    return sorted(shares, key=lambda x: x.sets, reverse=True)


def muscle_split_for_user(
    sets_repo: "SetRepository",
    routines_repo: "RoutineRepository",
    user_id: str,
    *,
    window_days: int = 30,
    now: Optional[datetime] = None,
) -> MuscleSplit:
    _check_window(window_days)
    now = now or sets_repo.clock()
    sets = sets_repo.list_since(user_id, now - timedelta(days=window_days))
    muscle_map = build_muscle_map(routines_repo.list_by_user(user_id))
    log.debug("muscle split user=%s window=%d sets=%d", user_id, window_days, len(sets))
    return MuscleSplit(breakdown=muscle_breakdown(sets, muscle_map), total_sets=len(sets), window_days=window_days)


# --- consistency & streak -----------------------------------------------------

def consistency_days(sets: Iterable["WorkoutSet"]) -> list[ConsistencyDay]:
    """One entry per distinct calendar day, oldest first."""
    counts: dict[date, int] = {}
    names: dict[date, set[str]] = {}
    for s in sets:
        d = calendar_day(s.created_at)
        counts[d] = counts.get(d, 0) + 1
        names.setdefault(d, set()).add(exercise_key(s.exercise_name))
    return [
        ConsistencyDay(date=d.isoformat(), set_count=counts[d], exercise_count=len(names[d]))
        for d in sorted(counts)
    ]


def consistency_for_user(
    sets_repo: "SetRepository",
    user_id: str,
    *,
    window_days: int = 90,
    now: Optional[datetime] = None,
) -> list[ConsistencyDay]:
    _check_window(window_days)
    now = now or sets_repo.clock()
    days = consistency_days(sets_repo.list_since(user_id, now - timedelta(days=window_days)))
    log.debug("consistency user=%s window=%d active_days=%d", user_id, window_days, len(days))
    return days


def streak(days: Iterable[ConsistencyDay], *, today: date, allow_yesterday: bool = True) -> int:
    """
    Consecutive workout days ending today.

    With ``allow_yesterday`` an empty today does not break the streak yet: the
    count starts from yesterday instead. Either way counting stops at the first
    day without sets.
    """
    active = {date.fromisoformat(d.date) for d in days if d.set_count > 0}
    cursor = today
    if cursor not in active and allow_yesterday:
        cursor -= timedelta(days=1)
    count = 0
    while cursor in active:
        count += 1
        cursor -= timedelta(days=1)
    return count


def streak_stats(
    days: Sequence[ConsistencyDay],
    *,
    today: date,
    window_days: int,
    allow_yesterday: bool = True,
) -> StreakStats:
    _check_window(window_days)
    workout_days = sum(1 for d in days if d.set_count > 0)
    return StreakStats(
        streak=streak(days, today=today, allow_yesterday=allow_yesterday),
        workout_days=workout_days,
        window_days=window_days,
        consistency_percentage=round_half_up(100 * workout_days / window_days),
        allow_yesterday=allow_yesterday,
    )
