import uuid
from datetime import timedelta
import pytest

from reptrack.clock import as_utc
from reptrack.errors import ValidationError
from reptrack.repositories.set_repo import SetRepository

def uid():
    return f"u_{uuid.uuid4().hex[:10]}"

def test_log_set_derives_volume_and_1rm(db, clock):
    repo = SetRepository(db, clock=clock)
    s = repo.log_set("Bench Press", "60", "10", user_id=uid(), notes="easy", day="Monday", rpe="7")
    assert s.id
    assert s.weight == 60.0 and s.reps == 10 and s.rpe == 7
    assert s.volume == 600
    assert s.estimated_1rm == 80
    assert as_utc(s.created_at) == clock()
    assert s.day == "Monday"  # free label, kept as given

def test_log_set_rejects_bad_input_before_writing(db, clock):
    repo = SetRepository(db, clock=clock)
    user = uid()
    with pytest.raises(ValidationError):
        repo.log_set("Squat", "heavy", 5, user_id=user)
    with pytest.raises(ValidationError):
        repo.log_set("Squat", 100, "five", user_id=user)
    with pytest.raises(ValidationError):
        repo.log_set("", 100, 5, user_id=user)
    with pytest.raises(ValidationError):
        repo.log_set("Squat", 100, 5, user_id=" ")
    assert repo.list_by_user(user) == []

def test_zero_reps_is_kept_with_zero_metrics(db, clock):
    s = SetRepository(db, clock=clock).log_set("Plank", 0, 0, user_id=uid())
    assert s.volume == 0 and s.estimated_1rm == 0 and s.rpe is None

def test_lists_are_newest_first(db, clock):
    repo = SetRepository(db, clock=clock)
    user = uid()
    name = f"Row {uuid.uuid4().hex[:6]}"
    first = repo.log_set(name, 50, 10, user_id=user)
    clock.advance(minutes=5)
    second = repo.log_set(name.upper(), 55, 8, user_id=user)
    clock.advance(minutes=5)
    other_user = repo.log_set(name, 40, 12, user_id=uid())

    assert [s.id for s in repo.list_by_user(user)] == [second.id, first.id]
    # global by exercise name, any case
    assert [s.id for s in repo.list_by_exercise(name.lower())] == [other_user.id, second.id, first.id]

def test_history_groups_by_day(db, clock):
    repo = SetRepository(db, clock=clock)
    user = uid()
    repo.log_set("bench_press", 60, 10, user_id=user, rpe=7)
    clock.advance(hours=1)
    repo.log_set("bench_press", 65, 8, user_id=user)
    clock.advance(days=1)
    repo.log_set("bench_press", 70, 5, user_id=user, rpe=9)

    h = repo.history_for_exercise("Bench_Press", user, session_limit=10)
    assert h.total_sessions == 2
    newest, oldest = h.sessions
    assert newest.date > oldest.date
    assert newest.max_1rm == 82 and newest.total_volume == 350 and newest.max_weight == 70
    assert oldest.max_1rm == 82
    assert oldest.total_volume == 1120
    assert oldest.max_weight == 65
    assert len(oldest.sets) == 2
    # mean over the sets that carry an RPE only
    assert oldest.avg_rpe == 7
    assert newest.avg_rpe == 9

def test_history_limit_and_user_scope(db, clock):
    repo = SetRepository(db, clock=clock)
    user = uid()
    for _ in range(4):
        repo.log_set("Deadlift", 100, 5, user_id=user)
        clock.advance(days=1)
    repo.log_set("Deadlift", 200, 5, user_id=uid())

    h = repo.history_for_exercise("deadlift", user, session_limit=2)
    assert h.total_sessions == 2
    assert all(s.max_weight == 100 for s in h.sessions)
    assert h.sessions[0].date - h.sessions[1].date == timedelta(days=1)

    with pytest.raises(ValidationError):
        repo.history_for_exercise("deadlift", user, session_limit=0)
