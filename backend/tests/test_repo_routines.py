import itertools
import uuid
import pytest

from reptrack.errors import NotFoundError, StoreError, ValidationError
from reptrack.models import DayRoutine
from reptrack.repositories.routine_repo import (
    PullExercise, PushExercise, RoutineRepository,
)

def uid():
    return f"u_{uuid.uuid4().hex[:10]}"

def ex(name, muscle="chest"):
    return {"name": name, "muscle": muscle, "equipments": ["barbell"], "is_custom": False}

def names(routine):
    return [e["name"] for e in routine.exercises]

def test_missing_routine_reads_as_empty(db):
    repo = RoutineRepository(db)
    user = uid()
    r = repo.get(user, "Sunday")
    assert (r.user_id, r.day, r.exercises) == (user, "sunday", [])
    assert r.id is None
    lookup = repo.lookup(user, "sunday")
    assert not lookup.found
    assert repo.list_by_user(user) == []

def test_add_appends_and_preserves_order(db, clock):
    repo = RoutineRepository(db, clock=clock)
    user = uid()
    first = repo.add_exercise(user, "monday", ex("Bench"))
    created = first.created_at
    clock.advance(minutes=1)
    repo.add_exercise(user, "Monday", ex("Fly"))
    r = repo.get(user, "monday")
    assert names(r) == ["Bench", "Fly"]
    assert r.created_at == created
    assert r.updated_at > r.created_at
    assert repo.lookup(user, "monday").found

def test_add_does_not_dedupe(db):
    repo = RoutineRepository(db)
    user = uid()
    repo.add_exercise(user, "friday", ex("Curl"))
    r = repo.add_exercise(user, "friday", ex("Curl"))
    assert names(r) == ["Curl", "Curl"]

def test_remove_is_case_insensitive(db):
    repo = RoutineRepository(db)
    user = uid()
    repo.add_exercise(user, "tuesday", ex("Squat", "legs"))
    repo.add_exercise(user, "tuesday", ex("Lunge", "legs"))
    r = repo.remove_exercise(user, "tuesday", "squat")
    assert names(r) == ["Lunge"]
    # nothing scheduled: still an empty routine back
    assert repo.remove_exercise(user, "sunday", "Squat").exercises == []

def test_reorder_replaces_list(db):
    repo = RoutineRepository(db)
    user = uid()
    for n in ("A", "B", "C"):
        repo.add_exercise(user, "wednesday", ex(n))
    current = repo.get(user, "wednesday").exercises
    repo.reorder(user, "wednesday", [current[2], current[0], current[1]])
    assert names(repo.get(user, "wednesday")) == ["C", "A", "B"]

@pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
def test_reorder_any_permutation_round_trips(db, order):
    repo = RoutineRepository(db)
    user = uid()
    for n, muscle in (("Bench", "chest"), ("Row", "back"), ("Squat", "legs")):
        repo.add_exercise(user, "friday", ex(n, muscle))
    current = repo.get(user, "friday").exercises
    wanted = [current[i] for i in order]
    repo.reorder(user, "friday", wanted)
    db.expire_all()
    stored = repo.get(user, "friday").exercises
    assert stored == wanted
    assert sorted(e["name"] for e in stored) == ["Bench", "Row", "Squat"]

def test_reorder_requires_existing_routine(db):
    repo = RoutineRepository(db)
    user = uid()
    with pytest.raises(NotFoundError):
        repo.reorder(user, "thursday", [ex("A")])
    assert not repo.lookup(user, "thursday").found

def test_list_by_user_in_weekday_order(db):
    repo = RoutineRepository(db)
    user = uid()
    for day in ("sunday", "monday", "wednesday"):
        repo.add_exercise(user, day, ex("Push-up"))
    assert [r.day for r in repo.list_by_user(user)] == ["monday", "wednesday", "sunday"]

def test_unknown_day_is_rejected(db):
    with pytest.raises(ValidationError):
        RoutineRepository(db).add_exercise(uid(), "someday", ex("A"))

def test_bulk_write_counts(db):
    repo = RoutineRepository(db)
    user = uid()
    repo.add_exercise(user, "monday", ex("Row", "back"))
    result = repo.bulk_write(user, [
        PushExercise(day="tuesday", exercise=ex("Row", "back")),
        PullExercise(day="monday", exercise_name="ROW"),
        PullExercise(day="saturday", exercise_name="Row"),  # no routine, no match
    ])
    assert result.upserted_count == 1
    assert result.modified_count == 1
    assert names(repo.get(user, "tuesday")) == ["Row"]
    assert repo.get(user, "monday").exercises == []

def test_bulk_write_empty_is_noop(db):
    result = RoutineRepository(db).bulk_write(uid(), [])
    assert (result.modified_count, result.upserted_count) == (0, 0)

def test_duplicate_user_day_surfaces_as_store_error(db):
    repo = RoutineRepository(db)
    user = uid()
    repo.add_exercise(user, "monday", ex("Dip"))
    db.add(DayRoutine(user_id=user, day="monday", exercises=[]))
    with pytest.raises(StoreError):
        repo.commit()
    # the session is usable again after the rollback
    assert names(repo.get(user, "monday")) == ["Dip"]
