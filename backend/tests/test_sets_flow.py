from datetime import datetime, timezone
import uuid

import pytest
from fastapi.testclient import TestClient

from reptrack.deps.providers import get_clock
from reptrack.main import app

client = TestClient(app)

def uid():
    return f"u_{uuid.uuid4().hex[:10]}"

@pytest.fixture
def frozen(clock):
    app.dependency_overrides[get_clock] = lambda: clock
    yield clock
    app.dependency_overrides.pop(get_clock, None)

def log(user, name, weight, reps, **extra):
    r = client.post("/sets", json={"exercise_name": name, "weight": weight, "reps": reps, "user_id": user, **extra})
    assert r.status_code == 201, r.text
    return r.json()

def test_log_set_returns_stored_record(frozen):
    user = uid()
    body = log(user, "  Bench Press ", "60", "10", rpe="8", notes="paused", day="monday")
    assert body["id"]
    assert body["exercise_name"] == "Bench Press"
    assert body["weight"] == 60.0 and body["reps"] == 10 and body["rpe"] == 8
    assert body["volume"] == 600
    assert body["estimated_1rm"] == 80
    assert body["created_at"].startswith("2026-03-10T12:00:00")

def test_caller_cannot_supply_derived_fields(frozen):
    body = log(uid(), "Squat", 100, 5, volume=1, estimated_1rm=1)
    assert body["volume"] == 500
    assert body["estimated_1rm"] == 117

def test_non_numeric_input_is_a_400():
    r = client.post("/sets", json={"exercise_name": "Squat", "weight": "lots", "reps": 5, "user_id": uid()})
    assert r.status_code == 400
    assert "weight" in r.json()["detail"]
    r = client.post("/sets", json={"exercise_name": "Squat", "weight": 100, "reps": 5, "user_id": uid(), "rpe": 12})
    assert r.status_code == 400

def test_missing_identity_is_rejected():
    r = client.post("/sets", json={"exercise_name": "Squat", "weight": 100, "reps": 5})
    assert r.status_code == 422
    r = client.post("/sets", json={"exercise_name": "  ", "weight": 100, "reps": 5, "user_id": uid()})
    assert r.status_code == 422

def test_lists_by_user_and_exercise(frozen):
    user = uid()
    name = f"Press {uuid.uuid4().hex[:6]}"
    first = log(user, name, 40, 10)
    frozen.advance(minutes=3)
    second = log(user, name, 42.5, 8)
    r = client.get(f"/users/{user}/sets")
    assert [s["id"] for s in r.json()] == [second["id"], first["id"]]
    r = client.get(f"/sets/exercise/{name.lower()}")
    assert [s["id"] for s in r.json()] == [second["id"], first["id"]]

def test_history_sessions(frozen):
    user = uid()
    frozen.set(datetime(2026, 2, 1, 9, tzinfo=timezone.utc))
    log(user, "bench_press", 60, 10)
    log(user, "bench_press", 65, 8)
    frozen.set(datetime(2026, 2, 2, 9, tzinfo=timezone.utc))
    log(user, "bench_press", 70, 5)

    r = client.get("/history/BENCH_PRESS", params={"user_id": user, "limit": 5})
    assert r.status_code == 200
    body = r.json()
    assert body["total_sessions"] == 2
    day2, day1 = body["sessions"]
    assert day2["date"] == "2026-02-02" and day1["date"] == "2026-02-01"
    assert day1["max_1rm"] == 82 and day1["total_volume"] == 1120 and len(day1["sets"]) == 2
    assert day2["max_1rm"] == 82

def test_history_for_unknown_exercise_is_empty():
    r = client.get("/history/never-logged", params={"user_id": uid()})
    assert r.status_code == 200
    assert r.json() == {"exercise_name": "never-logged", "sessions": [], "total_sessions": 0}

@pytest.mark.parametrize("rpe", [0, "0", ""])
def test_zero_or_blank_rpe_is_stored_as_missing(rpe):
    body = log(uid(), "Row", 50, 8, rpe=rpe)
    assert body["rpe"] is None

def test_each_logged_set_writes_an_info_line(caplog):
    user = uid()
    with caplog.at_level("INFO", logger="reptrack.repositories.set_repo"):
        body = log(user, "Deadlift", 140, 3)
    assert f"logged set id={body['id']} user={user} exercise=Deadlift 140x3" in caplog.text
