from datetime import timedelta
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

def log(user, name):
    r = client.post("/sets", json={"exercise_name": name, "weight": 50, "reps": 10, "user_id": user})
    assert r.status_code == 201, r.text

def test_muscle_split_endpoint(frozen):
    user = uid()
    client.post(f"/routines/{user}/monday/exercises", json={"exercise": {"name": "Row", "muscle": "back"}})
    log(user, "Row")
    log(user, "Row")
    log(user, "Mystery")
    r = client.get(f"/users/{user}/muscle-split", params={"days": 7})
    assert r.status_code == 200
    assert r.json() == {
        "breakdown": [
            {"muscle": "back", "sets": 2, "percentage": 67},
            {"muscle": "Unknown", "sets": 1, "percentage": 33},
        ],
        "total_sets": 3,
        "period": "7 days",
    }

def test_muscle_split_with_no_sets():
    r = client.get(f"/users/{uid()}/muscle-split")
    assert r.json() == {"breakdown": [], "total_sets": 0, "period": "30 days"}

def test_consistency_and_streak(frozen):
    user = uid()
    frozen.advance(days=-3)
    for _ in range(3):
        log(user, "Squat")
        frozen.advance(days=1)
    # logged the three days before today, nothing yet today
    r = client.get(f"/users/{user}/consistency", params={"days": 30})
    assert [d["date"] for d in r.json()] == ["2026-03-07", "2026-03-08", "2026-03-09"]
    assert all(d["set_count"] == 1 and d["exercise_count"] == 1 for d in r.json())

    r = client.get(f"/users/{user}/streak", params={"days": 30})
    assert r.json() == {
        "streak": 3, "workout_days": 3, "window_days": 30,
        "consistency_percentage": 10, "allow_yesterday": True,
    }
    r = client.get(f"/users/{user}/streak", params={"days": 30, "allow_yesterday": False})
    assert r.json()["streak"] == 0

def test_window_must_be_positive():
    assert client.get(f"/users/{uid()}/consistency", params={"days": 0}).status_code == 422
