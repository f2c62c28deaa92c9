"""
LLM coaching summary.

The prompt is assembled from the user's body profile, routines, the last week
of sets and the 30-day muscle split; the model is asked for JSON matching ``CoachAdvice``.
"""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

import httpx
from pydantic import ValidationError as SchemaError

from reptrack.errors import CoachUnavailableError, UpstreamError
from reptrack.models import BodyProfile, CoachRecommendation, DayRoutine, WorkoutSet
from reptrack.repositories.coach_repo import CoachRepository
from reptrack.repositories.profile_repo import ProfileRepository
from reptrack.repositories.routine_repo import RoutineRepository
from reptrack.repositories.set_repo import SetRepository
from reptrack.schemas.coach import CoachAdvice
from reptrack.services.analytics import MuscleSplit, group_sessions, muscle_split_for_user
from reptrack.settings import Settings
from reptrack.validation import WEEKDAYS, require_text

log = logging.getLogger(__name__)

RECENT_DAYS = 7
RECENT_SET_LIMIT = 100
SPLIT_DAYS = 30
SESSIONS_PER_EXERCISE = 3

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)

RESPONSE_SHAPE = """{
  "summary": "2-3 sentence assessment of the user's training",
  "progression_tips": [
    {"exercise": "...", "current_level": "...", "recommendation": "...", "reasoning": "..."}
  ],
  "weak_points": [{"area": "...", "explanation": "...", "fix": "..."}],
  "routine_suggestions": [{"suggestion": "...", "reason": "..."}],
  "recovery_tips": ["..."],
  "body_composition_advice": "2-3 sentences based on the profile metrics and goal weight"
}"""


def _fmt_num(x: float) -> str:
    return f"{x:g}"


# (label, attribute, unit) in prompt order
_PROFILE_LINES = (
    ("Age", "age", ""),
    ("Gender", "gender", ""),
    ("Weight", "weight", " kg"),
    ("Height", "height", " cm"),
    ("BMI", "bmi", ""),
    ("Body Fat", "body_fat_percentage", "%"),
    ("Muscle Mass", "muscle_mass", " kg"),
    ("Fat Mass", "fat_mass", " kg"),
    ("Goal Weight", "goal_weight", " kg"),
    ("Waist", "waist", " cm"),
    ("Chest", "chest", " cm"),
    ("Arms", "arms", " cm"),
    ("Thighs", "thighs", " cm"),
)


def _profile_section(profile: Optional[BodyProfile]) -> list[str]:
    lines = ["USER PROFILE:"]
    if profile is None:
        lines.append("- No profile data available")
        return lines
    for label, attr, unit in _PROFILE_LINES:
        value = getattr(profile, attr)
        if value:
            shown = _fmt_num(value) if isinstance(value, (int, float)) else value
            lines.append(f"- {label}: {shown}{unit}")
    for f in profile.custom_fields or []:
        unit = f" {f['unit']}" if f.get("unit") else ""
        lines.append(f"- {f['name']}: {f['value']}{unit}")
    if profile.notes:
        lines.append(f"- User Notes: {profile.notes}")
    if len(lines) == 1:
        lines.append("- No profile data available")
    return lines


def _routine_section(routines: Sequence[DayRoutine]) -> list[str]:
    lines = ["WEEKLY ROUTINE:"]
    if not routines:
        lines.append("- No routines configured yet")
        return lines
    by_day = {r.day: r for r in routines}
    for day in WEEKDAYS:
        routine = by_day.get(day)
        if routine is None:
            continue
        if routine.exercises:
            names = ", ".join(
                f"{e['name']} ({e['muscle']})" if e.get("muscle") else e["name"]
                for e in routine.exercises
            )
            lines.append(f"- {day.capitalize()}: {names}")
        else:
            lines.append(f"- {day.capitalize()}: Rest day")
    return lines


def _history_section(recent_sets: Sequence[WorkoutSet]) -> list[str]:
    lines = [f"RECENT WORKOUT HISTORY (last {RECENT_DAYS} days):"]
    if not recent_sets:
        lines.append("- No workout data recorded yet")
        return lines
    by_exercise: dict[str, list[WorkoutSet]] = {}
    for s in recent_sets:
        by_exercise.setdefault(s.exercise_name, []).append(s)
    for name, sets in by_exercise.items():
        lines.append(f"  {name}:")
        for session in group_sessions(sets, limit=SESSIONS_PER_EXERCISE):
            sets_info = ", ".join(
                f"{_fmt_num(s.weight)}kg x {s.reps}" + (f" @RPE{s.rpe}" if s.rpe else "")
                for s in session.sets
            )
            lines.append(
                f"    {session.date.isoformat()}: {sets_info} | Max: {_fmt_num(session.max_weight)}kg"
                f" | Est 1RM: {_fmt_num(session.max_1rm)}kg | Volume: {_fmt_num(session.total_volume)}kg"
            )
    return lines


def _split_section(split: Optional[MuscleSplit]) -> list[str]:
    if split is None or not split.breakdown:
        return []
    lines = [f"MUSCLE SPLIT (last {split.period}):"]
    lines += [f"- {m.muscle}: {m.sets} sets ({m.percentage}%)" for m in split.breakdown]
    lines.append(f"- Total sets: {split.total_sets}")
    return lines


def build_prompt(
    profile: Optional[BodyProfile],
    routines: Sequence[DayRoutine],
    recent_sets: Sequence[WorkoutSet],
    split: Optional[MuscleSplit],
) -> str:
    parts = [
        "You are an expert strength coach. Using the training data below, give personalised, "
        "practical recommendations with concrete weights, reps and sets.",
        "",
        *_profile_section(profile),
        "",
        *_routine_section(routines),
        "",
        *_history_section(recent_sets),
    ]
    split_lines = _split_section(split)
    if split_lines:
        parts += ["", *split_lines]
    parts += [
        "",
        "Reference the user's actual exercises and numbers; no generic advice.",
        "Respond ONLY with valid JSON in exactly this structure:",
        RESPONSE_SHAPE,
    ]
    return "\n".join(parts)


def parse_advice(text: str) -> CoachAdvice:
    """Parse the model's answer; unparseable output becomes the summary verbatim."""
    body = text
    m = _FENCE.search(text)
    if m:
        body = m.group(1).strip()
    try:
        return CoachAdvice.model_validate(json.loads(body))
    except (json.JSONDecodeError, SchemaError) as e:
        log.warning("coach response was not valid advice JSON: %s", e)
        return CoachAdvice(summary=text)


class CoachClient:
    """Chat-completions client for an OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str],
        model: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CoachClient":
        return cls(settings.LLM_API_URL, settings.LLM_API_KEY, settings.LLM_MODEL,
                   timeout=settings.LLM_TIMEOUT_SECONDS)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def complete(self, prompt: str) -> str:
        if not self.configured:
            raise CoachUnavailableError("LLM API key not configured")
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.7,
            "max_tokens": 1024,
            "top_p": 0.9,
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.post(self.api_url, json=body,
                                headers={"Authorization": f"Bearer {self.api_key}"})
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"completion request failed with {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"completion request failed: {e}") from e
        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""


def generate_advice(
    client: CoachClient,
    sets_repo: SetRepository,
    routines_repo: RoutineRepository,
    coach_repo: CoachRepository,
    profile_repo: ProfileRepository,
    user_id: str,
    *,
    now: Optional[datetime] = None,
) -> CoachRecommendation:
    uid = require_text(user_id, "user_id")
    if not client.configured:
        raise CoachUnavailableError("LLM API key not configured")
    now = now or sets_repo.clock()
    profile = profile_repo.get(uid)
    routines = routines_repo.list_by_user(uid)
    recent = sets_repo.list_since(uid, now - timedelta(days=RECENT_DAYS), limit=RECENT_SET_LIMIT)
    split = muscle_split_for_user(sets_repo, routines_repo, uid, window_days=SPLIT_DAYS, now=now)

    advice = parse_advice(client.complete(build_prompt(profile, routines, recent, split)))
    snapshot = {
        "has_profile": profile is not None,
        "routine_count": len(routines),
        "recent_set_count": len(recent),
        "split_set_count": split.total_sets,
    }
    return coach_repo.save(uid, recommendations=advice.model_dump(), data_snapshot=snapshot)
