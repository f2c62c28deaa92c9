"""Input normalisation applied before anything reaches the database."""
from __future__ import annotations

import math
from typing import Any

from reptrack.errors import ValidationError

WEEKDAYS: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)


def require_text(value: Any, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def exercise_key(name: str) -> str:
    """Identity of an exercise name: trimmed and case-insensitive."""
    return name.strip().lower()


def normalize_day(day: Any) -> str:
    d = require_text(day, "day").lower()
    if d not in WEEKDAYS:
        raise ValidationError(f"unknown day '{day}'")
    return d


def coerce_weight(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError("weight must be a number")
    try:
        weight = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"weight must be a number, got {value!r}")
    if not math.isfinite(weight) or weight < 0:
        raise ValidationError("weight must be a finite number >= 0")
    return weight


def coerce_measurement(value: Any, field: str) -> float | None:
    """Optional body measurement; None, blank and zero mean not recorded."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{field} must be a finite number >= 0")
    return number or None


def coerce_reps(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("reps must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"reps must be an integer, got {value!r}")
        reps = int(value)
    else:
        try:
            reps = int(str(value).strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"reps must be an integer, got {value!r}")
    if reps < 0:
        raise ValidationError("reps must be >= 0")
    return reps


def coerce_rpe(value: Any) -> int | None:
    # None, blank and zero (any spelling) all mean "not given"
    if isinstance(value, bool):
        raise ValidationError("rpe must be an integer")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if value is None:
        return None
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"rpe must be an integer, got {value!r}")
        rpe = int(value)
    else:
        try:
            rpe = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"rpe must be an integer, got {value!r}")
    if rpe == 0:
        return None
    if not 1 <= rpe <= 10:
        raise ValidationError("rpe must be between 1 and 10")
    return rpe
