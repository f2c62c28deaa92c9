from __future__ import annotations
from typing import Any, Iterable, Optional
from sqlalchemy import select

from reptrack.errors import ValidationError
from reptrack.models import BodyMeasurement, BodyProfile
from reptrack.repositories.base import BaseRepository
from reptrack.services import metrics
from reptrack.validation import coerce_measurement, require_text

MEASUREMENTS = (
    "weight", "height", "fat_mass", "muscle_mass", "body_fat_percentage", "bmi",
    "waist", "chest", "arms", "thighs", "goal_weight",
)
_PROFILE_FIELDS = frozenset(MEASUREMENTS) | {"age", "gender", "notes", "custom_fields"}

def _coerce_age(value: Any) -> Optional[int]:
    age = coerce_measurement(value, "age")
    if age is None:
        return None
    if not age.is_integer():
        raise ValidationError(f"age must be a whole number, got {value!r}")
    return int(age)

def _clean_custom_fields(fields: Optional[Iterable[dict]]) -> list[dict]:
    # entries without a name or a value are dropped
    return [dict(f) for f in fields or [] if f.get("name") and f.get("value") not in (None, "")]

class ProfileRepository(BaseRepository[BodyProfile]):
    """
    Body composition: one current profile per user plus a dated history.

    Saving replaces the whole profile. BMI and body-fat % are derived from
    weight/height and fat mass/weight when the caller does not supply them.
    """
    model = BodyProfile

    # READS
    def get(self, user_id: str) -> Optional[BodyProfile]:
        stmt = select(BodyProfile).where(BodyProfile.user_id == require_text(user_id, "user_id"))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_or_empty(self, user_id: str) -> BodyProfile:
        """The stored profile, or a transient one with every measurement unset."""
        profile = self.get(user_id)
        if profile is None:
            return BodyProfile(user_id=user_id.strip(), notes="", custom_fields=[])
        return profile

    def history(self, user_id: str, *, limit: int = 50) -> list[BodyMeasurement]:
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        stmt = (
            select(BodyMeasurement)
            .where(BodyMeasurement.user_id == require_text(user_id, "user_id"))
            .order_by(BodyMeasurement.recorded_at.desc(), BodyMeasurement.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def save(self, user_id: str, **fields: Any) -> BodyProfile:
        uid = require_text(user_id, "user_id")
        unknown = set(fields) - _PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"unknown profile fields: {', '.join(sorted(unknown))}")

        values: dict[str, Any] = {f: coerce_measurement(fields.get(f), f) for f in MEASUREMENTS}
        if values["bmi"] is None:
            values["bmi"] = metrics.body_mass_index(values["weight"], values["height"])
        if values["body_fat_percentage"] is None:
            values["body_fat_percentage"] = metrics.body_fat_percentage(values["fat_mass"], values["weight"])
        values["age"] = _coerce_age(fields.get("age"))
        gender = fields.get("gender")
        values["gender"] = (gender.strip() or None) if isinstance(gender, str) else None
        values["notes"] = (fields.get("notes") or "").strip()
        values["custom_fields"] = _clean_custom_fields(fields.get("custom_fields"))

        now = self.clock()
        profile = self.get(uid)
        if profile is None:
            profile = BodyProfile(user_id=uid, created_at=now)
            self.db.add(profile)
        for name, value in values.items():
            setattr(profile, name, value)
        profile.updated_at = now
        self.commit()
        self.db.refresh(profile)
        return profile

    def add_measurement(
        self,
        user_id: str,
        *,
        weight: Any = None,
        fat_mass: Any = None,
        muscle_mass: Any = None,
        body_fat_percentage: Any = None,
        notes: Optional[str] = None,
    ) -> BodyMeasurement:
        w = coerce_measurement(weight, "weight")
        fm = coerce_measurement(fat_mass, "fat_mass")
        bfp = coerce_measurement(body_fat_percentage, "body_fat_percentage")
        record = BodyMeasurement(
            user_id=require_text(user_id, "user_id"),
            weight=w,
            fat_mass=fm,
            muscle_mass=coerce_measurement(muscle_mass, "muscle_mass"),
            body_fat_percentage=bfp if bfp is not None else metrics.body_fat_percentage(fm, w),
            notes=(notes or "").strip(),
            recorded_at=self.clock(),
        )
        return self.add_and_refresh(record)
