from __future__ import annotations
from typing import Optional
from sqlalchemy import select

from reptrack.models import CoachRecommendation
from reptrack.repositories.base import BaseRepository
from reptrack.validation import require_text

class CoachRepository(BaseRepository[CoachRecommendation]):
    """Latest generated advice per user (one row each, overwritten on regenerate)."""
    model = CoachRecommendation

    def get(self, user_id: str) -> Optional[CoachRecommendation]:
        stmt = select(CoachRecommendation).where(CoachRecommendation.user_id == require_text(user_id, "user_id"))
        return self.db.execute(stmt).scalar_one_or_none()

    def save(self, user_id: str, *, recommendations: dict, data_snapshot: dict) -> CoachRecommendation:
        now = self.clock()
        rec = self.get(user_id)
        if rec is None:
            rec = CoachRecommendation(user_id=user_id.strip(), created_at=now)
            self.db.add(rec)
        rec.recommendations = recommendations
        rec.data_snapshot = data_snapshot
        rec.generated_at = now
        self.commit()
        self.db.refresh(rec)
        return rec
