from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, DateTime, JSON, UniqueConstraint
from reptrack.db import Base
from reptrack.validation import exercise_key

class DayRoutine(Base):
    __tablename__ = "day_routines"
    __table_args__ = (UniqueConstraint("user_id", "day", name="uq_day_routines_user_day"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    day: Mapped[str] = mapped_column(String(16), nullable=False)
    # ordered list of embedded exercise objects; always reassign, never mutate in place
    exercises: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def has_exercise(self, name: str) -> bool:
        key = exercise_key(name)
        return any(exercise_key(e.get("name") or "") == key for e in self.exercises or [])
