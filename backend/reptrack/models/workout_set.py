from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, Float, Text, DateTime, Index
from reptrack.db import Base

class WorkoutSet(Base):
    """One performed set. Rows are append-only; volume and 1RM are derived on write."""
    __tablename__ = "workout_sets"
    __table_args__ = (
        Index("ix_workout_sets_user_created", "user_id", "created_at"),
        Index("ix_workout_sets_user_exercise_created", "user_id", "exercise_name", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), nullable=False)
    exercise_name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    day: Mapped[str | None] = mapped_column(String(16), nullable=True)
    volume: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    estimated_1rm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
