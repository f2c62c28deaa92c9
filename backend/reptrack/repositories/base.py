# reptrack/repositories/base.py
from __future__ import annotations
from typing import Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from reptrack.clock import Clock, utcnow
from reptrack.errors import StoreError

T = TypeVar("T")  # SQLAlchemy model type

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    def __init__(self, db: Session, *, clock: Clock = utcnow):
        self.db = db
        self.clock = clock

    def commit(self) -> None:
        """Commit the unit of work; any database failure rolls back and surfaces as StoreError."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise StoreError(f"constraint violated: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.commit()
        self.db.refresh(entity)
        return entity
