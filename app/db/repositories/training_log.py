"""
Training log repository.

Handles database operations for :class:`TrainingLog`.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.training_log import TrainingLog


class TrainingLogRepository:
    """Repository for TrainingLog database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: TrainingLog) -> TrainingLog:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, entry_id: int) -> Optional[TrainingLog]:
        return self.session.get(TrainingLog, entry_id)

    def get_recent_by_user(self, user_id: str, skip: int = 0, limit: int = 100, ) -> list[TrainingLog]:
        """Most recent logs first."""
        statement = (select(TrainingLog).where(TrainingLog.user_id == user_id).order_by(TrainingLog.date.desc())
                     .offset(skip).limit(limit))
        return list(self.session.exec(statement).all())

    def update(self, entry: TrainingLog) -> TrainingLog:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def delete(self, entry_id: int) -> bool:
        entry = self.get_by_id(entry_id)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False
