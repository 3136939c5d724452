"""
Sparring session repository.

Handles database operations for :class:`SparringSession`, including the
bulk lookups used to build statistics snapshots.
"""

from typing import Optional, Sequence

from sqlmodel import Session, col, select

from app.models.sparring_session import SparringSession


class SparringSessionRepository:
    """Repository for SparringSession database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: SparringSession) -> SparringSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def create_many(self, entries: Sequence[SparringSession]) -> list[SparringSession]:
        for entry in entries:
            self.session.add(entry)
        self.session.commit()
        for entry in entries:
            self.session.refresh(entry)
        return list(entries)

    def get_by_id(self, entry_id: int) -> Optional[SparringSession]:
        return self.session.get(SparringSession, entry_id)

    def get_by_training_log(self, training_log_id: int) -> list[SparringSession]:
        statement = (select(SparringSession).where(SparringSession.training_log_id == training_log_id)
                     .order_by(SparringSession.session_number))
        return list(self.session.exec(statement).all())

    def get_by_training_logs(self, training_log_ids: Sequence[int]) -> dict[int, list[SparringSession]]:
        """Sessions for several logs at once, grouped by log id."""
        grouped: dict[int, list[SparringSession]] = {log_id: [] for log_id in training_log_ids}
        if not training_log_ids:
            return grouped
        statement = (select(SparringSession).where(col(SparringSession.training_log_id).in_(training_log_ids))
                     .order_by(SparringSession.training_log_id, SparringSession.session_number))
        for entry in self.session.exec(statement).all():
            grouped.setdefault(entry.training_log_id, []).append(entry)
        return grouped

    def update(self, entry: SparringSession) -> SparringSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def update_many(self, entries: Sequence[SparringSession]) -> None:
        for entry in entries:
            self.session.add(entry)
        self.session.commit()

    def delete(self, entry_id: int) -> bool:
        entry = self.get_by_id(entry_id)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False

    def delete_all_for_training_log(self, training_log_id: int) -> int:
        """Delete every session of a log.  Returns the number removed."""
        entries = self.get_by_training_log(training_log_id)
        for entry in entries:
            self.session.delete(entry)
        self.session.commit()
        return len(entries)
