"""
Sparring session service.

Adds, edits and removes sparring sessions and their events.

Every mutation goes through the same cycle:

1. load the stored event list and normalize it,
2. apply the change to the typed list,
3. write the re-encoded list back,
4. derive the score from the new lists for the response.

The score is never written.
Deleting a session renumbers the remaining sessions of its log
``1..n`` without gaps.
"""

import datetime
import logging
from typing import Any, Callable

from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlmodel import Session

from app.db.repositories.sparring_session import SparringSessionRepository
from app.db.repositories.training_log import TrainingLogRepository
from app.models.sparring_session import SparringSession
from app.models.training_log import TrainingLog
from app.schemas.events import PositionScore, SubmissionEvent, SweepEvent
from app.schemas.training_log import SessionCreate, SessionRecord, SessionResponse, SessionUpdate
from app.scoring.normalization import encode_events, normalize_positions, normalize_submissions, normalize_sweeps
from app.scoring.points import count_submissions, score_session

logger = logging.getLogger(__name__)

_NORMALIZERS: dict[str, Callable[[Any], list]] = {
    "submission_events": normalize_submissions,
    "sweep_events": normalize_sweeps,
    "position_scores": normalize_positions,
}


def _enum_value(value: Any) -> Any:
    return value.value if value is not None else None


def build_session(training_log_id: int, session_number: int, data: SessionCreate) -> SparringSession:
    """Create an unsaved :class:`SparringSession` row from an API body."""
    return SparringSession(training_log_id=training_log_id, session_number=session_number,
                           partner_name=data.partner_name, notes=data.notes,
                           submission_events=encode_events(data.submission_events),
                           sweep_events=encode_events(data.sweep_events),
                           position_scores=encode_events(data.position_scores),
                           is_competition_match=data.is_competition_match, result=_enum_value(data.result),
                           method=_enum_value(data.method), stage=_enum_value(data.stage),
                           submission_technique=data.submission_technique, )


def session_to_response(entry: SparringSession) -> SessionResponse:
    """Build the API response, deriving counters and score from the events.

    Stored rows go through :class:`SessionRecord` first, so malformed events
    are dropped and unknown competition labels read as ``None``.
    """
    record = SessionRecord.model_validate(entry)
    given, received = count_submissions(record.submission_events)
    score = score_session(record)

    return SessionResponse(id=entry.id, training_log_id=entry.training_log_id, session_number=entry.session_number,
                           partner_name=entry.partner_name, notes=entry.notes,
                           submission_events=record.submission_events, sweep_events=record.sweep_events,
                           position_scores=record.position_scores, submissions_given=given,
                           submissions_received=received, my_points=score.my_points,
                           opponent_points=score.opponent_points, is_competition_match=entry.is_competition_match,
                           result=record.result, method=record.method, stage=record.stage,
                           submission_technique=entry.submission_technique, )


class SparringSessionService:
    """Service for sparring sessions and their event lists."""

    def __init__(self, session: Session):
        self.repository = SparringSessionRepository(session)
        self.log_repository = TrainingLogRepository(session)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def list_for_log(self, user_id: str, training_log_id: int) -> list[SessionResponse]:
        self._get_owned_log(user_id, training_log_id)
        return [session_to_response(e) for e in self.repository.get_by_training_log(training_log_id)]

    def add_session(self, user_id: str, training_log_id: int, data: SessionCreate, ) -> SessionResponse:
        self._get_owned_log(user_id, training_log_id)
        existing = self.repository.get_by_training_log(training_log_id)
        entry = build_session(training_log_id, len(existing) + 1, data)
        entry = self.repository.create(entry)
        return session_to_response(entry)

    def get_session(self, user_id: str, session_id: int) -> SessionResponse:
        return session_to_response(self._get_owned_session(user_id, session_id))

    def update_session(self, user_id: str, session_id: int, data: SessionUpdate, ) -> SessionResponse:
        entry = self._get_owned_session(user_id, session_id)

        if data.partner_name is not None:
            entry.partner_name = data.partner_name
        if data.notes is not None:
            entry.notes = data.notes
        if data.is_competition_match is not None:
            entry.is_competition_match = data.is_competition_match
        if data.result is not None:
            entry.result = data.result.value
        if data.method is not None:
            entry.method = data.method.value
        if data.stage is not None:
            entry.stage = data.stage.value
        if data.submission_technique is not None:
            entry.submission_technique = data.submission_technique

        entry.updated_at = datetime.datetime.utcnow()
        entry = self.repository.update(entry)
        return session_to_response(entry)

    def delete_session(self, user_id: str, session_id: int) -> None:
        entry = self._get_owned_session(user_id, session_id)
        training_log_id = entry.training_log_id
        self.repository.delete(session_id)
        self._renumber(training_log_id)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_submission(self, user_id: str, session_id: int, event: SubmissionEvent) -> SessionResponse:
        return self._append_event(user_id, session_id, "submission_events", event)

    def remove_submission(self, user_id: str, session_id: int, index: int) -> SessionResponse:
        return self._remove_event(user_id, session_id, "submission_events", index)

    def add_sweep(self, user_id: str, session_id: int, event: SweepEvent) -> SessionResponse:
        return self._append_event(user_id, session_id, "sweep_events", event)

    def remove_sweep(self, user_id: str, session_id: int, index: int) -> SessionResponse:
        return self._remove_event(user_id, session_id, "sweep_events", index)

    def add_position(self, user_id: str, session_id: int, event: PositionScore) -> SessionResponse:
        return self._append_event(user_id, session_id, "position_scores", event)

    def remove_position(self, user_id: str, session_id: int, index: int) -> SessionResponse:
        return self._remove_event(user_id, session_id, "position_scores", index)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _append_event(self, user_id: str, session_id: int, field: str, event: BaseModel, ) -> SessionResponse:
        entry = self._get_owned_session(user_id, session_id)
        events = _NORMALIZERS[field](getattr(entry, field))
        events.append(event)
        return self._save_events(entry, field, events)

    def _remove_event(self, user_id: str, session_id: int, field: str, index: int, ) -> SessionResponse:
        entry = self._get_owned_session(user_id, session_id)
        events = _NORMALIZERS[field](getattr(entry, field))
        if not 0 <= index < len(events):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail=f"No event at index {index} (session has {len(events)})", )
        del events[index]
        return self._save_events(entry, field, events)

    def _save_events(self, entry: SparringSession, field: str, events: list) -> SessionResponse:
        # JSON columns are not mutation-tracked: always assign a new list.
        setattr(entry, field, encode_events(events))
        entry.updated_at = datetime.datetime.utcnow()
        entry = self.repository.update(entry)
        return session_to_response(entry)

    def _renumber(self, training_log_id: int) -> None:
        remaining = self.repository.get_by_training_log(training_log_id)
        changed = []
        for number, entry in enumerate(remaining, start=1):
            if entry.session_number != number:
                entry.session_number = number
                changed.append(entry)
        if changed:
            self.repository.update_many(changed)
            logger.debug("Renumbered %d session(s) of training log %d", len(changed), training_log_id)

    def _get_owned_log(self, user_id: str, training_log_id: int) -> TrainingLog:
        log = self.log_repository.get_by_id(training_log_id)
        if not log or log.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training log not found", )
        return log

    def _get_owned_session(self, user_id: str, session_id: int) -> SparringSession:
        entry = self.repository.get_by_id(session_id)
        if not entry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sparring session not found", )
        log = self.log_repository.get_by_id(entry.training_log_id)
        if not log or log.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sparring session not found", )
        return entry
