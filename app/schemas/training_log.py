"""
Training log and sparring session schemas.

Two families live here:

- **Records** (:class:`SessionRecord`, :class:`TrainingLogRecord`): the
  immutable snapshot handed to the statistics aggregator.  Event lists
  are decoded at this boundary; a malformed list becomes ``[]`` rather
  than a validation error.
- **API schemas**: create / update / response bodies.

Scores (``my_points``, ``opponent_points``) and submission counters only
appear on responses and are always derived from the event lists.
"""

import datetime
import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from app.schemas.events import PositionScore, SubmissionEvent, SweepEvent
from app.scoring.normalization import normalize_positions, normalize_submissions, normalize_sweeps

logger = logging.getLogger(__name__)


# ======================================================================
# Enums
# ======================================================================

class TrainingType(str, Enum):
    GI = "GI"
    NO_GI = "NO-GI"
    COMPETITION = "COMP"


class CompetitionStyle(str, Enum):
    GI = "GI"
    NO_GI = "NO-GI"


class MatchResult(str, Enum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class FinishMethod(str, Enum):
    SUBMISSION = "submission"
    POINTS = "points"
    DECISION = "decision"
    DISQUALIFICATION = "dq"


class BracketStage(str, Enum):
    FINAL = "final"
    SEMI_FINAL = "semi_final"
    QUARTER_FINAL = "quarter_final"
    ELIMINATION = "elimination"
    ROUND_ROBIN = "round_robin"
    BRONZE_MATCH = "bronze_match"


# ======================================================================
# Snapshot records (aggregator input)
# ======================================================================


class SessionRecord(BaseModel):
    """One sparring round or competition match, as seen by the aggregator."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    session_number: int = Field(1, ge=1)
    submission_events: list[SubmissionEvent] = Field(default_factory=list)
    sweep_events: list[SweepEvent] = Field(default_factory=list)
    position_scores: list[PositionScore] = Field(default_factory=list)

    is_competition_match: bool = False
    result: Optional[MatchResult] = None
    method: Optional[FinishMethod] = None
    stage: Optional[BracketStage] = None

    @field_validator("submission_events", mode="before")
    @classmethod
    def _decode_submissions(cls, value: Any) -> list[SubmissionEvent]:
        return normalize_submissions(value)

    @field_validator("sweep_events", mode="before")
    @classmethod
    def _decode_sweeps(cls, value: Any) -> list[SweepEvent]:
        return normalize_sweeps(value)

    @field_validator("position_scores", mode="before")
    @classmethod
    def _decode_positions(cls, value: Any) -> list[PositionScore]:
        return normalize_positions(value)

    @field_validator("result", "method", "stage", mode="before")
    @classmethod
    def _drop_unknown_labels(cls, value: Any, info: ValidationInfo) -> Any:
        enum_type = {"result": MatchResult, "method": FinishMethod, "stage": BracketStage}[info.field_name]
        try:
            return enum_type(value) if value is not None else None
        except ValueError:
            return None


class TrainingLogRecord(BaseModel):
    """One calendar training entry with the sessions it owns."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    date: datetime.datetime
    duration_minutes: int = Field(0, ge=0)
    type: TrainingType
    sessions: list[SessionRecord] = Field(default_factory=list)

    @field_validator("sessions", mode="before")
    @classmethod
    def _drop_malformed_sessions(cls, value: Any) -> list[SessionRecord]:
        """Validate sessions one by one; a bad session never drops its log."""
        if not isinstance(value, (list, tuple)):
            return []
        sessions: list[SessionRecord] = []
        for item in value:
            if isinstance(item, SessionRecord):
                sessions.append(item)
                continue
            try:
                sessions.append(SessionRecord.model_validate(item))
            except ValidationError:
                logger.warning("Skipping malformed sparring session %s", getattr(item, "id", None))
        return sessions


# ======================================================================
# Sparring session API schemas
# ======================================================================


class SessionCreate(BaseModel):
    """Schema for adding a sparring session to a training log."""

    partner_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)
    submission_events: list[SubmissionEvent] = Field(default_factory=list)
    sweep_events: list[SweepEvent] = Field(default_factory=list)
    position_scores: list[PositionScore] = Field(default_factory=list)

    # Competition fields
    is_competition_match: bool = False
    result: Optional[MatchResult] = None
    method: Optional[FinishMethod] = None
    stage: Optional[BracketStage] = None
    submission_technique: Optional[str] = Field(None, max_length=100)


class SessionUpdate(BaseModel):
    """Schema for updating session metadata.  Events have their own endpoints."""

    partner_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)
    is_competition_match: Optional[bool] = None
    result: Optional[MatchResult] = None
    method: Optional[FinishMethod] = None
    stage: Optional[BracketStage] = None
    submission_technique: Optional[str] = Field(None, max_length=100)


class SessionResponse(BaseModel):
    """Sparring session in API responses, with derived score."""

    id: int
    training_log_id: int
    session_number: int
    partner_name: Optional[str]
    notes: Optional[str]
    submission_events: list[SubmissionEvent]
    sweep_events: list[SweepEvent]
    position_scores: list[PositionScore]
    submissions_given: int
    submissions_received: int
    my_points: int
    opponent_points: int
    is_competition_match: bool
    result: Optional[MatchResult]
    method: Optional[FinishMethod]
    stage: Optional[BracketStage]
    submission_technique: Optional[str]


# ======================================================================
# Training log API schemas
# ======================================================================


class TrainingLogCreate(BaseModel):
    """Schema for creating a training log, optionally with its sessions."""

    date: datetime.datetime
    duration_minutes: int = Field(..., ge=0, le=1440)
    type: TrainingType
    notes: Optional[str] = Field(None, max_length=2000)
    reflection: Optional[str] = Field(None, max_length=2000)

    # Competition metadata
    tournament_name: Optional[str] = Field(None, max_length=100)
    weight_class: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=100)
    competition_style: Optional[CompetitionStyle] = None

    sessions: list[SessionCreate] = Field(default_factory=list)


class TrainingLogUpdate(BaseModel):
    """Schema for updating a training log.

    When ``sessions`` is given, the log's sessions are replaced as a whole
    and renumbered ``1..n``.
    """

    date: Optional[datetime.datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=0, le=1440)
    type: Optional[TrainingType] = None
    notes: Optional[str] = Field(None, max_length=2000)
    reflection: Optional[str] = Field(None, max_length=2000)
    tournament_name: Optional[str] = Field(None, max_length=100)
    weight_class: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=100)
    competition_style: Optional[CompetitionStyle] = None
    sessions: Optional[list[SessionCreate]] = None


class TrainingLogResponse(BaseModel):
    """Training log in API responses."""

    id: int
    user_id: str
    date: datetime.datetime
    duration_minutes: int
    type: TrainingType
    notes: Optional[str]
    reflection: Optional[str]
    tournament_name: Optional[str]
    weight_class: Optional[str]
    location: Optional[str]
    competition_style: Optional[CompetitionStyle]
    sparring_rounds: int
    sessions: list[SessionResponse]
    created_at: datetime.datetime
    updated_at: datetime.datetime
