"""Pydantic schemas for request/response validation."""

from app.schemas.events import MatchScore, Outcome, PositionKind, PositionScore, Side, SubmissionEvent, SweepEvent
from app.schemas.statistics import StatisticsSummary, TimeWindow, TrainingTypeFilter

__all__ = [
    "MatchScore",
    "Outcome",
    "PositionKind",
    "PositionScore",
    "Side",
    "SubmissionEvent",
    "SweepEvent",
    "StatisticsSummary",
    "TimeWindow",
    "TrainingTypeFilter",
]
