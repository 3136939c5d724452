"""
Statistics summary schemas.

The summary is display-only: every counter is derived from the training
logs visible under the active ``(time_window, training_type)`` filter.
An empty window produces zero counters, empty breakdowns and a
zero-valued series of the window's bucket count, never an error.
"""

from enum import Enum

from pydantic import BaseModel, Field


class TimeWindow(str, Enum):
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class TrainingTypeFilter(str, Enum):
    ALL = "ALL"
    GI = "GI"
    NO_GI = "NO-GI"


class TechniqueBreakdown(BaseModel):
    """Submission counts for one technique, split by outcome."""

    technique: str
    given: int = 0
    received: int = 0
    total: int = 0


class GuardBreakdown(BaseModel):
    """Sweep counts for one guard / position label, split by outcome."""

    guard: str
    given: int = 0
    received: int = 0
    total: int = 0


class PositionBreakdown(BaseModel):
    """Position-score counts for one position name, split by side."""

    position: str
    me: int = 0
    opponent: int = 0
    total: int = 0


class TechniqueCount(BaseModel):
    technique: str
    count: int


class ChartBucket(BaseModel):
    """One bar in the training-frequency chart."""

    label: str
    value: int = Field(0, ge=0)


class CompetitionRecord(BaseModel):
    """Win / loss / draw tally over competition matches."""

    matches: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    by_method: dict[str, int] = Field(default_factory=dict)


class StatisticsSummary(BaseModel):
    """Statistics for one ``(time_window, training_type)`` selection."""

    time_window: TimeWindow
    training_type: TrainingTypeFilter

    # Training logs
    total_trainings: int = 0
    total_duration_minutes: int = 0
    gi_count: int = 0
    no_gi_count: int = 0
    competition_count: int = 0
    total_sessions: int = 0

    # Submissions
    submissions_given: int = 0
    submissions_received: int = 0
    win_rate: int = Field(0, ge=0, le=100, description="Given / (given + received) in percent")
    top_submissions: list[TechniqueBreakdown] = Field(default_factory=list)
    submissions_given_by_technique: list[TechniqueCount] = Field(default_factory=list)
    submissions_received_by_technique: list[TechniqueCount] = Field(default_factory=list)

    # Sweeps and positions
    sweeps_given: int = 0
    sweeps_received: int = 0
    sweeps_by_guard: list[GuardBreakdown] = Field(default_factory=list)
    positions: list[PositionBreakdown] = Field(default_factory=list)
    points_scored: int = 0
    points_conceded: int = 0

    competition: CompetitionRecord = Field(default_factory=CompetitionRecord)

    series: list[ChartBucket] = Field(default_factory=list)
