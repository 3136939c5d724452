"""
Sparring session database model.

Stores one sparring round or competition match.  The three event lists
are JSON columns holding lists of event dicts in the wire format
(``type`` / ``technique`` / ``guard`` / ``position``).

There are no score or submission-counter columns: both are
derived from the event lists on every read.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class SparringSession(SQLModel, table=True):
    """A sparring round belonging to a :class:`TrainingLog`.

    ``session_number`` is 1-based and contiguous within its log.
    """

    __tablename__ = "sparring_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    training_log_id: int = Field(foreign_key="training_logs.id", nullable=False, index=True)
    session_number: int = Field(default=1, nullable=False)

    partner_name: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=1000)

    # Event lists (validated and normalized at the service layer)
    submission_events: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False), )
    sweep_events: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False), )
    position_scores: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False), )

    # Competition fields
    is_competition_match: bool = Field(default=False, nullable=False)
    result: Optional[str] = Field(default=None, max_length=10)
    method: Optional[str] = Field(default=None, max_length=20)
    stage: Optional[str] = Field(default=None, max_length=20)
    submission_technique: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
