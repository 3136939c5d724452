"""
Training log database model.

One row per calendar training entry (class, open mat, or competition).
A log owns its sparring sessions; the service deletes them before the
log itself so no session is ever left orphaned.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class TrainingLog(SQLModel, table=True):
    """A single training entry.

    ``user_id`` is the identity issued by the authentication provider,
    stored as an opaque string.
    """

    __tablename__ = "training_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, max_length=64, index=True)
    date: datetime.datetime = Field(nullable=False, index=True)
    duration_minutes: int = Field(default=0, nullable=False)

    # "GI", "NO-GI" or "COMP"
    type: str = Field(nullable=False, max_length=10)

    notes: Optional[str] = Field(default=None, max_length=2000)
    reflection: Optional[str] = Field(default=None, max_length=2000)

    # Competition metadata
    tournament_name: Optional[str] = Field(default=None, max_length=100)
    weight_class: Optional[str] = Field(default=None, max_length=50)
    location: Optional[str] = Field(default=None, max_length=100)
    competition_style: Optional[str] = Field(default=None, max_length=10)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
