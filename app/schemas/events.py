"""
Sparring event schemas.

A sparring session is described by three ordered event lists:

- **Submissions**: who tapped whom and with which technique.
- **Sweeps**: guard reversals, worth a fixed 2 points to the sweeper.
- **Position scores**: IBJJF point awards (mount, back control, ...).

Insertion order is chronological order of entry.  All event models are
frozen: an event is never edited in place, only added or removed.

The persisted wire format predates these models and uses short keys
(``type``, ``technique``, ``guard``, ``position``).  Both the canonical
field names and the wire keys are accepted on validation; serialisation
by alias emits the wire keys.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ======================================================================
# Enums
# ======================================================================

class Outcome(str, Enum):
    """Whether the practitioner applied or suffered the event."""
    GIVEN = "given"
    RECEIVED = "received"


class Side(str, Enum):
    """Who scored a position."""
    SELF = "me"
    OPPONENT = "opponent"


class PositionKind(str, Enum):
    """IBJJF point-scoring positions.

    ``SWEEP`` is listed for reference only; sweeps are scored through
    :class:`SweepEvent`.
    """
    MOUNT = "MOUNT"
    BACK_CONTROL = "BACK_CONTROL"
    GUARD_PASS = "GUARD_PASS"
    KNEE_ON_BELLY = "KNEE_ON_BELLY"
    TAKEDOWN = "TAKEDOWN"
    SWEEP = "SWEEP"


# Older competition-match records stored sweeps as "my" / "opp".
_OUTCOME_ALIASES: dict[str, Outcome] = {
    "given": Outcome.GIVEN,
    "received": Outcome.RECEIVED,
    "my": Outcome.GIVEN,
    "opp": Outcome.RECEIVED,
}

_SIDE_ALIASES: dict[str, Side] = {
    "me": Side.SELF,
    "self": Side.SELF,
    "opponent": Side.OPPONENT,
    "opp": Side.OPPONENT,
}


def _coerce_outcome(value: Any) -> Any:
    if isinstance(value, str):
        return _OUTCOME_ALIASES.get(value.strip().lower(), value)
    return value


# ======================================================================
# Event models
# ======================================================================


class SubmissionEvent(BaseModel):
    """One submission within a session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    outcome: Outcome = Field(..., validation_alias=AliasChoices("outcome", "type"), serialization_alias="type", )
    technique_name: NonEmptyStr = Field(..., validation_alias=AliasChoices("technique_name", "technique"),
                                        serialization_alias="technique",
                                        description="Catalog or free-form technique label", )

    @field_validator("outcome", mode="before")
    @classmethod
    def _outcome_alias(cls, value: Any) -> Any:
        return _coerce_outcome(value)


class SweepEvent(BaseModel):
    """One sweep within a session (2 points to the sweeper)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    outcome: Outcome = Field(..., validation_alias=AliasChoices("outcome", "type"), serialization_alias="type", )
    guard_position: NonEmptyStr = Field(..., validation_alias=AliasChoices("guard_position", "guard"),
                                        serialization_alias="guard",
                                        description="Guard swept from (or position swept from, when received)", )
    timestamp: Optional[str] = Field(None, description="ISO-8601, informational only")
    notes: Optional[str] = None

    @field_validator("outcome", mode="before")
    @classmethod
    def _outcome_alias(cls, value: Any) -> Any:
        return _coerce_outcome(value)


class PositionScore(BaseModel):
    """One scored positional transition (IBJJF-style)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    position_kind: PositionKind = Field(..., validation_alias=AliasChoices("position_kind", "position"),
                                        serialization_alias="position", )
    side: Side = Field(..., validation_alias=AliasChoices("side", "type"), serialization_alias="type", )
    timestamp: Optional[str] = Field(None, description="ISO-8601, informational only")
    notes: Optional[str] = None

    @field_validator("position_kind", mode="before")
    @classmethod
    def _position_key(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper().replace(" ", "_").replace("-", "_")
        return value

    @field_validator("side", mode="before")
    @classmethod
    def _side_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SIDE_ALIASES.get(value.strip().lower(), value)
        return value


class MatchScore(BaseModel):
    """Derived point totals for one session.  Never persisted."""

    my_points: int = Field(0, ge=0)
    opponent_points: int = Field(0, ge=0)
