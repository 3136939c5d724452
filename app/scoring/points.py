"""
Point calculator: session score from sweep and position events.

    my_points       = 2 × sweeps(GIVEN)    + Σ points(position) for SELF positions
    opponent_points = 2 × sweeps(RECEIVED) + Σ points(position) for OPPONENT positions

The score is a pure function of the event lists.  It is recomputed on
every read and after every mutation and is never stored.

``PositionKind.SWEEP`` entries carry 0 points here.  Sweeps are scored
only through :class:`~app.schemas.events.SweepEvent`.
"""

from __future__ import annotations

from typing import Any, Iterable

from app.schemas.events import MatchScore, Outcome, PositionKind, PositionScore, Side, SubmissionEvent, SweepEvent
from app.scoring.catalog import get_position
from app.scoring.normalization import normalize_positions, normalize_sweeps

SWEEP_POINTS = 2


def position_points(kind: PositionKind) -> int:
    """Points awarded by the calculator for one position of *kind*."""
    if kind is PositionKind.SWEEP:
        return 0
    return get_position(kind).points


def calculate_sweep_points(sweeps: Iterable[SweepEvent]) -> tuple[int, int]:
    """Return ``(my_points, opponent_points)`` from sweeps alone."""
    given = received = 0
    for sweep in sweeps:
        if sweep.outcome is Outcome.GIVEN:
            given += 1
        else:
            received += 1
    return given * SWEEP_POINTS, received * SWEEP_POINTS


def calculate_position_points(positions: Iterable[PositionScore]) -> tuple[int, int]:
    """Return ``(my_points, opponent_points)`` from position scores alone."""
    mine = theirs = 0
    for pos in positions:
        if pos.side is Side.SELF:
            mine += position_points(pos.position_kind)
        else:
            theirs += position_points(pos.position_kind)
    return mine, theirs


def calculate_points(sweeps: Iterable[SweepEvent], positions: Iterable[PositionScore], ) -> MatchScore:
    """Compute the session score.  Zero for empty inputs."""
    sweep_my, sweep_opp = calculate_sweep_points(sweeps)
    pos_my, pos_opp = calculate_position_points(positions)
    return MatchScore(my_points=sweep_my + pos_my, opponent_points=sweep_opp + pos_opp)


def count_submissions(submissions: Iterable[SubmissionEvent]) -> tuple[int, int]:
    """Return ``(given, received)`` submission counts."""
    given = received = 0
    for sub in submissions:
        if sub.outcome is Outcome.GIVEN:
            given += 1
        else:
            received += 1
    return given, received


def score_session(session: Any) -> MatchScore:
    """Score any object exposing ``sweep_events`` and ``position_scores``.

    Accepts ORM rows (raw JSON lists) as well as snapshot records (typed
    lists); both pass through normalization.
    """
    return calculate_points(normalize_sweeps(getattr(session, "sweep_events", None)),
                            normalize_positions(getattr(session, "position_scores", None)), )
