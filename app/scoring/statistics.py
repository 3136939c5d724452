"""
Statistics aggregator: training logs to a display-ready summary.

Pipeline
--------
1. **Narrow once.**  :func:`filter_logs` selects the logs visible under
   the active ``(time_window, training_type)`` pair.  Every later stage
   reads only this working set, so sessions belonging to excluded logs
   can never leak into a count.
2. **Flatten.**  Sessions, then their (already normalized) events.
3. **Fold.**  Counters, grouped breakdowns, win rate, points, chart
   series.

Grouping rules
--------------
Breakdowns group by label in first-encountered order, then sort by total
descending with a *stable* sort, so equal totals keep their input order.
Top-N is applied after sorting (5 for the primary chart, 8 for the
expanded charts; see :class:`StatisticsConfig`).

Time buckets
------------
- ``WEEK``: 7 daily buckets, oldest to newest, local calendar days.
- ``MONTH``: 4 weekly buckets; bucket *i* covers
  ``(now - 7(i+1) days, now - 7i days]``.
- ``YEAR``: 12 monthly buckets keyed by ``(year, month)``.  Keying on
  the month alone would merge December of two consecutive years.

Nothing here raises on bad data.  Malformed event lists are emptied at
the record boundary; log entries that fail validation are skipped.
"""

from __future__ import annotations

import calendar
import datetime
import logging
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field, ValidationError

from app.schemas.events import Outcome, PositionScore, Side, SubmissionEvent, SweepEvent
from app.schemas.statistics import (ChartBucket, CompetitionRecord, GuardBreakdown, PositionBreakdown,
                                    StatisticsSummary, TechniqueBreakdown, TechniqueCount, TimeWindow,
                                    TrainingTypeFilter, )
from app.schemas.training_log import MatchResult, SessionRecord, TrainingLogRecord, TrainingType
from app.scoring.catalog import get_position
from app.scoring.points import calculate_points, count_submissions

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ======================================================================
# Configuration
# ======================================================================


class StatisticsConfig(BaseModel):
    """Tunables for the aggregator.  Inject a custom instance in tests."""

    top_n: int = Field(5, ge=1, description="Entries in the primary submissions chart")
    expanded_top_n: int = Field(8, ge=1, description="Entries in the expanded breakdown charts")


DEFAULT_CONFIG = StatisticsConfig()

_WEEKDAY_LABELS = ("M", "T", "W", "T", "F", "S", "S")
_MONTH_LABELS = ("J", "F", "M", "A", "M", "J", "J", "A", "S", "O", "N", "D")

# ======================================================================
# Time helpers
# ======================================================================


def _local(dt: datetime.datetime) -> datetime.datetime:
    """Naive local time.  Aware datetimes are converted, naive ones kept."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def _shift_months(dt: datetime.datetime, months: int) -> datetime.datetime:
    """Move *dt* by whole calendar months, clamping the day to the target month."""
    index = dt.month - 1 + months
    year = dt.year + index // 12
    month = index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def window_start(window: TimeWindow, now: datetime.datetime) -> datetime.datetime:
    """Earliest log datetime included in *window*."""
    now = _local(now)
    if window is TimeWindow.WEEK:
        return now - datetime.timedelta(days=7)
    if window is TimeWindow.MONTH:
        return _shift_months(now, -1)
    return _shift_months(now, -12)


# ======================================================================
# Stage 1: filter
# ======================================================================


def _matches_type(log: TrainingLogRecord, type_filter: TrainingTypeFilter) -> bool:
    if type_filter is TrainingTypeFilter.ALL:
        return True
    return log.type.value == type_filter.value


def filter_logs(logs: Iterable[TrainingLogRecord], window: TimeWindow, type_filter: TrainingTypeFilter,
                now: datetime.datetime, ) -> list[TrainingLogRecord]:
    """Logs dated on or after the window start and of the selected type."""
    start = window_start(window, now)
    return [log for log in logs if _local(log.date) >= start and _matches_type(log, type_filter)]


# ======================================================================
# Grouping
# ======================================================================


def group_by_outcome(items: Iterable[T], key: Callable[[T], str], is_first: Callable[[T], bool], ) -> list[
    tuple[str, int, int]]:
    """Group *items* by label into ``(label, first_count, second_count)``.

    Groups keep first-encountered order.
    """
    counts: dict[str, list[int]] = {}
    for item in items:
        bucket = counts.setdefault(key(item), [0, 0])
        bucket[0 if is_first(item) else 1] += 1
    return [(label, a, b) for label, (a, b) in counts.items()]


def rank_breakdown(rows: Sequence[tuple[str, int, int]], limit: Optional[int] = None, ) -> list[
    tuple[str, int, int]]:
    """Stable sort by total descending, then keep the first *limit* rows."""
    ranked = sorted(rows, key=lambda row: -(row[1] + row[2]))
    return ranked if limit is None else ranked[:limit]


def technique_breakdown(submissions: Iterable[SubmissionEvent], limit: Optional[int] = None, ) -> list[
    TechniqueBreakdown]:
    rows = group_by_outcome(submissions, key=lambda e: e.technique_name, is_first=lambda e: e.outcome is Outcome.GIVEN)
    return [TechniqueBreakdown(technique=name, given=g, received=r, total=g + r) for name, g, r in
            rank_breakdown(rows, limit)]


def guard_breakdown(sweeps: Iterable[SweepEvent], limit: Optional[int] = None, ) -> list[GuardBreakdown]:
    rows = group_by_outcome(sweeps, key=lambda e: e.guard_position, is_first=lambda e: e.outcome is Outcome.GIVEN)
    return [GuardBreakdown(guard=name, given=g, received=r, total=g + r) for name, g, r in rank_breakdown(rows, limit)]


def position_breakdown(positions: Iterable[PositionScore], limit: Optional[int] = None, ) -> list[PositionBreakdown]:
    """Group position scores by their human-readable name."""
    rows = group_by_outcome(positions, key=lambda p: get_position(p.position_kind).name,
                            is_first=lambda p: p.side is Side.SELF)
    return [PositionBreakdown(position=name, me=m, opponent=o, total=m + o) for name, m, o in
            rank_breakdown(rows, limit)]


def count_by_technique(submissions: Iterable[SubmissionEvent], outcome: Outcome, limit: Optional[int] = None, ) -> \
        list[TechniqueCount]:
    """Per-technique counts for a single outcome, most frequent first."""
    counts: dict[str, int] = {}
    for event in submissions:
        if event.outcome is outcome:
            counts[event.technique_name] = counts.get(event.technique_name, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    if limit is not None:
        ranked = ranked[:limit]
    return [TechniqueCount(technique=name, count=n) for name, n in ranked]


# ======================================================================
# Metrics
# ======================================================================


def win_rate(given: int, received: int) -> int:
    """Percentage of submissions given, rounded half up.  ``0`` with no data."""
    total = given + received
    if total <= 0:
        return 0
    return (200 * given + total) // (2 * total)


def competition_record(sessions: Iterable[SessionRecord]) -> CompetitionRecord:
    record = CompetitionRecord()
    for session in sessions:
        if not session.is_competition_match:
            continue
        record.matches += 1
        if session.result is MatchResult.WIN:
            record.wins += 1
        elif session.result is MatchResult.LOSS:
            record.losses += 1
        elif session.result is MatchResult.DRAW:
            record.draws += 1
        if session.method is not None:
            record.by_method[session.method.value] = record.by_method.get(session.method.value, 0) + 1
    return record


# ======================================================================
# Chart series
# ======================================================================


def bucket_series(logs: Sequence[TrainingLogRecord], window: TimeWindow, now: datetime.datetime, ) -> list[
    ChartBucket]:
    """Count logs per time bucket, oldest bucket first."""
    now = _local(now)
    dates = [_local(log.date) for log in logs]
    buckets: list[ChartBucket] = []

    if window is TimeWindow.WEEK:
        for offset in range(6, -1, -1):
            day = (now - datetime.timedelta(days=offset)).date()
            count = sum(1 for d in dates if d.date() == day)
            buckets.append(ChartBucket(label=_WEEKDAY_LABELS[day.weekday()], value=count))

    elif window is TimeWindow.MONTH:
        for offset in range(3, -1, -1):
            end = now - datetime.timedelta(days=7 * offset)
            start = end - datetime.timedelta(days=7)
            count = sum(1 for d in dates if start < d <= end)
            buckets.append(ChartBucket(label=f"W{4 - offset}", value=count))

    else:
        first_of_month = now.replace(day=1)
        for offset in range(11, -1, -1):
            month_start = _shift_months(first_of_month, -offset)
            key = (month_start.year, month_start.month)
            count = sum(1 for d in dates if (d.year, d.month) == key)
            buckets.append(ChartBucket(label=_MONTH_LABELS[month_start.month - 1], value=count))

    return buckets


# ======================================================================
# Main entry point
# ======================================================================


def _as_records(logs: Iterable[Any]) -> list[TrainingLogRecord]:
    records: list[TrainingLogRecord] = []
    for log in logs:
        if isinstance(log, TrainingLogRecord):
            records.append(log)
            continue
        try:
            records.append(TrainingLogRecord.model_validate(log))
        except ValidationError as e:
            logger.warning("Skipping malformed training log: %s", e.errors(include_url=False)[:1])
    return records


def compute_statistics(logs: Iterable[Any], window: TimeWindow = TimeWindow.WEEK,
                       type_filter: TrainingTypeFilter = TrainingTypeFilter.ALL,
                       now: Optional[datetime.datetime] = None,
                       config: Optional[StatisticsConfig] = None, ) -> StatisticsSummary:
    """Aggregate training logs into a :class:`StatisticsSummary`.

    Args:
        logs: :class:`TrainingLogRecord` instances, or anything that
            validates into one (dicts, attribute objects).  Entries that
            fail validation are skipped.
        window: Time window to include.
        type_filter: Restrict by training type unless ``ALL``.
        now: Reference datetime (defaults to local now).
        config: Optional :class:`StatisticsConfig` override.

    Returns:
        :class:`StatisticsSummary` computed over the visible logs only.
    """
    cfg = config or DEFAULT_CONFIG
    ref = _local(now) if now is not None else datetime.datetime.now()

    # --- Stage 1: the only narrowing step ---
    visible = filter_logs(_as_records(logs), window, type_filter, ref)

    # --- Stage 2: flatten ---
    sessions = [s for log in visible for s in log.sessions]
    submissions = [e for s in sessions for e in s.submission_events]
    sweeps = [e for s in sessions for e in s.sweep_events]
    positions = [p for s in sessions for p in s.position_scores]

    # --- Stage 3: fold ---
    subs_given, subs_received = count_submissions(submissions)
    sweeps_given = sum(1 for e in sweeps if e.outcome is Outcome.GIVEN)

    points_scored = points_conceded = 0
    for session in sessions:
        score = calculate_points(session.sweep_events, session.position_scores)
        points_scored += score.my_points
        points_conceded += score.opponent_points

    summary = StatisticsSummary(time_window=window, training_type=type_filter, total_trainings=len(visible),
                                total_duration_minutes=sum(log.duration_minutes for log in visible),
                                gi_count=sum(1 for log in visible if log.type is TrainingType.GI),
                                no_gi_count=sum(1 for log in visible if log.type is TrainingType.NO_GI),
                                competition_count=sum(1 for log in visible if log.type is TrainingType.COMPETITION),
                                total_sessions=len(sessions), submissions_given=subs_given,
                                submissions_received=subs_received, win_rate=win_rate(subs_given, subs_received),
                                top_submissions=technique_breakdown(submissions, cfg.top_n),
                                submissions_given_by_technique=count_by_technique(submissions, Outcome.GIVEN,
                                                                                  cfg.expanded_top_n),
                                submissions_received_by_technique=count_by_technique(submissions, Outcome.RECEIVED,
                                                                                     cfg.expanded_top_n),
                                sweeps_given=sweeps_given, sweeps_received=len(sweeps) - sweeps_given,
                                sweeps_by_guard=guard_breakdown(sweeps, cfg.expanded_top_n),
                                positions=position_breakdown(positions, cfg.expanded_top_n),
                                points_scored=points_scored, points_conceded=points_conceded,
                                competition=competition_record(sessions), series=bucket_series(visible, window, ref), )

    logger.debug("Statistics for %s/%s: %d logs, %d sessions", window.value, type_filter.value, len(visible),
                 len(sessions))
    return summary
