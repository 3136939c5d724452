"""Tests for the statistics aggregator.

Pure unit tests: logs are built in memory as snapshot records and every
call passes an explicit ``now`` so bucket boundaries are deterministic.
"""

import datetime

import pytest

from app.schemas.events import Outcome, PositionKind, PositionScore, Side, SubmissionEvent, SweepEvent
from app.schemas.statistics import TimeWindow, TrainingTypeFilter
from app.schemas.training_log import SessionRecord, TrainingLogRecord
from app.scoring.statistics import (
    DEFAULT_CONFIG,
    StatisticsConfig,
    bucket_series,
    competition_record,
    compute_statistics,
    count_by_technique,
    filter_logs,
    guard_breakdown,
    position_breakdown,
    rank_breakdown,
    technique_breakdown,
    win_rate,
    window_start,
)

# Wednesday
NOW = datetime.datetime(2026, 3, 4, 12, 0)


# ======================================================================
# Helpers
# ======================================================================


def _sub(technique: str, outcome: Outcome = Outcome.GIVEN) -> SubmissionEvent:
    return SubmissionEvent(outcome=outcome, technique_name=technique)


def _sweep(guard: str, outcome: Outcome = Outcome.GIVEN) -> SweepEvent:
    return SweepEvent(outcome=outcome, guard_position=guard)


def _pos(kind: PositionKind, side: Side = Side.SELF) -> PositionScore:
    return PositionScore(position_kind=kind, side=side)


def _session(subs=(), sweeps=(), positions=(), number: int = 1, **extra) -> SessionRecord:
    return SessionRecord(session_number=number, submission_events=list(subs), sweep_events=list(sweeps),
                         position_scores=list(positions), **extra)


def _log(days_ago: float = 1, type: str = "GI", sessions=(), duration: int = 60,
         now: datetime.datetime = NOW) -> TrainingLogRecord:
    return TrainingLogRecord(date=now - datetime.timedelta(days=days_ago), duration_minutes=duration, type=type,
                             sessions=list(sessions))


# ======================================================================
# Configuration
# ======================================================================


class TestStatisticsConfig:
    def test_default_values(self):
        assert DEFAULT_CONFIG.top_n == 5
        assert DEFAULT_CONFIG.expanded_top_n == 8

    def test_limits_are_injectable(self):
        logs = [_log(sessions=[_session(subs=[_sub(f"T{i}") for i in range(10)])])]
        summary = compute_statistics(logs, now=NOW, config=StatisticsConfig(top_n=2, expanded_top_n=3))
        assert len(summary.top_submissions) == 2
        assert len(summary.submissions_given_by_technique) == 3


# ======================================================================
# Filtering
# ======================================================================


class TestWindowStart:
    def test_week(self):
        assert window_start(TimeWindow.WEEK, NOW) == datetime.datetime(2026, 2, 25, 12, 0)

    def test_month_is_calendar_month(self):
        assert window_start(TimeWindow.MONTH, NOW) == datetime.datetime(2026, 2, 4, 12, 0)

    def test_month_clamps_day(self):
        now = datetime.datetime(2026, 3, 31, 9, 0)
        assert window_start(TimeWindow.MONTH, now) == datetime.datetime(2026, 2, 28, 9, 0)

    def test_year(self):
        assert window_start(TimeWindow.YEAR, NOW) == datetime.datetime(2025, 3, 4, 12, 0)


class TestFilterLogs:
    def test_window_excludes_old_logs(self):
        logs = [_log(1), _log(6.9), _log(8)]
        assert len(filter_logs(logs, TimeWindow.WEEK, TrainingTypeFilter.ALL, NOW)) == 2

    def test_window_start_is_inclusive(self):
        assert len(filter_logs([_log(7)], TimeWindow.WEEK, TrainingTypeFilter.ALL, NOW)) == 1

    @pytest.mark.parametrize("type_filter,expected", [
        (TrainingTypeFilter.ALL, 3),
        (TrainingTypeFilter.GI, 1),
        (TrainingTypeFilter.NO_GI, 1),
    ])
    def test_type_filter(self, type_filter, expected):
        logs = [_log(type="GI"), _log(type="NO-GI"), _log(type="COMP")]
        assert len(filter_logs(logs, TimeWindow.WEEK, type_filter, NOW)) == expected

    def test_sessions_of_excluded_logs_never_counted(self):
        logs = [
            _log(1, "GI", [_session(subs=[_sub("Armbar")], sweeps=[_sweep("Closed Guard")])]),
            _log(2, "NO-GI", [_session(subs=[_sub("Heel Hook"), _sub("Heel Hook", Outcome.RECEIVED)])]),
            _log(30, "GI", [_session(subs=[_sub("Kimura")])]),
        ]
        summary = compute_statistics(logs, TimeWindow.WEEK, TrainingTypeFilter.GI, now=NOW)
        assert summary.total_trainings == 1
        assert summary.total_sessions == 1
        assert summary.submissions_given == 1
        assert summary.submissions_received == 0
        assert [t.technique for t in summary.top_submissions] == ["Armbar"]
        assert summary.sweeps_given == 1


# ======================================================================
# Breakdowns
# ======================================================================


class TestBreakdowns:
    def test_same_technique_collapses(self):
        subs = [_sub("Armbar")] * 6 + [_sub("Armbar", Outcome.RECEIVED)] * 4
        rows = technique_breakdown(subs)
        assert len(rows) == 1
        assert (rows[0].technique, rows[0].given, rows[0].received, rows[0].total) == ("Armbar", 6, 4, 10)

    def test_stable_order_on_ties(self):
        subs = [_sub("A"), _sub("B"), _sub("C"), _sub("D"), _sub("D")]
        assert [r.technique for r in technique_breakdown(subs)] == ["D", "A", "B", "C"]

    def test_top_n_after_sort(self):
        subs = [_sub("A"), _sub("B"), _sub("B"), _sub("C"), _sub("C"), _sub("C")]
        assert [r.technique for r in technique_breakdown(subs, limit=2)] == ["C", "B"]

    def test_rank_breakdown_without_limit(self):
        rows = [("x", 1, 0), ("y", 0, 2), ("z", 1, 1)]
        assert rank_breakdown(rows) == [("y", 0, 2), ("z", 1, 1), ("x", 1, 0)]

    def test_guard_breakdown(self):
        sweeps = [_sweep("Half Guard"), _sweep("Mount", Outcome.RECEIVED), _sweep("Half Guard", Outcome.RECEIVED)]
        rows = guard_breakdown(sweeps)
        assert [(r.guard, r.given, r.received, r.total) for r in rows] == [
            ("Half Guard", 1, 1, 2),
            ("Mount", 0, 1, 1),
        ]

    def test_position_breakdown_uses_names(self):
        positions = [
            _pos(PositionKind.MOUNT),
            _pos(PositionKind.BACK_CONTROL, Side.OPPONENT),
            _pos(PositionKind.MOUNT, Side.OPPONENT),
            _pos(PositionKind.SWEEP),
        ]
        rows = position_breakdown(positions)
        assert [(r.position, r.me, r.opponent) for r in rows] == [
            ("Mount", 1, 1),
            ("Back Control", 0, 1),
            ("Sweep", 1, 0),
        ]

    def test_count_by_technique_single_outcome(self):
        subs = [_sub("Armbar"), _sub("Kimura"), _sub("Kimura"), _sub("Armbar", Outcome.RECEIVED)]
        given = count_by_technique(subs, Outcome.GIVEN)
        received = count_by_technique(subs, Outcome.RECEIVED)
        assert [(c.technique, c.count) for c in given] == [("Kimura", 2), ("Armbar", 1)]
        assert [(c.technique, c.count) for c in received] == [("Armbar", 1)]


# ======================================================================
# Metrics
# ======================================================================


class TestWinRate:
    @pytest.mark.parametrize("given,received,expected", [
        (0, 0, 0),
        (3, 0, 100),
        (0, 3, 0),
        (6, 4, 60),
        (1, 2, 33),
        (2, 1, 67),
        (1, 7, 13),
        (1, 1, 50),
    ])
    def test_values(self, given, received, expected):
        assert win_rate(given, received) == expected


class TestCompetitionRecord:
    def test_counts_competition_matches_only(self):
        sessions = [
            _session(is_competition_match=True, result="win", method="submission"),
            _session(is_competition_match=True, result="loss", method="points"),
            _session(is_competition_match=True, result="win", method="submission"),
            _session(is_competition_match=False, result="win"),
        ]
        record = competition_record(sessions)
        assert (record.matches, record.wins, record.losses, record.draws) == (3, 2, 1, 0)
        assert record.by_method == {"submission": 2, "points": 1}

    def test_unknown_result_label_ignored(self):
        record = competition_record([_session(is_competition_match=True, result="forfeit")])
        assert record.matches == 1
        assert record.wins == record.losses == record.draws == 0


# ======================================================================
# Chart series
# ======================================================================


class TestBucketSeries:
    def test_week_labels_oldest_first(self):
        series = bucket_series([], TimeWindow.WEEK, NOW)
        assert [b.label for b in series] == ["T", "F", "S", "S", "M", "T", "W"]
        assert all(b.value == 0 for b in series)

    def test_week_counts_by_calendar_day(self):
        logs = [_log(0), _log(0.2), _log(2)]
        series = bucket_series(logs, TimeWindow.WEEK, NOW)
        assert [b.value for b in series] == [0, 0, 0, 0, 1, 0, 2]

    def test_month_weekly_buckets(self):
        logs = [_log(3), _log(10), _log(10.5), _log(27)]
        series = bucket_series(logs, TimeWindow.MONTH, NOW)
        assert [b.label for b in series] == ["W1", "W2", "W3", "W4"]
        assert [b.value for b in series] == [1, 0, 2, 1]

    def test_month_bucket_upper_bound_inclusive(self):
        series = bucket_series([_log(7)], TimeWindow.MONTH, NOW)
        assert [b.value for b in series] == [0, 0, 1, 0]

    def test_year_labels(self):
        series = bucket_series([], TimeWindow.YEAR, NOW)
        assert "".join(b.label for b in series) == "AMJJASONDJFM"

    def test_year_separates_december_of_consecutive_years(self):
        now = datetime.datetime(2026, 12, 15, 12, 0)
        logs = [
            TrainingLogRecord(date=datetime.datetime(2025, 12, 20), type="GI"),
            TrainingLogRecord(date=datetime.datetime(2026, 12, 10), type="GI"),
        ]
        summary = compute_statistics(logs, TimeWindow.YEAR, now=now)
        assert summary.total_trainings == 2
        assert summary.series[-1].label == "D"
        assert summary.series[-1].value == 1
        assert sum(b.value for b in summary.series) == 1


# ======================================================================
# compute_statistics
# ======================================================================


class TestComputeStatistics:
    def test_empty_week(self):
        summary = compute_statistics([], TimeWindow.WEEK, now=NOW)
        assert summary.total_trainings == 0
        assert summary.win_rate == 0
        assert summary.top_submissions == []
        assert len(summary.series) == 7
        assert all(b.value == 0 for b in summary.series)

    @pytest.mark.parametrize("window,buckets", [
        (TimeWindow.WEEK, 7),
        (TimeWindow.MONTH, 4),
        (TimeWindow.YEAR, 12),
    ])
    def test_series_length(self, window, buckets):
        assert len(compute_statistics([], window, now=NOW).series) == buckets

    def test_full_summary(self):
        logs = [
            _log(1, "GI", duration=90, sessions=[
                _session(subs=[_sub("Armbar"), _sub("Triangle Choke", Outcome.RECEIVED)],
                         sweeps=[_sweep("Closed Guard"), _sweep("Mount", Outcome.RECEIVED)],
                         positions=[_pos(PositionKind.MOUNT)], ),
                _session(number=2, subs=[_sub("Armbar")], positions=[_pos(PositionKind.GUARD_PASS, Side.OPPONENT)]),
            ]),
            _log(2, "NO-GI", duration=60, sessions=[_session(subs=[_sub("Heel Hook")])]),
            _log(3, "COMP", duration=30),
        ]
        summary = compute_statistics(logs, TimeWindow.WEEK, now=NOW)

        assert summary.total_trainings == 3
        assert summary.total_duration_minutes == 180
        assert (summary.gi_count, summary.no_gi_count, summary.competition_count) == (1, 1, 1)
        assert summary.total_sessions == 3
        assert (summary.submissions_given, summary.submissions_received) == (3, 1)
        assert summary.win_rate == 75
        assert summary.top_submissions[0].technique == "Armbar"
        assert (summary.sweeps_given, summary.sweeps_received) == (1, 1)
        assert (summary.points_scored, summary.points_conceded) == (6, 5)
        assert [p.position for p in summary.positions] == ["Mount", "Guard Pass"]

    def test_accepts_dicts_and_skips_malformed_logs(self):
        logs = [
            {"date": NOW - datetime.timedelta(days=1), "type": "GI", "duration_minutes": 45,
             "sessions": [{"submission_events": "[{\"type\": \"given\", \"technique\": \"Kimura\"}]",
                           "sweep_events": "garbage", "position_scores": None}]},
            {"type": "GI"},
            {"date": NOW - datetime.timedelta(days=1), "type": "YOGA"},
        ]
        summary = compute_statistics(logs, TimeWindow.WEEK, now=NOW)
        assert summary.total_trainings == 1
        assert summary.submissions_given == 1
        assert summary.sweeps_given == 0

    def test_malformed_session_skips_only_that_session(self):
        logs = [{
            "date": NOW - datetime.timedelta(days=1),
            "type": "GI",
            "sessions": [
                {"submission_events": [{"type": "given", "technique": "Armbar"}]},
                {"session_number": 0, "submission_events": [{"type": "given", "technique": "Kimura"}]},
                "not a session",
            ],
        }]
        summary = compute_statistics(logs, TimeWindow.WEEK, now=NOW)
        assert summary.total_trainings == 1
        assert summary.total_sessions == 1
        assert [t.technique for t in summary.top_submissions] == ["Armbar"]

    def test_non_list_sessions_read_as_empty(self):
        record = TrainingLogRecord(date=NOW, type="GI", sessions="garbage")
        assert record.sessions == []

    def test_echoes_selection(self):
        summary = compute_statistics([], TimeWindow.MONTH, TrainingTypeFilter.NO_GI, now=NOW)
        assert summary.time_window is TimeWindow.MONTH
        assert summary.training_type is TrainingTypeFilter.NO_GI
