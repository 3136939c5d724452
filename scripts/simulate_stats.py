"""Simulate the statistics screen over a hand-written training diary."""

import datetime

from app.schemas.statistics import TimeWindow, TrainingTypeFilter
from app.schemas.training_log import SessionRecord, TrainingLogRecord
from app.scoring.points import calculate_points, count_submissions
from app.scoring.statistics import compute_statistics

NOW = datetime.datetime(2026, 3, 1, 20, 0)

# ─── Raw diary: (days ago, type, minutes, [sessions]) ────────────────
# Each session: (submissions, sweeps, positions) in the stored wire format.
RAW_DATA = [
    (1, "GI", 90, [
        ([{"type": "given", "technique": "Armbar"}],
         [{"type": "my", "guard": "Closed Guard"}],
         [{"position": "MOUNT", "type": "me"}]),
        ([{"type": "received", "technique": "Triangle Choke"}],
         [],
         [{"position": "GUARD_PASS", "type": "opponent"}]),
    ]),
    (3, "NO-GI", 60, [
        ([{"type": "given", "technique": "Rear Naked Choke"},
          {"type": "given", "technique": "Heel Hook"}],
         [{"type": "opp", "guard": "Half Guard"}],
         [{"position": "BACK_CONTROL", "type": "me"},
          {"position": "TAKEDOWN", "type": "me"}]),
    ]),
    (12, "GI", 75, [
        ([{"type": "given", "technique": "Armbar"}],
         [{"type": "given", "guard": "De La Riva"}],
         [{"position": "KNEE_ON_BELLY", "type": "me"}]),
    ]),
    (40, "COMP", 120, [
        ([{"type": "given", "technique": "Kimura"}], [], []),
    ]),
    (200, "NO-GI", 60, [
        ([{"type": "received", "technique": "Heel Hook"}], [], []),
    ]),
]


def build_logs() -> list[TrainingLogRecord]:
    logs = []
    for log_id, (days_ago, training_type, minutes, sessions) in enumerate(RAW_DATA, start=1):
        records = [
            SessionRecord(session_number=number, submission_events=subs, sweep_events=sweeps,
                          position_scores=positions)
            for number, (subs, sweeps, positions) in enumerate(sessions, start=1)
        ]
        logs.append(TrainingLogRecord(id=log_id, date=NOW - datetime.timedelta(days=days_ago),
                                      duration_minutes=minutes, type=training_type, sessions=records))
    return logs


def main():
    logs = build_logs()

    # ── Per-session scores ──────────────────────────────────────────
    print()
    print("=" * 60)
    print(f"{'Log':<5} {'Session':>8} {'Given':>6} {'Recv':>6} {'Me':>5} {'Opp':>5}")
    print("=" * 60)
    for log in logs:
        for session in log.sessions:
            given, received = count_submissions(session.submission_events)
            score = calculate_points(session.sweep_events, session.position_scores)
            print(f"{log.id:<5} {session.session_number:>8} {given:>6} {received:>6} "
                  f"{score.my_points:>5} {score.opponent_points:>5}")

    # ── Summaries ───────────────────────────────────────────────────
    for window in TimeWindow:
        for type_filter in TrainingTypeFilter:
            summary = compute_statistics(logs, window, type_filter, now=NOW)
            series = " ".join(f"{b.label}:{b.value}" for b in summary.series)
            print()
            print(f"{window.value} / {type_filter.value}")
            print("-" * 60)
            print(f"  trainings={summary.total_trainings} minutes={summary.total_duration_minutes} "
                  f"sessions={summary.total_sessions}")
            print(f"  submissions {summary.submissions_given}/{summary.submissions_received} "
                  f"win rate {summary.win_rate}%")
            print(f"  sweeps {summary.sweeps_given}/{summary.sweeps_received} "
                  f"points {summary.points_scored}/{summary.points_conceded}")
            print(f"  top: {', '.join(t.technique for t in summary.top_submissions) or '-'}")
            print(f"  series: {series}")


if __name__ == "__main__":
    main()
