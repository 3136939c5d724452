"""Tests for event normalization.

Normalization must accept every stored shape of an event list and never
raise: malformed text yields ``[]``, malformed items are dropped.
"""

import json

import pytest

from app.schemas.events import Outcome, PositionKind, PositionScore, Side, SubmissionEvent, SweepEvent
from app.scoring.normalization import (
    encode_events,
    encode_events_json,
    normalize_positions,
    normalize_submissions,
    normalize_sweeps,
)


# ======================================================================
# Helpers
# ======================================================================


def _sub(outcome: str = "given", technique: str = "Armbar") -> dict:
    return {"type": outcome, "technique": technique}


def _sweep(outcome: str = "given", guard: str = "Closed Guard") -> dict:
    return {"type": outcome, "guard": guard}


def _pos(position: str = "MOUNT", side: str = "me") -> dict:
    return {"position": position, "type": side}


# ======================================================================
# Input shapes
# ======================================================================


class TestInputShapes:
    def test_none_is_empty(self):
        assert normalize_submissions(None) == []
        assert normalize_sweeps(None) == []
        assert normalize_positions(None) == []

    def test_list_of_dicts(self):
        events = normalize_submissions([_sub(), _sub("received", "Kimura")])
        assert events == [
            SubmissionEvent(outcome=Outcome.GIVEN, technique_name="Armbar"),
            SubmissionEvent(outcome=Outcome.RECEIVED, technique_name="Kimura"),
        ]

    def test_json_text(self):
        raw = json.dumps([_sweep(), _sweep("received", "Mount")])
        events = normalize_sweeps(raw)
        assert [e.outcome for e in events] == [Outcome.GIVEN, Outcome.RECEIVED]
        assert [e.guard_position for e in events] == ["Closed Guard", "Mount"]

    def test_bytes(self):
        raw = json.dumps([_pos()]).encode()
        assert normalize_positions(raw) == [PositionScore(position_kind=PositionKind.MOUNT, side=Side.SELF)]

    def test_items_encoded_as_json_strings(self):
        raw = [json.dumps(_sub()), json.dumps(_sub("received", "Heel Hook"))]
        events = normalize_submissions(raw)
        assert [e.technique_name for e in events] == ["Armbar", "Heel Hook"]

    def test_typed_events_pass_through(self):
        event = SweepEvent(outcome=Outcome.GIVEN, guard_position="X Guard")
        assert normalize_sweeps([event]) == [event]

    def test_canonical_field_names_accepted(self):
        events = normalize_submissions([{"outcome": "given", "technique_name": "Omoplata"}])
        assert events[0].technique_name == "Omoplata"

    def test_order_preserved(self):
        names = ["Armbar", "Kimura", "Triangle Choke", "Armbar"]
        events = normalize_submissions([_sub(technique=n) for n in names])
        assert [e.technique_name for e in events] == names


# ======================================================================
# Fail-open behaviour
# ======================================================================


class TestMalformedInput:
    @pytest.mark.parametrize("raw", [
        "not json",
        "{\"type\": \"given\"}",
        "42",
        "",
        b"\xff\xfe",
        42,
        {"type": "given", "technique": "Armbar"},
    ])
    def test_undecodable_or_non_list_is_empty(self, raw):
        assert normalize_submissions(raw) == []

    def test_missing_technique_dropped(self):
        events = normalize_submissions([_sub(), {"type": "given"}, _sub("received", "Kimura")])
        assert [e.technique_name for e in events] == ["Armbar", "Kimura"]

    def test_blank_technique_dropped(self):
        assert normalize_submissions([_sub(technique="   ")]) == []

    def test_unknown_outcome_dropped(self):
        assert normalize_submissions([_sub(outcome="draw")]) == []

    def test_unknown_position_dropped(self):
        events = normalize_positions([_pos("RUBBER_GUARD"), _pos("BACK_CONTROL")])
        assert [e.position_kind for e in events] == [PositionKind.BACK_CONTROL]

    def test_non_mapping_items_dropped(self):
        assert normalize_sweeps([1, None, ["given"], "nope", _sweep()]) == [
            SweepEvent(outcome=Outcome.GIVEN, guard_position="Closed Guard")]

    def test_missing_guard_dropped(self):
        assert normalize_sweeps([{"type": "given"}]) == []


# ======================================================================
# Legacy labels
# ======================================================================


class TestLegacyLabels:
    def test_my_opp_sweeps(self):
        events = normalize_sweeps([_sweep("my"), _sweep("opp", "Side Control")])
        assert [e.outcome for e in events] == [Outcome.GIVEN, Outcome.RECEIVED]

    @pytest.mark.parametrize("raw,expected", [
        ("mount", PositionKind.MOUNT),
        ("Back Control", PositionKind.BACK_CONTROL),
        ("knee-on-belly", PositionKind.KNEE_ON_BELLY),
        ("SWEEP", PositionKind.SWEEP),
    ])
    def test_position_key_variants(self, raw, expected):
        assert normalize_positions([_pos(raw)])[0].position_kind is expected

    @pytest.mark.parametrize("raw,expected", [
        ("me", Side.SELF),
        ("self", Side.SELF),
        ("opponent", Side.OPPONENT),
        ("opp", Side.OPPONENT),
    ])
    def test_side_variants(self, raw, expected):
        assert normalize_positions([_pos(side=raw)])[0].side is expected

    def test_unknown_guard_label_kept(self):
        events = normalize_sweeps([_sweep(guard="Squid Guard")])
        assert events[0].guard_position == "Squid Guard"


# ======================================================================
# Idempotence and encoding
# ======================================================================


class TestIdempotence:
    def test_normalizing_twice_is_stable(self):
        raw = json.dumps([_sub(), {"type": "given"}, _sub("received", "Kimura")])
        once = normalize_submissions(raw)
        assert normalize_submissions(once) == once

    def test_encoded_events_normalize_back(self):
        positions = [PositionScore(position_kind=PositionKind.GUARD_PASS, side=Side.OPPONENT, notes="late")]
        assert normalize_positions(encode_events(positions)) == positions
        assert normalize_positions(encode_events_json(positions)) == positions

    def test_encode_uses_wire_keys(self):
        encoded = encode_events([SweepEvent(outcome=Outcome.RECEIVED, guard_position="Half Guard")])
        assert encoded == [{"type": "received", "guard": "Half Guard"}]
