"""
Event normalization: loosely-typed persisted records to typed events.

Event lists reach the service in several shapes:

- ``None`` (field never set),
- JSON text of a list (the original string-encoded columns),
- a list of dicts (JSON columns),
- a list whose items are themselves JSON strings,
- a list of already-typed event models.

Every shape is decoded into an ordered ``list`` of frozen event models.

Fail-open contract
------------------
Normalization never raises.  Text that does not decode, or decodes to
anything other than a list, yields ``[]``.  Individual items that do not
validate (missing technique, unknown position kind, bad outcome) are
**dropped**, never defaulted.

Normalizing an already-normalized list returns an equal list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.schemas.events import PositionScore, SubmissionEvent, SweepEvent

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT", bound=BaseModel)


def _decode(raw: Any) -> list[Any]:
    """Turn *raw* into a list of candidate items, or ``[]``."""
    if raw is None:
        return []
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError):
            logger.debug("Discarding undecodable event list: %.80r", raw)
            return []
    if not isinstance(raw, (list, tuple)):
        logger.debug("Discarding event list of type %s", type(raw).__name__)
        return []
    return list(raw)


def _coerce(item: Any, model: Type[EventT]) -> EventT | None:
    if isinstance(item, model):
        return item
    if isinstance(item, (str, bytes, bytearray)):
        try:
            item = json.loads(item)
        except (ValueError, RecursionError):
            return None
    if not isinstance(item, Mapping):
        return None
    try:
        return model.model_validate(dict(item))
    except ValidationError:
        return None


def _normalize(raw: Any, model: Type[EventT]) -> list[EventT]:
    events: list[EventT] = []
    dropped = 0
    for item in _decode(raw):
        event = _coerce(item, model)
        if event is None:
            dropped += 1
            continue
        events.append(event)
    if dropped:
        logger.debug("Dropped %d malformed %s record(s)", dropped, model.__name__)
    return events


# ======================================================================
# Public API
# ======================================================================


def normalize_submissions(raw: Any) -> list[SubmissionEvent]:
    return _normalize(raw, SubmissionEvent)


def normalize_sweeps(raw: Any) -> list[SweepEvent]:
    return _normalize(raw, SweepEvent)


def normalize_positions(raw: Any) -> list[PositionScore]:
    return _normalize(raw, PositionScore)


def encode_events(events: Iterable[BaseModel]) -> list[dict[str, Any]]:
    """Serialise events to JSON-safe dicts using the persisted wire keys."""
    return [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in events]


def encode_events_json(events: Iterable[BaseModel]) -> str:
    """Serialise events to the legacy string-encoded column format."""
    return json.dumps(encode_events(events))
