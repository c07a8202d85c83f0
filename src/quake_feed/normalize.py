"""Record normalizer: raw GeoJSON features -> validated Event objects."""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any

from quake_feed.errors import MalformedFeedError
from quake_feed.models import Event

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite(value: Any) -> float | None:
    """Return *value* as a float if it is a finite number, else None."""
    if not _is_number(value):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def round_tenth(value: float) -> float:
    """Round to one decimal, halves away from zero."""
    return math.copysign(math.floor(abs(value) * 10 + 0.5), value) / 10


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _optional_int(value: Any) -> int | None:
    # Zero counts as "not reported", matching the feed's sparse fields.
    number = _finite(value)
    return int(number) if number else None


def _optional_float(value: Any) -> float | None:
    number = _finite(value)
    return number if number else None


def _event_id(feature: dict[str, Any]) -> str:
    raw_id = feature.get("id")
    if not raw_id:
        return str(uuid.uuid4())
    return str(raw_id)


def normalize_feature(feature: Any) -> Event | None:
    """Convert one raw feed feature into an Event.

    Returns None for records without a finite magnitude or without at least
    two finite coordinates. Never raises for malformed input.
    """
    if not isinstance(feature, dict):
        return None

    props = _mapping(feature.get("properties"))
    coords = _mapping(feature.get("geometry")).get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None

    longitude = _finite(coords[0])
    latitude = _finite(coords[1])
    magnitude = _finite(props.get("mag"))
    if longitude is None or latitude is None or magnitude is None:
        return None

    depth = _finite(coords[2]) if len(coords) > 2 else None
    occurred_at = _finite(props.get("time"))
    significance = _finite(props.get("sig"))

    return Event(
        id=_event_id(feature),
        magnitude=round_tenth(magnitude),
        longitude=longitude,
        latitude=latitude,
        place=_text(props.get("place"), "Unknown location"),
        occurred_at=int(occurred_at) if occurred_at is not None else None,
        source_url=_text(props.get("url"), "") or None,
        depth_km=round_tenth(depth) if depth is not None else None,
        significance=int(significance) if significance is not None else 0,
        felt_reports=_optional_int(props.get("felt")),
        community_intensity=_optional_float(props.get("cdi")),
        instrumental_intensity=_optional_float(props.get("mmi")),
        status=_text(props.get("status"), "automatic"),
        has_tsunami_advisory=props.get("tsunami") == 1,
        event_type=_text(props.get("type"), "earthquake"),
    )


def normalize_feed(document: Any) -> tuple[list[Event], int]:
    """Normalize every feature of a feed document.

    Returns:
        (events, rejected): accepted events in feed order and the number of
        features that failed validation.

    Raises:
        MalformedFeedError: if the document has no ``features`` list.
    """
    if not isinstance(document, dict) or not isinstance(document.get("features"), list):
        raise MalformedFeedError("Invalid response format from USGS API")

    events: list[Event] = []
    rejected = 0
    for feature in document["features"]:
        event = normalize_feature(feature)
        if event is None:
            rejected += 1
            logger.debug("Rejected malformed feature %r", _mapping(feature).get("id"))
            continue
        events.append(event)
    return events, rejected
