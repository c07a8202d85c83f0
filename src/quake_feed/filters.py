"""Filter parameters and the filter engine."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from quake_feed.models import Event, TimeWindow

_HOUR_MS = 3_600_000


class FilterParams(BaseModel):
    """Caller-owned filter settings.

    ``min_mag <= max_mag`` is not enforced: an inverted range simply
    matches nothing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_mag: float = 0.0
    max_mag: float = 10.0
    region_query: str = ""
    time_window: TimeWindow = "all"

    def updated(self, **changes: Any) -> FilterParams:
        """Return a re-validated copy with *changes* applied."""
        return FilterParams.model_validate({**self.model_dump(), **changes})


def window_hours(window: TimeWindow) -> int | None:
    """Hours covered by a time window label, or None for ``all``."""
    if window == "all":
        return None
    return int(window.rstrip("h"))


def _in_window(event: Event, cutoff_ms: int | None) -> bool:
    if cutoff_ms is None:
        return True
    # Undated events cannot be shown to be recent.
    return event.occurred_at is not None and event.occurred_at >= cutoff_ms


def apply_filters(
    events: Iterable[Event],
    params: FilterParams,
    now_ms: int,
) -> tuple[Event, ...]:
    """Return the events passing magnitude, region and time predicates.

    Input order is preserved. The result depends only on the arguments.
    """
    query = params.region_query.strip().lower()
    hours = window_hours(params.time_window)
    cutoff_ms = now_ms - hours * _HOUR_MS if hours is not None else None

    return tuple(
        e
        for e in events
        if params.min_mag <= e.magnitude <= params.max_mag
        and (not query or query in e.place.lower())
        and _in_window(e, cutoff_ms)
    )
