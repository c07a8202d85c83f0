"""Event store: one immutable, time-ordered snapshot of the feed."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from quake_feed.models import Event

logger = logging.getLogger(__name__)


def sort_key(event: Event) -> int:
    """Events without a timestamp sort as the earliest."""
    return event.occurred_at if event.occurred_at is not None else 0


@dataclass(frozen=True)
class EventSnapshot:
    """Normalized events for one successful ingestion, newest first."""

    events: tuple[Event, ...] = ()
    sequence: int = 0
    fetched_at_ms: int | None = None

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def get(self, event_id: str) -> Event | None:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    @property
    def most_recent_ms(self) -> int | None:
        """Newest event timestamp, or None if no event carries one."""
        newest = max((sort_key(e) for e in self.events), default=0)
        return newest or None


def build_snapshot(
    events: Iterable[Event],
    sequence: int = 0,
    fetched_at_ms: int | None = None,
) -> EventSnapshot:
    """Build a snapshot sorted by ``occurred_at`` descending.

    The sort is stable, so events with equal timestamps keep feed order.
    Repeated ids keep their first occurrence.
    """
    seen: set[str] = set()
    unique: list[Event] = []
    for event in events:
        if event.id in seen:
            logger.debug("Dropping duplicate event id %s", event.id)
            continue
        seen.add(event.id)
        unique.append(event)

    ordered = sorted(unique, key=sort_key, reverse=True)
    return EventSnapshot(events=tuple(ordered), sequence=sequence, fetched_at_ms=fetched_at_ms)
