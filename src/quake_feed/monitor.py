"""Feed monitor: owns the feed state and exposes the caller-facing API.

State flow: refresh -> normalize -> replace snapshot -> filter -> aggregate.
Each state object is replaced, never mutated, and the filtered view and
statistics are recomputed in full whenever the snapshot or the filter
parameters change.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from requests import Session

from quake_feed.config import QuakeFeedConfig
from quake_feed.errors import FeedError
from quake_feed.feed import Connectivity, fetch_feed
from quake_feed.filters import FilterParams, apply_filters
from quake_feed.http import create_session
from quake_feed.models import (
    Event,
    FeedStatus,
    IngestionResult,
    MagnitudeDistribution,
    Statistics,
)
from quake_feed.normalize import normalize_feed
from quake_feed.selection import Selection
from quake_feed.stats import aggregate, magnitude_distribution
from quake_feed.store import EventSnapshot, build_snapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class QuakeMonitor:
    """Single-session owner of the event store, filters and selection.

    Args:
        config: Feed settings; defaults are read from the environment.
        session: HTTP session used by ``refresh``.
        clock: Returns "now" in epoch ms; time windows are relative to it.
        connectivity: Returns False when the host knows it is offline.
    """

    def __init__(
        self,
        config: QuakeFeedConfig | None = None,
        *,
        session: Session | None = None,
        clock: Clock | None = None,
        connectivity: Connectivity | None = None,
    ) -> None:
        self.config = config or QuakeFeedConfig()
        self._session = session
        self._clock = clock or now_ms
        self._connectivity = connectivity

        self._snapshot = EventSnapshot()
        self._params = self.config.default_filter_params()
        self._selection = Selection()
        self._filtered: tuple[Event, ...] = ()
        self._statistics: Statistics | None = None

        self._issued_seq = 0
        self._applied_seq = 0
        self._status: FeedStatus = "idle"
        self._last_error: FeedError | None = None
        self._last_fetch_ms: int | None = None

    # -- derivation ---------------------------------------------------------

    def rederive(self, now: int | None = None) -> None:
        """Recompute the filtered view and statistics from current state."""
        self._filtered = apply_filters(
            self._snapshot.events,
            self._params,
            self._clock() if now is None else now,
        )
        self._statistics = aggregate(self._filtered)

    # -- filters ------------------------------------------------------------

    @property
    def filter_params(self) -> FilterParams:
        return self._params

    def set_filter_params(self, **changes: Any) -> FilterParams:
        """Apply a partial update to the filter parameters.

        Raises:
            pydantic.ValidationError: on unknown keys or invalid values.
        """
        self._params = self._params.updated(**changes)
        self.rederive()
        return self._params

    def reset_filters(self) -> FilterParams:
        self._params = self.config.default_filter_params()
        self.rederive()
        return self._params

    # -- reads --------------------------------------------------------------

    @property
    def snapshot(self) -> EventSnapshot:
        return self._snapshot

    def events(self) -> tuple[Event, ...]:
        return self._snapshot.events

    def filtered_view(self) -> tuple[Event, ...]:
        return self._filtered

    def statistics(self) -> Statistics | None:
        return self._statistics

    def recent_events(self, limit: int | None = None) -> tuple[Event, ...]:
        """The newest events of the filtered view."""
        return self._filtered[: self.config.recent_limit if limit is None else limit]

    def magnitude_distribution(self) -> MagnitudeDistribution:
        return magnitude_distribution(self._filtered)

    def last_updated_ms(self) -> int | None:
        return self._snapshot.most_recent_ms

    @property
    def status(self) -> FeedStatus:
        return self._status

    @property
    def last_error(self) -> FeedError | None:
        return self._last_error

    @property
    def last_fetch_ms(self) -> int | None:
        return self._last_fetch_ms

    # -- selection ----------------------------------------------------------

    @property
    def selection(self) -> Selection:
        return self._selection

    def select(self, event_id: str) -> None:
        self._selection = self._selection.select(event_id)

    def clear_selection(self) -> None:
        self._selection = self._selection.clear()

    def selection_is_valid(self) -> bool:
        return self._selection.is_valid(self._filtered)

    def selected_event(self) -> Event | None:
        return self._selection.resolve(self._filtered)

    # -- ingestion ----------------------------------------------------------

    def begin_ingestion(self) -> int:
        """Tag a new ingestion attempt and return its sequence number."""
        self._issued_seq += 1
        self._status = "loading"
        return self._issued_seq

    def _is_stale(self, sequence: int) -> bool:
        if sequence <= self._applied_seq:
            logger.warning(
                "Discarding stale ingestion #%d (already applied #%d)",
                sequence,
                self._applied_seq,
            )
            return True
        return False

    def _settle_status(self, status: FeedStatus) -> None:
        self._status = "loading" if self._issued_seq > self._applied_seq else status

    def complete_ingestion(self, sequence: int, document: Any) -> IngestionResult:
        """Replace the snapshot with the normalized *document*.

        A bad top-level shape is handled as a failed ingestion.
        """
        if self._is_stale(sequence):
            return IngestionResult(sequence=sequence, discarded=True)

        try:
            events, rejected = normalize_feed(document)
        except FeedError as exc:
            return self.fail_ingestion(sequence, exc)

        fetched_at = self._clock()
        self._snapshot = build_snapshot(events, sequence=sequence, fetched_at_ms=fetched_at)
        self._applied_seq = sequence
        self._last_error = None
        self._last_fetch_ms = fetched_at
        self.rederive(fetched_at)
        self._settle_status("success")

        logger.info(
            "Ingestion #%d: %d events (%d rejected)",
            sequence,
            len(self._snapshot),
            rejected,
        )
        return IngestionResult(
            sequence=sequence,
            event_count=len(self._snapshot),
            rejected_count=rejected,
        )

    def fail_ingestion(self, sequence: int, error: FeedError) -> IngestionResult:
        """Record a failed ingestion; the previous snapshot stays in place."""
        if self._is_stale(sequence):
            return IngestionResult(sequence=sequence, discarded=True)

        self._applied_seq = sequence
        self._last_error = error
        self._settle_status("error")
        logger.warning("Ingestion #%d failed (%s): %s", sequence, error.kind, error)
        return IngestionResult(sequence=sequence, error=error.kind, message=error.message)

    def _fetch(self) -> dict[str, Any]:
        if self._session is None:
            self._session = create_session(retries=self.config.request_retries)
        return fetch_feed(
            url=self.config.feed_url,
            timeout=self.config.request_timeout,
            session=self._session,
            connectivity=self._connectivity,
        )

    async def refresh(self) -> IngestionResult:
        """Fetch the feed and ingest it.

        The blocking download runs in a worker thread. Never raises for
        fetch failures; they are reported in the returned result.
        """
        sequence = self.begin_ingestion()
        logger.info("Fetching feed %s (ingestion #%d)...", self.config.feed_url, sequence)
        try:
            document = await asyncio.to_thread(self._fetch)
        except FeedError as exc:
            return self.fail_ingestion(sequence, exc)
        return self.complete_ingestion(sequence, document)
