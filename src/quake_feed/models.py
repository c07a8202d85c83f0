"""Data models for the earthquake feed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TimeWindow = Literal["all", "1h", "6h", "12h", "24h"]
FetchErrorKind = Literal["timeout", "service_unavailable", "offline", "unknown"]
FeedStatus = Literal["idle", "loading", "success", "error"]
MagnitudeBucket = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class Event:
    """A single normalized seismic event from the feed."""

    id: str
    magnitude: float
    longitude: float
    latitude: float
    place: str = "Unknown location"
    occurred_at: int | None = None  # epoch ms
    source_url: str | None = None
    depth_km: float | None = None
    significance: int = 0
    felt_reports: int | None = None
    community_intensity: float | None = None  # cdi
    instrumental_intensity: float | None = None  # mmi
    status: str = "automatic"
    has_tsunami_advisory: bool = False
    event_type: str = "earthquake"


@dataclass(frozen=True)
class Statistics:
    """Summary statistics over a non-empty filtered view."""

    total: int
    avg_mag: float
    max_mag: float
    min_mag: float
    avg_depth: float | None
    with_tsunami: int
    significant: int


@dataclass(frozen=True)
class MagnitudeDistribution:
    """Event counts per magnitude bucket."""

    low: int = 0
    medium: int = 0
    high: int = 0

    @property
    def total(self) -> int:
        return self.low + self.medium + self.high

    def percentage(self, bucket: MagnitudeBucket) -> float:
        """Share of *bucket* in percent, 0.0 for an empty distribution."""
        if not self.total:
            return 0.0
        return getattr(self, bucket) / self.total * 100


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one tagged ingestion attempt."""

    sequence: int
    event_count: int | None = None
    rejected_count: int = 0
    error: FetchErrorKind | None = None
    message: str = ""
    discarded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.discarded
