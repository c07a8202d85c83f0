"""Summary statistics over a filtered view."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from quake_feed.models import Event, MagnitudeDistribution, Statistics

SIGNIFICANCE_THRESHOLD = 600

DepthClass = Literal["shallow", "intermediate", "deep"]
ActivityLevel = Literal["low", "moderate", "high"]


def aggregate(filtered: Sequence[Event]) -> Statistics | None:
    """Compute statistics for *filtered*, or None when it is empty."""
    if not filtered:
        return None

    n = len(filtered)
    magnitudes = [e.magnitude for e in filtered]
    depths = [e.depth_km for e in filtered if e.depth_km is not None]

    return Statistics(
        total=n,
        avg_mag=sum(magnitudes) / n,
        max_mag=max(magnitudes),
        min_mag=min(magnitudes),
        avg_depth=sum(depths) / len(depths) if depths else None,
        with_tsunami=sum(1 for e in filtered if e.has_tsunami_advisory),
        significant=sum(1 for e in filtered if e.significance > SIGNIFICANCE_THRESHOLD),
    )


def magnitude_distribution(events: Sequence[Event]) -> MagnitudeDistribution:
    """Bucket events into low (< 4), medium (4 to < 6) and high (>= 6)."""
    low = medium = high = 0
    for e in events:
        if e.magnitude < 4:
            low += 1
        elif e.magnitude < 6:
            medium += 1
        else:
            high += 1
    return MagnitudeDistribution(low=low, medium=medium, high=high)


def depth_class(avg_depth_km: float) -> DepthClass:
    """Classify an average hypocentre depth."""
    if avg_depth_km < 70:
        return "shallow"
    if avg_depth_km < 300:
        return "intermediate"
    return "deep"


def activity_level(total: int) -> ActivityLevel:
    if total > 100:
        return "high"
    if total > 50:
        return "moderate"
    return "low"
