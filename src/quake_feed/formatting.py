"""Display helpers for events: magnitude bands and relative times."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

_MINUTE_MS = 60_000
_HOUR_MS = 60 * _MINUTE_MS
_DAY_MS = 24 * _HOUR_MS


@dataclass(frozen=True)
class MagnitudeBand:
    """Severity band of a magnitude."""

    value: str
    description: str
    severity: str
    color: str


# (lower bound, severity, colour, description), strongest first
_BANDS: list[tuple[float, str, str, str]] = [
    (8.0, "catastrophic", "#7f1d1d",
     "Great: can cause serious damage in areas several hundred miles across."),
    (7.0, "severe", "#b91c1c", "Major: can cause serious damage over larger areas."),
    (6.0, "strong", "#dc2626", "Strong: may cause severe damage in populated areas."),
    (5.0, "moderate", "#facc15", "Moderate: can cause damage to poorly constructed buildings."),
    (4.0, "light", "#84cc16", "Light: noticeable shaking of indoor items, rattling noises."),
    (3.0, "minor", "#22c55e", "Minor: often felt, but rarely causes damage."),
    (2.0, "very minor", "#2dd4bf", "Very minor: usually not felt, but recorded by seismographs."),
]
_MICRO = ("micro", "#3b82f6", "Micro: not felt by people.")


def describe_magnitude(magnitude: float | None) -> MagnitudeBand:
    """Return the display label and severity band for *magnitude*."""
    if magnitude is None:
        return MagnitudeBand("N/A", "Unknown", "unknown", "#6b7280")

    value = f"M {magnitude:.1f}"
    for lower, severity, color, description in _BANDS:
        if magnitude >= lower:
            return MagnitudeBand(value, description, severity, color)
    severity, color, description = _MICRO
    return MagnitudeBand(value, description, severity, color)


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'} ago"


def format_epoch(epoch_ms: int | None, now_ms: int | None = None) -> str:
    """Human-readable event time.

    Relative ("5 minutes ago") for the past week, an absolute UTC date
    otherwise.
    """
    if not epoch_ms:
        return "Unknown"
    if now_ms is None:
        now_ms = int(datetime.now(tz=timezone.utc).timestamp() * 1000)

    diff = int(now_ms - epoch_ms)
    if diff < _HOUR_MS:
        return _plural(max(diff, 0) // _MINUTE_MS, "minute")
    if diff < _DAY_MS:
        return _plural(diff // _HOUR_MS, "hour")
    if diff < 7 * _DAY_MS:
        return _plural(diff // _DAY_MS, "day")

    dt = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%H:%M} UTC"
