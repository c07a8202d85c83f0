"""Fetch-level errors surfaced by feed ingestion."""

from __future__ import annotations

from quake_feed.models import FetchErrorKind

MESSAGES: dict[str, str] = {
    "timeout": "Request timed out. The earthquake service may be busy. Please try again.",
    "service_unavailable": "Earthquake data service is temporarily unavailable.",
    "offline": "No internet connection. Please check your network and try again.",
    "unknown": "Failed to load earthquake data. Please try again in a moment.",
}


class FeedError(Exception):
    """Base class for errors that fail a whole ingestion.

    Every subclass is retryable; ``kind`` is the classification reported to
    callers and ``message`` the text shown to the user.
    """

    kind: FetchErrorKind = "unknown"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or MESSAGES[self.kind])
        self.detail = detail

    @property
    def message(self) -> str:
        return MESSAGES[self.kind]


class FeedTimeoutError(FeedError):
    kind: FetchErrorKind = "timeout"


class FeedUnavailableError(FeedError):
    kind: FetchErrorKind = "service_unavailable"

    def __init__(self, detail: str = "", status_code: int | None = None) -> None:
        super().__init__(detail)
        self.status_code = status_code


class FeedOfflineError(FeedError):
    kind: FetchErrorKind = "offline"


class MalformedFeedError(FeedError):
    """Top-level document shape is invalid (no ``features`` list)."""

    kind: FetchErrorKind = "unknown"


class UnknownFeedError(FeedError):
    kind: FetchErrorKind = "unknown"
