"""USGS summary feed fetcher and failure classification."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from requests import Session
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import HTTPError, RequestException, Timeout
from urllib3.exceptions import MaxRetryError
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError

from quake_feed.config import USGS_ALL_DAY_URL
from quake_feed.errors import (
    FeedError,
    FeedOfflineError,
    FeedTimeoutError,
    FeedUnavailableError,
    MalformedFeedError,
    UnknownFeedError,
)
from quake_feed.http import create_session

logger = logging.getLogger(__name__)

Connectivity = Callable[[], bool]


def _is_timeout(exc: Exception) -> bool:
    if isinstance(exc, Timeout):
        return True
    # Custom sessions that retry reads wrap the timeout in MaxRetryError.
    cause = exc.args[0] if exc.args else None
    return isinstance(cause, MaxRetryError) and isinstance(cause.reason, Urllib3TimeoutError)


def classify_request_error(exc: Exception, online: bool | None = None) -> FeedError:
    """Map a request failure to a classified FeedError.

    *online* is the connectivity collaborator's answer, if one is available.
    """
    if _is_timeout(exc):
        return FeedTimeoutError(str(exc))
    if isinstance(exc, HTTPError) and exc.response is not None:
        status = exc.response.status_code
        if status == 404 or status >= 500:
            return FeedUnavailableError(str(exc), status_code=status)
    if online is False or isinstance(exc, RequestsConnectionError):
        return FeedOfflineError(str(exc))
    return UnknownFeedError(str(exc))


def fetch_feed(
    url: str = USGS_ALL_DAY_URL,
    timeout: int = 15,
    session: Session | None = None,
    connectivity: Connectivity | None = None,
) -> dict[str, Any]:
    """Download the feed document.

    Raises:
        FeedError: classified failure; the caller keeps its previous data.
    """
    if session is None:
        session = create_session()

    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except RequestException as exc:
        online = connectivity() if connectivity is not None else None
        error = classify_request_error(exc, online=online)
        logger.warning("Feed request failed (%s): %s", error.kind, exc)
        raise error from exc

    try:
        document = resp.json()
    except ValueError as exc:
        raise MalformedFeedError("Feed body is not valid JSON") from exc

    if not isinstance(document, dict):
        raise MalformedFeedError("Feed body is not a JSON object")
    return document
