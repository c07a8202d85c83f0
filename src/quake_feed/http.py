"""HTTP session for feed downloads."""

from __future__ import annotations

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

RETRY_STATUSES = (429, 500, 502, 503, 504)


def create_session(
    retries: int = 2,
    backoff_factor: float = 0.5,
    accept: str = "application/json",
) -> Session:
    """Create a requests Session that retries failed feed downloads.

    Only GETs answered with a status in RETRY_STATUSES are retried. Once
    retries run out the last response is returned, not raised, so the
    fetcher can classify it. Connection and read failures are never retried:
    a read timeout surfaces as ``requests.ReadTimeout`` within one timeout.
    """
    adapter = HTTPAdapter(
        max_retries=Retry(
            total=retries,
            connect=0,
            read=False,
            backoff_factor=backoff_factor,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=["GET"],
            raise_on_status=False,
        )
    )
    session = Session()
    session.headers["Accept"] = accept
    for prefix in ("https://", "http://"):
        session.mount(prefix, adapter)
    return session
