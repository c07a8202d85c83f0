"""Shared fixtures for quake_feed tests."""

from __future__ import annotations

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from quake_feed.config import QuakeFeedConfig
from quake_feed.http import create_session
from quake_feed.models import Event

FIXTURES_DIR = Path(__file__).parent / "fixtures"

FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"

# Fixed "now" shortly after the newest fixture event.
NOW_MS = 1700000600000
HOUR_MS = 3_600_000


def make_event(
    event_id: str = "ev1",
    magnitude: float = 4.0,
    place: str = "Test region",
    occurred_at: int | None = NOW_MS,
    **overrides,
) -> Event:
    """Build an Event with sensible defaults for unit tests."""
    return Event(
        id=event_id,
        magnitude=magnitude,
        longitude=overrides.pop("longitude", 0.0),
        latitude=overrides.pop("latitude", 0.0),
        place=place,
        occurred_at=occurred_at,
        **overrides,
    )


def make_feature(
    event_id: str | None = "ev1",
    mag: object = 4.0,
    coordinates: object = (10.0, 20.0, 5.0),
    **properties,
) -> dict:
    """Build a raw GeoJSON feature."""
    feature: dict = {
        "type": "Feature",
        "properties": {"mag": mag, **properties},
        "geometry": {"type": "Point", "coordinates": list(coordinates)},
    }
    if event_id is not None:
        feature["id"] = event_id
    return feature


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_feed() -> dict:
    return json.loads((FIXTURES_DIR / "feed_sample.json").read_text())


@pytest.fixture
def sample_events() -> list[Event]:
    """Three events with magnitudes 3.0, 5.5 and 7.2, newest first."""
    return [
        make_event("a", 3.0, "10 km N of Ridgecrest, CA", NOW_MS - HOUR_MS // 2,
                   depth_km=8.0, significance=138),
        make_event("b", 5.5, "Kermadec Islands, New Zealand", NOW_MS - 3 * HOUR_MS,
                   depth_km=33.0, significance=465),
        make_event("c", 7.2, "Southern Sumatra, Indonesia", NOW_MS - 10 * HOUR_MS,
                   depth_km=None, significance=798, has_tsunami_advisory=True),
    ]


@pytest.fixture
def config() -> QuakeFeedConfig:
    return QuakeFeedConfig(feed_url=FEED_URL, request_retries=0)


@pytest.fixture
def no_retry_session():
    """Session without retry/backoff so 5xx tests do not sleep."""
    return create_session(retries=0)


class _SlowFeedHandler(BaseHTTPRequestHandler):
    delay_seconds = 3.0

    def do_GET(self):  # noqa: N802
        time.sleep(self.delay_seconds)
        try:
            body = b'{"type": "FeatureCollection", "features": []}'
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):  # noqa: A002
        pass


@pytest.fixture
def slow_feed_url():
    """URL of a local feed that answers only after three seconds."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _SlowFeedHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}/all_day.geojson"
    finally:
        server.shutdown()
        server.server_close()
