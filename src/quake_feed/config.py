"""Configuration model for the earthquake feed."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from quake_feed.filters import FilterParams

USGS_ALL_DAY_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"


class QuakeFeedConfig(BaseSettings):
    """All configurable parameters for the earthquake feed.

    Values can be set via constructor arguments, environment variables
    prefixed with QUAKE_FEED_, or defaults.
    """

    model_config = {"env_prefix": "QUAKE_FEED_"}

    feed_url: str = Field(default=USGS_ALL_DAY_URL, description="GeoJSON summary feed URL.")
    request_timeout: int = Field(
        default=15, ge=1, le=120, description="HTTP request timeout in seconds."
    )
    request_retries: int = Field(
        default=2, ge=0, le=5, description="Retries for 429/5xx responses."
    )
    refresh_interval_seconds: int = Field(
        default=300, ge=30, description="Suggested interval for the external refresh scheduler."
    )
    default_min_magnitude: float = Field(
        default=0.0, ge=-2.0, le=10.0, description="Initial lower magnitude bound."
    )
    default_max_magnitude: float = Field(
        default=10.0, ge=-2.0, le=10.0, description="Initial upper magnitude bound."
    )
    recent_limit: int = Field(
        default=50, ge=1, description="Number of events in the most-recent list."
    )

    def default_filter_params(self) -> FilterParams:
        """Filter settings used at startup and when filters are reset."""
        return FilterParams(
            min_mag=self.default_min_magnitude,
            max_mag=self.default_max_magnitude,
        )
