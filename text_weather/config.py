"""Configuration management for text-weather."""

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from .parser import DEFAULT_CHUNK_SIZE

# BBC Weather 3-day forecast for London
DEFAULT_FEED_URL = "https://weather-broker-cdn.api.bbci.co.uk/en/forecast/rss/3day/2643743"


@dataclass
class FeedConfig:
    """Configuration for downloading and parsing the feed."""

    feed_url: str = DEFAULT_FEED_URL
    timeout: int = 30
    chunk_size: int = DEFAULT_CHUNK_SIZE


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.feed_url = os.getenv("TEXT_WEATHER_FEED_URL", DEFAULT_FEED_URL)
        self.timeout = self._read_positive_int("TEXT_WEATHER_TIMEOUT", 30)
        self.chunk_size = self._read_positive_int(
            "TEXT_WEATHER_CHUNK_SIZE", DEFAULT_CHUNK_SIZE
        )
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _read_positive_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as e:
            raise ValueError(f"{name} must be an integer: {raw!r}") from e
        if value <= 0:
            raise ValueError(f"{name} must be positive: {value}")
        return value

    def get_feed_config(self, feed_url: str | None = None) -> FeedConfig:
        """Get feed configuration, optionally overriding the feed URL."""
        url = feed_url or self.feed_url
        if urlparse(url).scheme != "https":
            raise ValueError(f"Feed URL must use HTTPS protocol: {url}")
        return FeedConfig(
            feed_url=url,
            timeout=self.timeout,
            chunk_size=self.chunk_size,
        )
