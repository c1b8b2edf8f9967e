"""Strict parser and reader for RSS/GeoRSS weather forecast feeds."""

from .errors import ErrorKind, FeedParseError
from .models import ForecastChannel, ForecastItem
from .parser import parse_document

__all__ = [
    "ErrorKind",
    "FeedParseError",
    "ForecastChannel",
    "ForecastItem",
    "parse_document",
]
