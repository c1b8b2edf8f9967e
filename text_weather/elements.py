"""Validating converters for the leaf values of a weather feed.

Every XML field the parser cares about is turned into an ``Element``: an
immutable wrapper around a typed value plus the raw text it came from.
Conversion rejects empty input and input longer than the kind's maximum
length before any type-specific parsing happens.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime
from email.utils import format_datetime
from enum import Enum
from typing import Generic, TypeVar
from urllib.parse import urlsplit

from dateutil import parser as date_parser

from .errors import FeedParseError

T = TypeVar("T")

STRING_MAX_LEN = 256
URL_MAX_LEN = 256
TIMESTAMP_MAX_LEN = 128
GEO_POINT_MAX_LEN = 16

GEO_POINT_PARTS = 2

REASON_EMPTY = "empty"
REASON_TOO_LONG = "too_long"
REASON_INVALID = "invalid"


class ElementKind(Enum):
    """The four kinds of leaf value found in the feed."""

    STRING = "string"
    URL = "url"
    TIMESTAMP = "timestamp"
    GEO_POINT = "geo_point"

    @property
    def max_length(self) -> int:
        return _MAX_LENGTHS[self]


_MAX_LENGTHS = {
    ElementKind.STRING: STRING_MAX_LEN,
    ElementKind.URL: URL_MAX_LEN,
    ElementKind.TIMESTAMP: TIMESTAMP_MAX_LEN,
    ElementKind.GEO_POINT: GEO_POINT_MAX_LEN,
}


@dataclass(frozen=True)
class GeoPoint:
    """A GeoRSS latitude/longitude pair."""

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"Latitude: {self.latitude}, Longitude: {self.longitude}"


@dataclass(frozen=True)
class Element(Generic[T]):
    """A validated leaf value."""

    kind: ElementKind
    value: T
    raw: str

    def __str__(self) -> str:
        if self.kind is ElementKind.TIMESTAMP:
            return format_datetime(self.value)
        return str(self.value)


# RFC 2822 date-time; the zone is mandatory so every result is timezone-aware
_RFC2822_PATTERN = re.compile(
    r"^(?:(?P<weekday>Mon|Tue|Wed|Thu|Fri|Sat|Sun),\s*)?"
    r"\d{1,2}\s+"
    r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+"
    r"(?P<year>\d{2,4})\s+"
    r"\d{2}:\d{2}(?::\d{2})?\s+"
    r"(?P<zone>[+-]\d{4}|UT|UTC|GMT|Z|EST|EDT|CST|CDT|MST|MDT|PST|PDT)$"
)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# RFC 2822 zone names, as offsets in seconds; listed explicitly so the
# host's local zone names never take precedence
_ZONE_OFFSETS = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
}

_SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.\-]*$")

_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def _check_length(kind: ElementKind, raw: str) -> None:
    if not raw:
        raise FeedParseError.field_validation(kind.value, raw, REASON_EMPTY)
    if len(raw) > kind.max_length:
        raise FeedParseError.field_validation(kind.value, raw, REASON_TOO_LONG)


def _invalid(kind: ElementKind, raw: str) -> FeedParseError:
    return FeedParseError.field_validation(kind.value, raw, REASON_INVALID)


def _expand_year(digits: str) -> int:
    # Obsolete RFC 2822 years: 00-49 are 20xx, other short years count from 1900
    year = int(digits)
    if len(digits) == 2 and year < 50:
        return year + 2000
    if len(digits) < 4:
        return year + 1900
    return year


def to_string(raw: str) -> Element[str]:
    """Validate a bounded free-text field."""
    _check_length(ElementKind.STRING, raw)
    return Element(ElementKind.STRING, raw, raw)


def to_url(raw: str) -> Element[str]:
    """Validate an absolute URL with a scheme and an authority.

    Args:
        raw: Text content of a link or guid element

    Returns:
        URL element whose value is the original text

    Raises:
        FeedParseError: If the text is empty, too long or not an absolute URL
    """
    kind = ElementKind.URL
    _check_length(kind, raw)

    if any(ch.isspace() for ch in raw):
        raise _invalid(kind, raw)

    try:
        parts = urlsplit(raw)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise _invalid(kind, raw) from e

    if not _SCHEME_PATTERN.match(parts.scheme) or not parts.netloc:
        raise _invalid(kind, raw)
    if not parts.hostname:
        raise _invalid(kind, raw)

    return Element(kind, raw, raw)


def to_timestamp(raw: str) -> Element[datetime]:
    """Parse an RFC 2822 date-time carrying an explicit zone.

    Args:
        raw: Text content of a pubDate element

    Returns:
        Timestamp element holding a timezone-aware datetime

    Raises:
        FeedParseError: If the text is empty, too long or not RFC 2822
    """
    kind = ElementKind.TIMESTAMP
    _check_length(kind, raw)

    text = raw.strip()
    match = _RFC2822_PATTERN.match(text)
    if match is None:
        raise _invalid(kind, raw)

    zone = match.group("zone")
    if zone[0] in "+-" and (int(zone[1:3]) >= 24 or int(zone[3:]) >= 60):
        raise _invalid(kind, raw)

    # Rewrite the year in four digits so dateutil never applies its own century
    year = _expand_year(match.group("year"))
    text = f"{text[: match.start('year')]}{year:04d}{text[match.end('year') :]}"

    try:
        parsed = date_parser.parse(text, tzinfos=_ZONE_OFFSETS)
    except (ValueError, OverflowError) as e:
        raise _invalid(kind, raw) from e

    if parsed.tzinfo is None:
        raise _invalid(kind, raw)

    weekday = match.group("weekday")
    if weekday and _WEEKDAYS[parsed.weekday()] != weekday:
        raise _invalid(kind, raw)

    return Element(kind, parsed, raw)


def to_geo_point(raw: str) -> Element[GeoPoint]:
    """Parse a GeoRSS point of the form ``"<latitude> <longitude>"``.

    Args:
        raw: Text content of a georss:point element

    Returns:
        Geo-point element

    Raises:
        FeedParseError: If the text is empty, too long, does not hold exactly
            two tokens, or either token is not a finite number
    """
    kind = ElementKind.GEO_POINT
    _check_length(kind, raw)

    tokens = raw.split()
    if len(tokens) != GEO_POINT_PARTS:
        raise _invalid(kind, raw)

    coordinates = []
    for token in tokens:
        if not _DECIMAL_PATTERN.match(token):
            raise _invalid(kind, raw)
        value = float(token)
        if not math.isfinite(value):
            raise _invalid(kind, raw)
        coordinates.append(value)

    latitude, longitude = coordinates
    return Element(kind, GeoPoint(latitude, longitude), raw)


_CONVERTERS = {
    ElementKind.STRING: to_string,
    ElementKind.URL: to_url,
    ElementKind.TIMESTAMP: to_timestamp,
    ElementKind.GEO_POINT: to_geo_point,
}


def convert(kind: ElementKind, raw: str) -> Element:
    """Run the converter registered for ``kind``."""
    return _CONVERTERS[kind](raw)
