"""Data models for the weather feed."""

from dataclasses import dataclass
from datetime import datetime

from .elements import Element, GeoPoint


@dataclass(frozen=True)
class ForecastItem:
    """Represents a single forecast entry (one day) of the feed."""

    title: Element[str]
    link: Element[str]
    description: Element[str]
    pub_date: Element[datetime]
    guid: Element[str]
    geo_point: Element[GeoPoint]


@dataclass(frozen=True)
class ForecastChannel:
    """Represents the feed channel and its items in document order."""

    title: Element[str]
    link: Element[str]
    description: Element[str]
    language: Element[str]
    copyright: Element[str]
    pub_date: Element[datetime]
    items: tuple[ForecastItem, ...]
