"""Forecast summary and details extracted from parsed feed items.

Item titles look like ``"Monday: Light Cloud, Minimum Temperature: 8°C (46°F)
Maximum Temperature: 14°C (57°F)"`` and descriptions are eleven
comma-separated ``Key: value`` pairs.
"""

from dataclasses import dataclass, fields
from enum import Enum

from bs4 import BeautifulSoup

from .models import ForecastChannel, ForecastItem

TITLE_MAX_LEN = 1024
DESCRIPTION_MAX_LEN = 4096
TITLE_SEGMENTS = 2

# Description keys in feed order, mapped to Details attributes
DETAIL_KEYS = {
    "Maximum Temperature": "temperature_max",
    "Minimum Temperature": "temperature_min",
    "Wind Direction": "wind_direction",
    "Wind Speed": "wind_speed",
    "Visibility": "visibility",
    "Pressure": "pressure",
    "Humidity": "humidity",
    "UV Risk": "uv_risk",
    "Pollution": "pollution_level",
    "Sunrise": "sunrise_time",
    "Sunset": "sunset_time",
}


class ForecastFormatError(ValueError):
    """Raised when an item title or description does not follow the feed format."""


def clean_text(text: str) -> str:
    """Strip markup from feed text and normalize whitespace.

    Args:
        text: Raw title or description text

    Returns:
        Plain text on a single line
    """
    if not text:
        return ""

    if "<" in text and ">" in text:
        soup = BeautifulSoup(text, "html.parser")
        for tag in soup(["script", "style"]):
            tag.decompose()
        text = soup.get_text(separator=" ")

    return " ".join(text.split())


@dataclass(frozen=True)
class Summary:
    """Day label and weather summary taken from an item title."""

    day_label: str
    summary: str

    @classmethod
    def from_title(cls, title: str) -> "Summary":
        """Parse an item title.

        Raises:
            ForecastFormatError: If the title is empty, too long or not of the
                form ``"<day>: <summary>, <temperatures>"``
        """
        if not title or len(title) > TITLE_MAX_LEN:
            raise ForecastFormatError(f"Title length out of range: {len(title)}")

        segments = clean_text(title).split(",")
        if len(segments) != TITLE_SEGMENTS:
            raise ForecastFormatError(f"Expected {TITLE_SEGMENTS} title segments: {title!r}")

        day_label, separator, summary = segments[0].partition(": ")
        if not separator or not summary.strip():
            raise ForecastFormatError(f"Title has no summary: {title!r}")

        return cls(day_label=day_label.strip(), summary=summary.strip())

    def __str__(self) -> str:
        return f"Summary: {self.summary}"


@dataclass(frozen=True)
class Details:
    """Measurements taken from an item description."""

    temperature_max: str
    temperature_min: str
    wind_direction: str
    wind_speed: str
    visibility: str
    pressure: str
    humidity: str
    uv_risk: str
    pollution_level: str
    sunrise_time: str
    sunset_time: str

    @classmethod
    def from_description(cls, description: str) -> "Details":
        """Parse an item description.

        Raises:
            ForecastFormatError: If the description does not hold exactly the
                eleven known ``Key: value`` pairs
        """
        if not description or len(description) > DESCRIPTION_MAX_LEN:
            raise ForecastFormatError(
                f"Description length out of range: {len(description)}"
            )

        pairs = clean_text(description).split(",")
        if len(pairs) != len(DETAIL_KEYS):
            raise ForecastFormatError(
                f"Expected {len(DETAIL_KEYS)} description fields, got {len(pairs)}"
            )

        values: dict[str, str] = {}
        for pair in pairs:
            key, separator, value = pair.partition(": ")
            key = key.strip()
            if not separator or not value.strip():
                raise ForecastFormatError(f"Malformed description field: {pair!r}")
            if key not in DETAIL_KEYS:
                raise ForecastFormatError(f"Unknown description field: {key!r}")
            attribute = DETAIL_KEYS[key]
            if attribute in values:
                raise ForecastFormatError(f"Duplicate description field: {key!r}")
            values[attribute] = value.strip()

        return cls(**values)

    def __str__(self) -> str:
        labels = {attribute: key for key, attribute in DETAIL_KEYS.items()}
        return "\n".join(
            f"{labels[f.name]}: {getattr(self, f.name)}" for f in fields(self)
        )


@dataclass(frozen=True)
class Forecast:
    """Summary and details of one forecast item."""

    summary: Summary
    details: Details

    @classmethod
    def from_item(cls, item: ForecastItem) -> "Forecast":
        return cls(
            summary=Summary.from_title(item.title.value),
            details=Details.from_description(item.description.value),
        )

    def __str__(self) -> str:
        return f"{self.summary.summary}\t{self.details.temperature_max}"


class Day(Enum):
    """Position of a day in a 3-day feed."""

    TODAY = 0
    TOMORROW = 1
    OVERMORROW = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


def forecast_for(channel: ForecastChannel, day: Day) -> Forecast:
    """Return the forecast of one day of a 3-day feed.

    Raises:
        LookupError: If the feed holds no item for that day
        ForecastFormatError: If the item text does not follow the feed format
    """
    if day.value >= len(channel.items):
        raise LookupError(
            f"Feed has {len(channel.items)} items, no forecast for {day.label}"
        )
    return Forecast.from_item(channel.items[day.value])
