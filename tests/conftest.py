"""Shared sample feeds for the text-weather tests."""

import pytest

CHANNEL_FIELDS = {
    "title": "BBC Weather - Forecast for  London, GB",
    "link": "https://www.bbc.co.uk/weather/2643743",
    "description": (
        "3-day forecast for London from BBC Weather, including weather, "
        "temperature and wind information"
    ),
    "language": "en",
    "copyright": (
        "Copyright: (C) British Broadcasting Corporation, see "
        "http://www.bbc.co.uk/terms/additional_rss.shtml for more details"
    ),
    "pubDate": "Mon, 19 Oct 2026 04:00:00 GMT",
}

ITEM_TITLES = [
    "Today: Light Cloud, Minimum Temperature: 8°C (46°F)",
    "Tuesday: Sunny Intervals, Minimum Temperature: 7°C (45°F) "
    "Maximum Temperature: 15°C (59°F)",
    "Wednesday: Light Rain, Minimum Temperature: 9°C (48°F) "
    "Maximum Temperature: 13°C (55°F)",
]

ITEM_DESCRIPTION = (
    "Maximum Temperature: 15°C (59°F), Minimum Temperature: 8°C (46°F), "
    "Wind Direction: Westerly, Wind Speed: 9mph, Visibility: Good, "
    "Pressure: 1019mb, Humidity: 74%, UV Risk: 2, Pollution: Low, "
    "Sunrise: 07:26 BST, Sunset: 17:58 BST"
)


def item_fields(index: int) -> dict[str, str]:
    """Default fields of the item at ``index``."""
    return {
        "title": ITEM_TITLES[index % len(ITEM_TITLES)],
        "link": f"https://www.bbc.co.uk/weather/2643743?day={index}",
        "description": ITEM_DESCRIPTION,
        "pubDate": "Mon, 19 Oct 2026 04:00:00 GMT",
        "guid": f"https://www.bbc.co.uk/weather/2643743?day={index}",
        "georss:point": "51.5085 -0.1257",
    }


def _render_fields(fields: dict[str, str | None], indent: str) -> str:
    # None drops the field
    return "".join(
        f"{indent}<{name}>{value}</{name}>\n"
        for name, value in fields.items()
        if value is not None
    )


def build_feed(
    item_count: int = 3,
    channel_overrides: dict[str, str | None] | None = None,
    item_overrides: dict[int, dict[str, str | None]] | None = None,
    item_extra: str = "",
) -> str:
    """Render a feed document in the shape of the BBC Weather 3-day feed.

    Args:
        item_count: Number of items to render
        channel_overrides: Replacement channel field values (None omits)
        item_overrides: Per-item replacement field values (None omits)
        item_extra: Raw markup appended inside every item
    """
    channel = {**CHANNEL_FIELDS, **(channel_overrides or {})}
    items = []
    for index in range(item_count):
        fields = {**item_fields(index), **(item_overrides or {}).get(index, {})}
        items.append(
            "    <item>\n"
            + _render_fields(fields, "      ")
            + item_extra
            + "    </item>\n"
        )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/" '
        'xmlns:atom="http://www.w3.org/2005/Atom" '
        'xmlns:georss="http://www.georss.org/georss">\n'
        "  <channel>\n"
        + _render_fields(channel, "    ")
        + "    <dc:date>2026-10-19T04:00:00Z</dc:date>\n"
        + '    <atom:link href="https://weather-broker-cdn.api.bbci.co.uk/en/'
        'forecast/rss/3day/2643743" rel="self" type="application/rss+xml" />\n'
        + "".join(items)
        + "  </channel>\n"
        "</rss>\n"
    )


@pytest.fixture(scope="session")
def feed_builder():
    """Factory for sample feed documents."""
    return build_feed


@pytest.fixture(scope="session")
def three_day_feed() -> str:
    """A valid 3-day feed document."""
    return build_feed()
