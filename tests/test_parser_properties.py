"""Property-based tests for the streaming feed parser."""

import pytest
from conftest import build_feed
from hypothesis import given, settings
from hypothesis import strategies as st

from text_weather.errors import ErrorKind, FeedParseError
from text_weather.parser import parse_document

coordinates = st.tuples(
    st.floats(min_value=-90, max_value=90, allow_nan=False),
    st.floats(min_value=-180, max_value=180, allow_nan=False),
).map(lambda pair: f"{pair[0]:.3f} {pair[1]:.3f}")


class TestParserProperties:
    """Property-based tests for parse_document."""

    @settings(max_examples=30)
    @given(st.integers(min_value=1, max_value=8))
    def test_item_order_property(self, item_count):
        """
        Property 7: Document Order Preserved

        For any number of items, the channel holds exactly that many items in
        the order they appear in the document.
        """
        channel = parse_document(build_feed(item_count=item_count))

        assert len(channel.items) == item_count
        assert [item.guid.value for item in channel.items] == [
            f"https://www.bbc.co.uk/weather/2643743?day={index}"
            for index in range(item_count)
        ]

    @settings(max_examples=30)
    @given(st.lists(coordinates, min_size=1, max_size=3), st.integers(3, 64))
    def test_deterministic_parse_property(self, points, chunk_size):
        """
        Property 8: Deterministic Parse

        Parsing the same document twice yields equal channels, whatever the
        tokenizer chunk size.
        """
        body = build_feed(
            item_count=len(points),
            item_overrides={
                index: {"georss:point": point} for index, point in enumerate(points)
            },
        )

        first = parse_document(body)
        second = parse_document(body, chunk_size=chunk_size)

        assert first == second
        for item, point in zip(first.items, points):
            latitude, longitude = (float(token) for token in point.split())
            assert item.geo_point.value.latitude == latitude
            assert item.geo_point.value.longitude == longitude

    @settings(max_examples=30)
    @given(st.sampled_from(["title", "link", "description", "language", "copyright", "pubDate"]))
    def test_missing_channel_field_property(self, field_name):
        """
        Property 9: No Partial Channel

        Dropping any required channel field fails the whole parse and names
        the missing field.
        """
        body = build_feed(channel_overrides={field_name: None})

        with pytest.raises(FeedParseError) as exc_info:
            parse_document(body)

        assert exc_info.value.kind is ErrorKind.INCOMPLETE
        expected = "pub_date" if field_name == "pubDate" else field_name
        assert exc_info.value.missing_fields == [expected]
