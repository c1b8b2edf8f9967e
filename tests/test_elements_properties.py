"""Property-based tests for the element converters."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from text_weather.elements import ElementKind, convert, to_geo_point, to_string
from text_weather.errors import ErrorKind, FeedParseError

KINDS = list(ElementKind)


class TestElementProperties:
    """Property-based tests for element length bounds and geo-points."""

    @given(
        st.sampled_from(KINDS),
        st.integers(min_value=1, max_value=64),
    )
    def test_oversized_input_rejected_property(self, kind, excess):
        """
        Property 1: Oversized Input Rejected

        For every element kind, input longer than the kind's maximum length
        fails validation before any parsing.
        """
        raw = "1" * (kind.max_length + excess)

        with pytest.raises(FeedParseError) as exc_info:
            convert(kind, raw)

        assert exc_info.value.kind is ErrorKind.FIELD_VALIDATION
        assert exc_info.value.reason == "too_long"
        assert exc_info.value.element_kind == kind.value

    @given(st.sampled_from(KINDS))
    def test_empty_input_rejected_property(self, kind):
        """
        Property 2: Empty Input Rejected

        For every element kind, empty input fails validation.
        """
        with pytest.raises(FeedParseError) as exc_info:
            convert(kind, "")

        assert exc_info.value.reason == "empty"

    @given(st.text(min_size=1, max_size=256))
    def test_string_within_bounds_property(self, text):
        """
        Property 3: Bounded String Identity

        Any non-empty text within the bound converts to itself.
        """
        assert to_string(text).value == text

    @given(
        st.decimals(min_value=-90, max_value=90, places=3),
        st.decimals(min_value=-180, max_value=180, places=3),
    )
    def test_geo_point_coordinates_property(self, latitude, longitude):
        """
        Property 4: Geo-Point Token Order

        The first token is always the latitude and the second the longitude.
        """
        raw = f"{latitude} {longitude}"

        point = to_geo_point(raw).value

        assert point.latitude == float(latitude)
        assert point.longitude == float(longitude)

    @given(
        st.lists(
            st.floats(min_value=-90, max_value=90).map(lambda v: f"{v:.1f}"),
            min_size=3,
            max_size=3,
        )
    )
    def test_geo_point_extra_tokens_property(self, tokens):
        """
        Property 5: Geo-Point Token Count

        A point with three numeric tokens always fails validation.
        """
        with pytest.raises(FeedParseError) as exc_info:
            to_geo_point(" ".join(tokens))

        assert exc_info.value.kind is ErrorKind.FIELD_VALIDATION
