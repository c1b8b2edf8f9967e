"""Property-based tests for configuration management."""

import os
from unittest.mock import patch

import pytest
from hypothesis import given
from hypothesis import strategies as st

from text_weather.config import Config


class TestConfigProperties:
    """Property-based tests for Config class."""

    @given(
        st.integers(min_value=1, max_value=10**6),
        st.integers(min_value=1, max_value=10**6),
    )
    def test_numeric_settings_property(self, timeout, chunk_size):
        """
        Property 12: Numeric Settings

        For any positive timeout and chunk size set in the environment, the
        feed configuration carries exactly those values.
        """
        env = {
            "TEXT_WEATHER_TIMEOUT": str(timeout),
            "TEXT_WEATHER_CHUNK_SIZE": f" {chunk_size} ",
        }
        with patch.dict(os.environ, env, clear=True):
            feed_config = Config().get_feed_config()

        assert feed_config.timeout == timeout
        assert feed_config.chunk_size == chunk_size

    @given(st.sampled_from(["http", "ftp", "file", "gopher", "ws"]), st.text(
        alphabet="abcdefghijklmnopqrstuvwxyz0123456789/.-", min_size=1, max_size=40
    ))
    def test_https_only_property(self, scheme, rest):
        """
        Property 13: HTTPS Only

        For any feed URL whose scheme is not https, building the feed
        configuration fails.
        """
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

        with pytest.raises(ValueError, match="HTTPS"):
            config.get_feed_config(f"{scheme}://{rest}")
