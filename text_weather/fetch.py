"""Feed download for text-weather."""

from urllib.parse import urlparse

import requests

from .logging_config import create_execution_logger

USER_AGENT = "text-weather/1.0 (RSS weather forecast reader)"


class FeedFetcher:
    """Downloads the raw feed document over HTTPS."""

    def __init__(self, timeout: int = 30, execution_id: str | None = None):
        """Initialize FeedFetcher with configuration.

        Args:
            timeout: HTTP request timeout in seconds
            execution_id: Execution ID for logging context
        """
        self.timeout = timeout
        self.logger = create_execution_logger("feed_fetcher", execution_id)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

        self.logger.info("FeedFetcher initialized", timeout=timeout)

    def fetch(self, feed_url: str) -> str:
        """Download a feed document.

        Args:
            feed_url: URL of the weather feed

        Returns:
            The response body as text

        Raises:
            ValueError: If feed URL is not HTTPS
            requests.RequestException: If feed download fails
        """
        parsed_url = urlparse(feed_url)
        if parsed_url.scheme != "https":
            error_msg = f"Feed URL must use HTTPS protocol: {feed_url}"
            self.logger.error(error_msg, feed_url=feed_url, scheme=parsed_url.scheme)
            raise ValueError(error_msg)

        try:
            self.logger.info("Downloading feed content", feed_url=feed_url)
            response = self.session.get(feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download feed {feed_url}: {e}",
                feed_url=feed_url,
                error=str(e),
            )
            raise

        self.logger.info(
            "Feed downloaded successfully",
            feed_url=feed_url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response.text
