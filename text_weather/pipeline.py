"""Entry point that fetches, parses and summarizes the weather feed."""

import json
import os
import sys
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from .config import Config
from .fetch import FeedFetcher
from .forecast import Forecast
from .logging_config import create_execution_logger, setup_structured_logging
from .models import ForecastItem
from .parser import parse_document

setup_structured_logging(os.getenv("LOG_LEVEL", "INFO"))


def _forecast_entry(item: ForecastItem, forecast: Forecast) -> dict[str, Any]:
    point = item.geo_point.value
    return {
        "day": forecast.summary.day_label,
        "summary": forecast.summary.summary,
        "details": asdict(forecast.details),
        "published": item.pub_date.value.isoformat(),
        "link": item.link.value,
        "latitude": point.latitude,
        "longitude": point.longitude,
    }


def run(feed_url: str | None = None, execution_id: str | None = None) -> dict[str, Any]:
    """Fetch the feed, parse it and build one forecast per item.

    Args:
        feed_url: Feed to read; defaults to the configured feed
        execution_id: Execution ID for logging context

    Returns:
        Result dictionary. ``status`` is ``"ok"`` with the channel title and
        forecasts, or ``"error"`` with the error message and no forecasts.
    """
    if not execution_id:
        execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start(feed_url=feed_url)

    metrics: dict[str, Any] = {
        "items_found": 0,
        "forecasts_built": 0,
        "errors": [],
    }

    try:
        config = Config()
        feed_config = config.get_feed_config(feed_url)
        main_logger.info("Configuration initialized", feed_url=feed_config.feed_url)

        fetcher = FeedFetcher(timeout=feed_config.timeout, execution_id=execution_id)
        body = fetcher.fetch(feed_config.feed_url)

        channel = parse_document(
            body, execution_id=execution_id, chunk_size=feed_config.chunk_size
        )
        metrics["items_found"] = len(channel.items)
        main_logger.info(
            f"Processing feed: {channel.title.value}",
            feed_url=feed_config.feed_url,
            items_count=len(channel.items),
        )

        forecasts = []
        for item in channel.items:
            forecasts.append(_forecast_entry(item, Forecast.from_item(item)))
            metrics["forecasts_built"] += 1

        main_logger.log_metrics(metrics)
        main_logger.log_execution_end(success=True, metrics=metrics)

        return {
            "status": "ok",
            "execution_id": execution_id,
            "channel": channel.title.value,
            "published": channel.pub_date.value.isoformat(),
            "forecasts": forecasts,
            "metrics": metrics,
        }

    except Exception as e:
        error_msg = f"Weather feed run failed: {e}"
        main_logger.error(error_msg, error=str(e))
        metrics["errors"].append(error_msg)
        main_logger.log_execution_end(success=False, metrics=metrics, error=error_msg)

        return {
            "status": "error",
            "execution_id": execution_id,
            "error": error_msg,
            "metrics": metrics,
        }


def main() -> int:
    """Run once against the configured feed and print the result as JSON."""
    result = run()
    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    return 0 if result["status"] == "ok" else 1


if __name__ == "__main__":
    sys.exit(main())
