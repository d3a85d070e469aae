"""
Chart payload parser for converting raw source text into ordered samples.

Expected source format:
{
    "chart": {
        "result": [{
            "timestamp": [1704205800, 1704292200],
            "indicators": {"quote": [{"close": [4742.830078125, null]}]}
        }],
        "error": null
    }
}

Timestamps are unix seconds and pair with the close price at the same index.
"""

import json
import math
from typing import Any, Optional

from ..errors import MalformedPayloadError
from ..logging.config import get_logger
from ..utils.time import date_from_timestamp
from .models import Sample

logger = get_logger(__name__)

EXPECTED_FORMAT = "chart.result[0].{timestamp, indicators.quote[0].close}"


def looks_like_json(text: str) -> bool:
    """True if the trimmed text opens with an object or array token."""
    trimmed = text.strip()
    return trimmed.startswith("{") or trimmed.startswith("[")


def parse_chart_payload(raw_text: str) -> list[Sample]:
    """
    Parse a raw chart payload into samples in source order.

    Args:
        raw_text: Response body as returned by a relay

    Returns:
        List of Sample objects, null and non-positive prices dropped

    Raises:
        MalformedPayloadError: If the body is not JSON or the results envelope,
            timestamp list or close list is missing, or the lists differ in length
    """
    if not looks_like_json(raw_text):
        raise MalformedPayloadError(
            "Response is not JSON",
            raw_data=raw_text[:200],
            expected_format=EXPECTED_FORMAT,
        )

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(
            f"Failed to parse JSON response: {e}",
            raw_data=raw_text[:200],
            expected_format=EXPECTED_FORMAT,
        ) from e

    result = _extract_result(payload)

    # The source omits the timestamp list for ranges without trading days
    if "timestamp" not in result:
        return []

    timestamps = result["timestamp"]
    closes = _extract_closes(result)

    if not isinstance(timestamps, list):
        raise MalformedPayloadError("'timestamp' must be a list", expected_format=EXPECTED_FORMAT)

    if len(timestamps) != len(closes):
        raise MalformedPayloadError(
            f"Timestamp and close lists differ in length: {len(timestamps)} vs {len(closes)}",
            expected_format=EXPECTED_FORMAT,
            context={"timestamps": len(timestamps), "closes": len(closes)},
        )

    samples = []
    dropped = 0
    for ts, close in zip(timestamps, closes):
        price = _normalize_price(close)
        if price is None:
            dropped += 1
            continue
        try:
            samples.append(Sample(date=date_from_timestamp(int(ts)), price=price))
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise MalformedPayloadError(
                f"Invalid timestamp {ts!r}: {e}",
                expected_format=EXPECTED_FORMAT,
            ) from e

    if dropped:
        logger.debug("Dropped samples without a usable price", dropped=dropped, kept=len(samples))

    return samples


def _extract_result(payload: Any) -> dict[str, Any]:
    """Return chart.result[0], raising MalformedPayloadError if absent."""
    if not isinstance(payload, dict) or not isinstance(payload.get("chart"), dict):
        raise MalformedPayloadError("Missing 'chart' envelope", expected_format=EXPECTED_FORMAT)

    chart = payload["chart"]
    results = chart.get("result")

    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        source_error = chart.get("error")
        description = None
        if isinstance(source_error, dict):
            description = source_error.get("description") or source_error.get("code")
        message = "Missing chart results"
        if description:
            message = f"{message}: {description}"
        raise MalformedPayloadError(
            message,
            expected_format=EXPECTED_FORMAT,
            context={"source_error": source_error} if source_error else None,
        )

    return results[0]


def _extract_closes(result: dict[str, Any]) -> list[Any]:
    """Return indicators.quote[0].close, raising MalformedPayloadError if absent."""
    try:
        closes = result["indicators"]["quote"][0]["close"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedPayloadError(
            "Missing close price list",
            expected_format=EXPECTED_FORMAT,
        ) from e

    if not isinstance(closes, list):
        raise MalformedPayloadError("'close' must be a list", expected_format=EXPECTED_FORMAT)

    return closes


def _normalize_price(value: Any) -> Optional[float]:
    """Round a close to 2 decimals, None for null, non-numeric, NaN or non-positive."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(price) or math.isinf(price) or price <= 0:
        return None
    rounded = round(price, 2)
    return rounded if rounded > 0 else None
