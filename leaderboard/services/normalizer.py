"""Normalization of raw upstream metrics into typed records."""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import ValidationError

from leaderboard.errors import MalformedPayload
from leaderboard.models import (
    UNRANKED,
    Iteration,
    It1Metric,
    It2Metric,
    It3Metric,
    MetricRecord,
)

logger = logging.getLogger(__name__)

# Reported by the iteration 2 backend for validators that never reported
EPOCH_ZERO_TIMESTAMP = "1970-01-01 00:00:00+00:00"

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def to_float(value: Any) -> float:
    """
    Best-effort float coercion.

    Numbers pass through, strings are read up to the first non-numeric
    character, and anything else (None, blank, garbage, NaN, infinity)
    becomes 0.0.
    """
    result = 0.0
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if match:
            result = float(match.group(0))
    # Non-finite values count as garbage
    return result if math.isfinite(result) else 0.0


def to_int(value: Any) -> int:
    """Best-effort integer coercion, truncating toward zero. Defaults to 0."""
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return 0
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            try:
                return int(match.group(0))
            except ValueError:
                # Longer than the int string conversion limit
                return 0
    return 0


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_timestamp(value: Any, epoch_zero_is_blank: bool = False) -> Optional[float]:
    """
    Parse a reported timestamp into seconds since epoch.

    Args:
        value: Raw timestamp, usually an ISO-8601 string
        epoch_zero_is_blank: Treat the epoch-zero sentinel as "never reported"

    Returns:
        Seconds since epoch with sub-second precision, or None if absent
    """
    if _is_blank(value):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            seconds = float(value)
        except OverflowError:
            return None
        return seconds if math.isfinite(seconds) else None

    text = str(value).strip()
    if epoch_zero_is_blank and text == EPOCH_ZERO_TIMESTAMP:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Ignoring unparseable timestamp {text!r}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _require(raw: dict[str, Any], key: str) -> Any:
    value = raw.get(key)
    if _is_blank(value):
        raise MalformedPayload(f"Metric record is missing required field {key!r}")
    return value


def _normalize_it1(raw: dict[str, Any]) -> It1Metric:
    return It1Metric(
        rank=UNRANKED,
        validator=str(_require(raw, "validator")),
        liveness=to_float(raw.get("liveness")),
        participation=to_float(raw.get("participation")),
        latest_reported_timestamp=parse_timestamp(raw.get("latest_reported_timestamp")),
    )


def _normalize_it2(raw: dict[str, Any]) -> It2Metric:
    return It2Metric(
        rank=UNRANKED,
        validator=str(_require(raw, "validator")),
        liveness=to_float(raw.get("liveness")),
        participation=to_float(raw.get("participation")),
        num_votes=to_int(raw.get("num_votes")),
        latest_reported_timestamp=parse_timestamp(
            raw.get("latest_reported_timestamp"), epoch_zero_is_blank=True
        ),
    )


def _normalize_it3(raw: dict[str, Any]) -> It3Metric:
    # Performance and voting record stay as reported; fractions are only
    # interpreted when sorting.
    return It3Metric(
        rank=UNRANKED,
        owner_address=str(_require(raw, "owner_address")),
        liveness=to_float(raw.get("liveness")),
        rewards_growth=to_float(raw.get("rewards_growth")),
        last_epoch=to_int(raw.get("last_epoch")),
        last_epoch_performance=raw.get("last_epoch_performance"),
        governance_voting_record=raw.get("governance_voting_record"),
    )


_NORMALIZERS: dict[Iteration, Callable[[dict[str, Any]], MetricRecord]] = {
    Iteration.IT1: _normalize_it1,
    Iteration.IT2: _normalize_it2,
    Iteration.IT3: _normalize_it3,
}


def normalize(iteration: Iteration, raw: Any) -> MetricRecord:
    """
    Map one raw upstream record onto the iteration's metric model.

    Raises:
        MalformedPayload: The record is not an object or lacks its identifier
    """
    if not isinstance(raw, dict):
        raise MalformedPayload(
            f"Expected a metric object, got {type(raw).__name__}"
        )
    try:
        return _NORMALIZERS[Iteration(iteration)](raw)
    except ValidationError as e:
        raise MalformedPayload(f"Metric record has invalid fields: {e.error_count()} error(s)") from e


def normalize_all(iteration: Iteration, raw_records: list[Any]) -> list[MetricRecord]:
    """
    Normalize a full upstream payload, skipping records that cannot be read.

    Returns:
        Typed records in upstream order
    """
    metrics: list[MetricRecord] = []
    for index, raw in enumerate(raw_records):
        try:
            metrics.append(normalize(iteration, raw))
        except MalformedPayload as e:
            logger.warning(f"Skipping {Iteration(iteration).slug} record #{index}: {e}")

    if raw_records and not metrics:
        raise MalformedPayload(
            f"None of the {len(raw_records)} {Iteration(iteration).slug} records could be read"
        )
    return metrics
