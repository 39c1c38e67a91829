"""Multi-key sorting and rank assignment for metric records."""

import logging
import math
from fractions import Fraction
from typing import Any, Iterable, Union

from leaderboard.errors import InvalidFractionLiteral
from leaderboard.models import MetricRecord, SortDirection, SortSpec

logger = logging.getLogger(__name__)

Comparable = Union[int, float, Fraction]

MISSING = -math.inf


def parse_fraction(value: str) -> Fraction:
    """
    Parse an "n/d" literal into an exact rational.

    Fractions equal to 1 are scaled by their raw denominator so that, among
    perfect ratios, the one with more samples ranks higher ("7/7" > "3/3").

    Raises:
        InvalidFractionLiteral: Not exactly two integers, or a zero denominator
    """
    parts = [part.strip() for part in value.split("/")]
    if len(parts) != 2:
        raise InvalidFractionLiteral(value)

    try:
        numerator, denominator = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidFractionLiteral(value) from e
    if denominator == 0:
        raise InvalidFractionLiteral(value, "zero denominator")

    fraction = Fraction(numerator, denominator)
    if fraction == 1:
        fraction *= denominator
    return fraction


def to_comparable(value: Any) -> Comparable:
    """Turn a raw field value into a number; unset or unreadable values become -inf."""
    if value is None:
        return MISSING
    if isinstance(value, str):
        if "/" in value:
            try:
                return parse_fraction(value)
            except InvalidFractionLiteral as e:
                logger.warning(f"{e}; sorting as missing")
                return MISSING
        try:
            value = float(value)
        except ValueError:
            logger.warning(f"Non-numeric sort value {value!r}; sorting as missing")
            return MISSING
    if isinstance(value, float) and not math.isfinite(value):
        logger.warning(f"Non-finite sort value {value!r}; sorting as missing")
        return MISSING
    return value


def sort_value(value: Any, direction: SortDirection) -> Comparable:
    """Fold the direction into the comparable value."""
    return to_comparable(value) * int(direction)


def sort_key(record: MetricRecord, spec: SortSpec) -> tuple:
    """Composite key for one record; earlier spec entries dominate."""
    return tuple(
        sort_value(record.value_of(field), direction)
        for field, direction in spec
    )


def sort_metrics(records: Iterable[MetricRecord], spec: SortSpec) -> list[MetricRecord]:
    """
    Order records by a sort spec.

    Returns a new list; the input is left untouched. The sort is stable, so
    records equal on every key keep their input order.
    """
    return sorted(records, key=lambda record: sort_key(record, spec))


def assign_ranks(records: list[MetricRecord]) -> list[MetricRecord]:
    """Set rank = position + 1 on records that are already in ranking order."""
    for i, record in enumerate(records):
        record.rank = i + 1
    return records
