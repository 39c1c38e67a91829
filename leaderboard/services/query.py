"""Caller-requested display sorting."""

from typing import Iterable, Optional, Sequence

from leaderboard.models import MetricField, MetricRecord, SortDirection, SortSpec
from .ranking import sort_metrics

RequestedSort = list[tuple[str, SortDirection]]


def parse_sort(values: Optional[Iterable[str]]) -> RequestedSort:
    """
    Parse sort query values into (column, direction) pairs.

    Each value is a comma-separated list of column names. A leading '-'
    sorts that column descending, a leading '+' (or nothing) ascending.

    Example:
        ["-participation,liveness"] -> [("participation", DESC), ("liveness", ASC)]
    """
    requested: RequestedSort = []
    for value in values or []:
        for item in value.split(","):
            item = item.strip()
            if not item:
                continue
            direction = SortDirection.ASC
            if item[0] in "+-":
                if item[0] == "-":
                    direction = SortDirection.DESC
                item = item[1:].strip()
            if item:
                requested.append((item, direction))
    return requested


def filter_sort(requested: RequestedSort, whitelist: Sequence[MetricField]) -> SortSpec:
    """Keep only whitelisted columns; unknown columns are dropped, not rejected."""
    allowed = {field.value: field for field in whitelist}
    return [
        (allowed[column], direction)
        for column, direction in requested
        if column in allowed
    ]


def apply_display_sort(
    records: Sequence[MetricRecord],
    requested: RequestedSort,
    whitelist: Sequence[MetricField],
) -> tuple[list[MetricRecord], SortSpec]:
    """
    Re-order ranked records for display without touching their ranks.

    Args:
        records: Records in cached (default) order
        requested: Caller-supplied (column, direction) pairs
        whitelist: Columns this iteration may be sorted by

    Returns:
        Tuple of (records in display order, the sort spec actually applied)
    """
    spec = filter_sort(requested, whitelist)
    if not spec:
        return list(records), spec
    return sort_metrics(records, spec), spec
