"""Typed metric records, one model per leaderboard iteration."""

from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, Field

from .fields import MetricField

UNRANKED = -1

# A value that may be formatted as "<numerator>/<denominator>"
FractionCapable = Optional[Union[str, int, float]]


class MetricRecord(BaseModel):
    """
    Common base for per-iteration metric records.

    Records are created fresh on every cache refresh. ``rank`` starts as
    UNRANKED and is assigned exactly once by the default sort.
    """
    FIELDS: ClassVar[frozenset[MetricField]] = frozenset()

    rank: int = Field(default=UNRANKED, description="1-based rank, -1 until ranked")

    def value_of(self, field: MetricField) -> Any:
        """Get the value of a metric field, or None if this record does not carry it."""
        if field not in self.FIELDS:
            return None
        return getattr(self, field.value)


class It1Metric(MetricRecord):
    """Iteration 1 validator metrics (static snapshot)."""
    FIELDS: ClassVar[frozenset[MetricField]] = frozenset({
        MetricField.RANK,
        MetricField.VALIDATOR,
        MetricField.LIVENESS,
        MetricField.PARTICIPATION,
        MetricField.LATEST_REPORTED_TIMESTAMP,
    })

    validator: str
    liveness: float = 0.0
    participation: float = 0.0
    latest_reported_timestamp: Optional[float] = Field(
        default=None, description="Seconds since epoch, None if never reported"
    )


class It2Metric(MetricRecord):
    """Iteration 2 validator metrics, including governance vote count."""
    FIELDS: ClassVar[frozenset[MetricField]] = frozenset({
        MetricField.RANK,
        MetricField.VALIDATOR,
        MetricField.LIVENESS,
        MetricField.PARTICIPATION,
        MetricField.NUM_VOTES,
        MetricField.LATEST_REPORTED_TIMESTAMP,
    })

    validator: str
    liveness: float = 0.0
    participation: float = 0.0
    num_votes: int = 0
    latest_reported_timestamp: Optional[float] = Field(
        default=None, description="Seconds since epoch, None if never reported"
    )


class It3Metric(MetricRecord):
    """Iteration 3 operator metrics keyed by owner address."""
    FIELDS: ClassVar[frozenset[MetricField]] = frozenset({
        MetricField.RANK,
        MetricField.OWNER_ADDRESS,
        MetricField.LIVENESS,
        MetricField.REWARDS_GROWTH,
        MetricField.LAST_EPOCH,
        MetricField.LAST_EPOCH_PERFORMANCE,
        MetricField.GOVERNANCE_VOTING_RECORD,
    })

    owner_address: str
    liveness: float = 0.0
    rewards_growth: float = 0.0
    last_epoch: int = 0
    last_epoch_performance: FractionCapable = Field(
        default=None, description="Usually 'n/d' successful proposals"
    )
    governance_voting_record: FractionCapable = Field(
        default=None, description="Usually 'n/d' proposals voted on"
    )
