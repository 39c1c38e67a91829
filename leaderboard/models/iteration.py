"""Leaderboard iterations and their per-iteration schema."""

from dataclasses import dataclass
from enum import IntEnum

from .fields import MetricField, SortDirection, SortSpec
from .metric import It1Metric, It2Metric, It3Metric, MetricRecord


class Iteration(IntEnum):
    """Leaderboard competition iterations."""
    IT1 = 1
    IT2 = 2
    IT3 = 3

    @property
    def slug(self) -> str:
        return f"it{self.value}"


@dataclass(frozen=True)
class IterationSchema:
    """
    Static description of one iteration's leaderboard.

    Attributes:
        iteration: Iteration this schema describes
        metric_model: Record type produced by normalization
        default_sort: Ordering used to assign ranks
        sort_columns: Columns callers may re-sort the display by
    """
    iteration: Iteration
    metric_model: type[MetricRecord]
    default_sort: tuple[tuple[MetricField, SortDirection], ...]
    sort_columns: tuple[MetricField, ...]

    @property
    def cache_key(self) -> str:
        return f"{self.iteration.slug}_leaderboard"

    def default_spec(self) -> SortSpec:
        return list(self.default_sort)


SCHEMAS: dict[Iteration, IterationSchema] = {
    Iteration.IT1: IterationSchema(
        iteration=Iteration.IT1,
        metric_model=It1Metric,
        default_sort=(
            (MetricField.PARTICIPATION, SortDirection.DESC),
            (MetricField.LIVENESS, SortDirection.DESC),
            (MetricField.LATEST_REPORTED_TIMESTAMP, SortDirection.DESC),
        ),
        sort_columns=(
            MetricField.RANK,
            MetricField.LIVENESS,
            MetricField.PARTICIPATION,
            MetricField.LATEST_REPORTED_TIMESTAMP,
        ),
    ),
    Iteration.IT2: IterationSchema(
        iteration=Iteration.IT2,
        metric_model=It2Metric,
        default_sort=(
            (MetricField.NUM_VOTES, SortDirection.DESC),
            (MetricField.PARTICIPATION, SortDirection.DESC),
            (MetricField.LIVENESS, SortDirection.DESC),
            (MetricField.LATEST_REPORTED_TIMESTAMP, SortDirection.DESC),
        ),
        sort_columns=(
            MetricField.RANK,
            MetricField.LIVENESS,
            MetricField.PARTICIPATION,
            MetricField.NUM_VOTES,
            MetricField.LATEST_REPORTED_TIMESTAMP,
        ),
    ),
    Iteration.IT3: IterationSchema(
        iteration=Iteration.IT3,
        metric_model=It3Metric,
        default_sort=(
            (MetricField.REWARDS_GROWTH, SortDirection.DESC),
            (MetricField.LIVENESS, SortDirection.DESC),
            (MetricField.LAST_EPOCH_PERFORMANCE, SortDirection.DESC),
        ),
        sort_columns=(
            MetricField.RANK,
            MetricField.LIVENESS,
            MetricField.REWARDS_GROWTH,
            MetricField.LAST_EPOCH,
            MetricField.LAST_EPOCH_PERFORMANCE,
            MetricField.GOVERNANCE_VOTING_RECORD,
        ),
    ),
}


def get_schema(iteration: Iteration) -> IterationSchema:
    """Get the schema for an iteration."""
    return SCHEMAS[Iteration(iteration)]
