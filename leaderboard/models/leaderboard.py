"""Leaderboard response models for the API."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, ConfigDict

from .fields import MetricField, SortDirection
from .metric import MetricRecord

M = TypeVar("M", bound=MetricRecord)


class SortColumn(BaseModel):
    """A single applied display-sort column."""
    column: MetricField
    direction: SortDirection = Field(description="1 ascending, -1 descending")


class LeaderboardResponse(BaseModel, Generic[M]):
    """
    A ranked leaderboard for one iteration.

    ``metrics`` are in display order; ``rank`` always reflects the default
    ranking regardless of the requested sort.
    """
    model_config = ConfigDict(populate_by_name=True)

    iteration: int
    lastUpdated: datetime = Field(description="When the ranking was computed (UTC)")
    stale: bool = Field(default=False, description="True when served from an expired cache after a failed refresh")
    sort: list[SortColumn] = Field(default_factory=list, description="Applied display sort, empty for default order")
    metrics: list[M]
