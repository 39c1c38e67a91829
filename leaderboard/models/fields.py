"""Sortable metric fields and sort directions."""

from enum import Enum, IntEnum


class MetricField(str, Enum):
    """Fields carried by leaderboard metric records."""
    RANK = "rank"
    VALIDATOR = "validator"
    OWNER_ADDRESS = "owner_address"
    LIVENESS = "liveness"
    PARTICIPATION = "participation"
    NUM_VOTES = "num_votes"
    LATEST_REPORTED_TIMESTAMP = "latest_reported_timestamp"
    REWARDS_GROWTH = "rewards_growth"
    LAST_EPOCH = "last_epoch"
    LAST_EPOCH_PERFORMANCE = "last_epoch_performance"
    GOVERNANCE_VOTING_RECORD = "governance_voting_record"


class SortDirection(IntEnum):
    """Direction multiplier applied to each sort key."""
    ASC = 1
    DESC = -1


# Ordered (field, direction) pairs; earlier pairs dominate.
SortSpec = list[tuple[MetricField, SortDirection]]
