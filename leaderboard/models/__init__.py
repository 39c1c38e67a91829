from .fields import MetricField, SortDirection, SortSpec
from .metric import UNRANKED, MetricRecord, It1Metric, It2Metric, It3Metric
from .iteration import Iteration, IterationSchema, SCHEMAS, get_schema
from .leaderboard import LeaderboardResponse, SortColumn

__all__ = [
    "MetricField",
    "SortDirection",
    "SortSpec",
    "UNRANKED",
    "MetricRecord",
    "It1Metric",
    "It2Metric",
    "It3Metric",
    "Iteration",
    "IterationSchema",
    "SCHEMAS",
    "get_schema",
    "LeaderboardResponse",
    "SortColumn",
]
