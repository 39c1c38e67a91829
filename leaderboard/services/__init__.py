from .cache import CacheEntry, LeaderboardCache
from .leaderboard_service import LeaderboardService, LeaderboardView
from .normalizer import normalize, normalize_all
from .query import apply_display_sort, filter_sort, parse_sort
from .ranking import assign_ranks, sort_key, sort_metrics

__all__ = [
    "CacheEntry",
    "LeaderboardCache",
    "LeaderboardService",
    "LeaderboardView",
    "normalize",
    "normalize_all",
    "apply_display_sort",
    "filter_sort",
    "parse_sort",
    "assign_ranks",
    "sort_key",
    "sort_metrics",
]
