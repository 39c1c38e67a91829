"""Leaderboard service tying sources, normalization, ranking and caching together."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from leaderboard.datasources import DataSource
from leaderboard.errors import MalformedPayload, SourceUnavailable
from leaderboard.models import Iteration, MetricRecord, SortSpec, get_schema
from .cache import LeaderboardCache
from .normalizer import normalize_all
from .query import RequestedSort, apply_display_sort
from .ranking import assign_ranks, sort_metrics

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardView:
    """A leaderboard ready for display."""
    iteration: Iteration
    metrics: list[MetricRecord]
    computed_at: float
    sort: SortSpec = field(default_factory=list)
    stale: bool = False


class LeaderboardService:
    """Service for serving ranked, cached leaderboards per iteration."""

    def __init__(
        self,
        sources: dict[Iteration, DataSource],
        cache: Optional[LeaderboardCache] = None,
    ):
        self.sources = sources
        self.cache = cache if cache is not None else LeaderboardCache()

    async def get_leaderboard(
        self,
        iteration: Iteration,
        sort: Optional[RequestedSort] = None,
    ) -> LeaderboardView:
        """
        Get the ranked leaderboard for an iteration.

        Args:
            iteration: Which leaderboard to serve
            sort: Optional caller-requested display sort; columns outside the
                iteration's whitelist are ignored

        Returns:
            LeaderboardView with records in display order

        Raises:
            SourceUnavailable: Upstream failed and nothing is cached yet
            MalformedPayload: Upstream sent garbage and nothing is cached yet
        """
        schema = get_schema(iteration)
        stale = False

        try:
            entry = await self.cache.get(
                schema.cache_key,
                lambda: self._compute(iteration),
            )
        except (SourceUnavailable, MalformedPayload) as e:
            entry = self.cache.peek(schema.cache_key)
            if entry is None:
                raise
            logger.warning(f"Serving stale {iteration.slug} leaderboard after failed refresh: {e}")
            stale = True

        metrics, applied = apply_display_sort(entry.metrics, sort or [], schema.sort_columns)
        return LeaderboardView(
            iteration=schema.iteration,
            metrics=metrics,
            computed_at=entry.computed_at,
            sort=applied,
            stale=stale,
        )

    async def _compute(self, iteration: Iteration) -> list[MetricRecord]:
        """Fetch, normalize and rank a fresh set of records."""
        schema = get_schema(iteration)
        source = self.sources.get(schema.iteration)
        if source is None:
            raise SourceUnavailable(f"No data source configured for {schema.iteration.slug}")

        raw_records = await source.fetch()
        metrics = normalize_all(schema.iteration, raw_records)
        ranked = sort_metrics(metrics, schema.default_spec())
        return assign_ranks(ranked)

    async def close(self) -> None:
        """Close all data sources."""
        for source in self.sources.values():
            await source.close()
