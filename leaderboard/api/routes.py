"""API routes for the leaderboard service."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from leaderboard.errors import MalformedPayload, SourceUnavailable
from leaderboard.models import (
    Iteration,
    It1Metric,
    It2Metric,
    It3Metric,
    LeaderboardResponse,
    SortColumn,
    get_schema,
)
from leaderboard.services import LeaderboardService, LeaderboardView, parse_sort
from .dependencies import get_leaderboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")

SORT_DESCRIPTION = (
    "Display sort as comma-separated columns, '-' prefix for descending. "
    "Unknown columns are ignored. Ranks are not affected."
)


async def _serve(
    service: LeaderboardService,
    iteration: Iteration,
    sort: Optional[list[str]],
) -> LeaderboardResponse:
    try:
        view = await service.get_leaderboard(iteration, sort=parse_sort(sort))
    except (SourceUnavailable, MalformedPayload) as e:
        logger.error(f"{iteration.slug} leaderboard unavailable: {e}")
        raise HTTPException(
            status_code=503,
            detail=f"Leaderboard {iteration.slug} is temporarily unavailable",
        ) from e
    return _to_response(view)


def _to_response(view: LeaderboardView) -> LeaderboardResponse:
    response_model = LeaderboardResponse[get_schema(view.iteration).metric_model]
    return response_model(
        iteration=int(view.iteration),
        lastUpdated=datetime.fromtimestamp(view.computed_at, tz=timezone.utc),
        stale=view.stale,
        sort=[SortColumn(column=column, direction=direction) for column, direction in view.sort],
        metrics=view.metrics,
    )


@router.get("/leaderboard/it1", response_model=LeaderboardResponse[It1Metric])
async def get_it1_leaderboard(
    sort: Optional[list[str]] = Query(
        None,
        description=SORT_DESCRIPTION,
        examples=["-liveness,participation"],
    ),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """
    Get the final iteration 1 leaderboard.

    Default ranking: participation, liveness, latest reported timestamp (all descending).
    """
    return await _serve(service, Iteration.IT1, sort)


@router.get("/leaderboard/it2", response_model=LeaderboardResponse[It2Metric])
async def get_it2_leaderboard(
    sort: Optional[list[str]] = Query(
        None,
        description=SORT_DESCRIPTION,
        examples=["-num_votes"],
    ),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """
    Get the live iteration 2 leaderboard.

    Default ranking: votes, participation, liveness, latest reported timestamp (all descending).
    """
    return await _serve(service, Iteration.IT2, sort)


@router.get("/leaderboard/it3", response_model=LeaderboardResponse[It3Metric])
async def get_it3_leaderboard(
    sort: Optional[list[str]] = Query(
        None,
        description=SORT_DESCRIPTION,
        examples=["-last_epoch_performance"],
    ),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """
    Get the live iteration 3 leaderboard.

    Default ranking: rewards growth, liveness, last epoch performance (all descending).
    """
    return await _serve(service, Iteration.IT3, sort)
