#!/usr/bin/env python3
"""
Leaderboard table printer.

Fetches, ranks and prints one iteration's leaderboard using the same
configuration as the API server.

Usage:
    leaderboard-cli <it1|it2|it3> [--sort=-liveness,participation] [--limit=25]
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from tabulate import tabulate

from leaderboard.app import build_service
from leaderboard.config import Config
from leaderboard.errors import LeaderboardError
from leaderboard.main import LOG_FORMAT
from leaderboard.models import Iteration, MetricField, get_schema
from leaderboard.services import LeaderboardService, LeaderboardView, parse_sort

TIMESTAMP_FIELDS = {MetricField.LATEST_REPORTED_TIMESTAMP}


def format_timestamp(seconds: Optional[float]) -> str:
    """Format seconds since epoch for display"""
    if seconds is None:
        return "-"
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def build_table(view: LeaderboardView, limit: Optional[int] = None) -> tuple[list[list], list[str]]:
    """Turn a leaderboard view into tabulate rows and headers"""
    columns = [MetricField(name) for name in get_schema(view.iteration).metric_model.model_fields]
    rows = []
    for metric in view.metrics[:limit]:
        row = []
        for field in columns:
            value = metric.value_of(field)
            if field in TIMESTAMP_FIELDS:
                value = format_timestamp(value)
            elif value is None:
                value = "-"
            row.append(value)
        rows.append(row)
    return rows, [field.value for field in columns]


async def fetch_view(service: LeaderboardService, iteration: Iteration, sort: list[str]) -> LeaderboardView:
    try:
        return await service.get_leaderboard(iteration, sort=parse_sort(sort))
    finally:
        await service.close()


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Print a ranked leaderboard for one iteration"
    )
    parser.add_argument(
        "iteration",
        choices=[iteration.slug for iteration in Iteration],
        help="Leaderboard iteration"
    )
    parser.add_argument(
        "--sort",
        action="append",
        default=[],
        help="Display sort, e.g. -liveness,participation (ranks are unaffected)"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Only print the first N rows"
    )

    args = parser.parse_args()

    config = Config.from_env()
    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)

    iteration = Iteration(int(args.iteration[2:]))
    service = build_service(config)

    try:
        view = asyncio.run(fetch_view(service, iteration, args.sort))
    except LeaderboardError as e:
        print(f"Error: {e}")
        sys.exit(1)

    rows, headers = build_table(view, args.limit)
    print(tabulate(rows, headers=headers, tablefmt="grid"))
    print()
    print(f"Last updated: {format_timestamp(view.computed_at)} UTC")


if __name__ == "__main__":
    main()
