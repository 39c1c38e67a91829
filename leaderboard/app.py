"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from leaderboard.config import Config
from leaderboard.datasources import DataSource, RemoteDataSource, SnapshotDataSource
from leaderboard.api import router
from leaderboard.api.dependencies import attach_leaderboard_service
from leaderboard.models import Iteration
from leaderboard.services import LeaderboardCache, LeaderboardService

logger = logging.getLogger(__name__)


def build_sources(config: Config) -> dict[Iteration, DataSource]:
    """Create one data source per configured iteration."""
    sources: dict[Iteration, DataSource] = {
        Iteration.IT1: SnapshotDataSource(config.it1_snapshot_path),
    }
    if config.it2_url:
        sources[Iteration.IT2] = RemoteDataSource(config.it2_url, timeout=config.request_timeout)
    else:
        logger.warning("LEADERBOARD_IT2_URL is not set; it2 leaderboard will be unavailable")
    if config.it3_url:
        sources[Iteration.IT3] = RemoteDataSource(config.it3_url, timeout=config.request_timeout)
    else:
        logger.warning("LEADERBOARD_IT3_URL is not set; it3 leaderboard will be unavailable")
    return sources


def build_service(config: Config) -> LeaderboardService:
    """Create the leaderboard service from configuration."""
    return LeaderboardService(
        sources=build_sources(config),
        cache=LeaderboardCache(ttl=config.cache_ttl_seconds),
    )


def create_app(config: Config | None = None, service: LeaderboardService | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration. If None, loads from environment.
        service: Prebuilt leaderboard service. If None, built from config.

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.from_env()

    if service is None:
        service = build_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info("Starting leaderboard API")
        logger.info(f"Iteration 1 snapshot: {config.it1_snapshot_path}")
        logger.info(f"Cache TTL: {config.cache_ttl_seconds}s")

        attach_leaderboard_service(app.state, service)

        yield

        # Shutdown
        logger.info("Shutting down...")
        await service.close()

    app = FastAPI(
        title="Leaderboard API",
        description="Ranked validator leaderboards for each competition iteration",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include API routes
    app.include_router(router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
