"""Application configuration."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # API settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Iteration 1 is a frozen snapshot shipped with the service
    it1_snapshot_path: str = "public/it1_leaderboard_final.json"

    # Iterations 2 and 3 are served live by the metrics backend
    it2_url: Optional[str] = None
    it3_url: Optional[str] = None

    cache_ttl_seconds: float = 60.0
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            it1_snapshot_path=os.getenv(
                "LEADERBOARD_IT1_SNAPSHOT_PATH",
                "public/it1_leaderboard_final.json"
            ),
            it2_url=os.getenv("LEADERBOARD_IT2_URL") or None,
            it3_url=os.getenv("LEADERBOARD_IT3_URL") or None,
            cache_ttl_seconds=float(os.getenv("LEADERBOARD_CACHE_TTL", "60")),
            request_timeout=float(os.getenv("LEADERBOARD_REQUEST_TIMEOUT", "30")),
        )
