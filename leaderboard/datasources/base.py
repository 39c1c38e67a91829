"""Abstract base class for data sources."""

from abc import ABC, abstractmethod
from typing import Any

from leaderboard.errors import MalformedPayload


class DataSource(ABC):
    """
    Abstract interface for leaderboard metric sources.

    Each iteration is backed by one source. This abstraction allows swapping
    between a frozen snapshot file and a live metrics endpoint without
    touching the ranking pipeline.
    """

    @abstractmethod
    async def fetch(self) -> list[dict[str, Any]]:
        """
        Retrieve the raw metric records for one iteration.

        Returns:
            List of raw, untyped records as decoded from JSON

        Raises:
            SourceUnavailable: The source could not be reached or read
            MalformedPayload: The source responded with something other than a JSON array
        """
        pass

    async def close(self) -> None:
        """
        Clean up resources (e.g., close HTTP sessions).

        Override this if the data source holds resources that need cleanup.
        """
        pass


def ensure_record_list(data: Any, origin: str) -> list[dict[str, Any]]:
    """Check that a decoded payload is a JSON array."""
    if not isinstance(data, list):
        raise MalformedPayload(
            f"Expected a JSON array from {origin}, got {type(data).__name__}"
        )
    return data
