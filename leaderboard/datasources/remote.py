"""Remote HTTP metrics endpoint data source."""

import asyncio
import logging
from typing import Any, Optional

import httpx

from leaderboard.errors import MalformedPayload, SourceUnavailable
from .base import DataSource, ensure_record_list

logger = logging.getLogger(__name__)

# API constants
REQUEST_TIMEOUT = 30.0
MAX_RETRIES = 3
RETRY_DELAY = 2.0


class RemoteDataSource(DataSource):
    """
    Data source that GETs a JSON array of metrics from a live endpoint.

    Timeouts are retried a bounded number of times; every other failure is
    reported immediately so the caller can fall back to cached data.
    """

    def __init__(
        self,
        url: str,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize remote data source.

        Args:
            url: Endpoint returning the iteration's metrics
            timeout: Per-request timeout in seconds
            max_retries: Retries after a timed out request
            retry_delay: Seconds to wait between retries
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _make_request(self, retry_count: int = 0) -> httpx.Response:
        """
        Make the GET request with timeout handling and retries.

        Args:
            retry_count: Current retry attempt

        Returns:
            Successful HTTP response
        """
        client = await self._get_client()

        try:
            response = await client.get(self.url)
            response.raise_for_status()
            return response

        except httpx.TimeoutException as e:
            if retry_count < self.max_retries:
                logger.warning(
                    f"Request to {self.url} timed out (attempt {retry_count + 1}/{self.max_retries}). "
                    f"Retrying in {self.retry_delay}s..."
                )
                await asyncio.sleep(self.retry_delay)
                return await self._make_request(retry_count + 1)
            logger.error(f"Request to {self.url} failed after {self.max_retries} retries: {e}")
            raise SourceUnavailable(f"Timed out fetching {self.url}") from e

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error {e.response.status_code} for {self.url}")
            raise SourceUnavailable(
                f"{self.url} responded with HTTP {e.response.status_code}"
            ) from e

        except httpx.HTTPError as e:
            logger.error(f"Transport error for {self.url}: {e}")
            raise SourceUnavailable(f"Could not reach {self.url}: {e}") from e

    async def fetch(self) -> list[dict[str, Any]]:
        response = await self._make_request()
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Response from {self.url} is not valid JSON: {e}")
            raise MalformedPayload(f"Response from {self.url} is not valid JSON") from e
        return ensure_record_list(data, self.url)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
