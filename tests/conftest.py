import asyncio
from typing import Any

import pytest

from leaderboard.datasources import DataSource
from leaderboard.errors import SourceUnavailable


class FakeDataSource(DataSource):
    """In-memory source that counts fetches and can be told to fail or block."""

    def __init__(self, records: list[dict[str, Any]] | None = None):
        self.records = records or []
        self.fetch_count = 0
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def fetch(self) -> list[dict[str, Any]]:
        self.fetch_count += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return [dict(r) for r in self.records]

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def it1_records():
    return [
        {"validator": "A", "liveness": "0.9", "participation": "0.5", "latest_reported_timestamp": ""},
        {"validator": "B", "liveness": "0.9", "participation": "0.8", "latest_reported_timestamp": "2024-01-01T00:00:00Z"},
        {"validator": "C", "liveness": "0.95", "participation": "0.5", "latest_reported_timestamp": "2024-01-02T00:00:00Z"},
    ]


@pytest.fixture
def it2_records():
    return [
        {"validator": "0xa", "liveness": "0.99", "participation": "0.9", "num_votes": "3",
         "latest_reported_timestamp": "2024-03-01 12:00:00+00:00"},
        {"validator": "0xb", "liveness": "0.50", "participation": "0.4", "num_votes": "7",
         "latest_reported_timestamp": "1970-01-01 00:00:00+00:00"},
        {"validator": "0xc", "liveness": "0.80", "participation": "0.9", "num_votes": "3",
         "latest_reported_timestamp": ""},
    ]


@pytest.fixture
def it3_records():
    return [
        {"owner_address": "0x1", "liveness": 0.9, "rewards_growth": 1.5, "last_epoch": 10,
         "last_epoch_performance": "3/3", "governance_voting_record": "1/2"},
        {"owner_address": "0x2", "liveness": 0.9, "rewards_growth": 1.5, "last_epoch": 10,
         "last_epoch_performance": "7/7", "governance_voting_record": "2/2"},
        {"owner_address": "0x3", "liveness": 0.9, "rewards_growth": 1.5, "last_epoch": 9,
         "last_epoch_performance": "1/2", "governance_voting_record": None},
        {"owner_address": "0x4", "liveness": 0.99, "rewards_growth": 0.2, "last_epoch": 10,
         "last_epoch_performance": "0/5", "governance_voting_record": "0/1"},
    ]


@pytest.fixture
def make_source():
    return FakeDataSource
