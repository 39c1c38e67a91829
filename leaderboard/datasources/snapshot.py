"""Static JSON snapshot data source."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from leaderboard.errors import MalformedPayload, SourceUnavailable
from .base import DataSource, ensure_record_list

logger = logging.getLogger(__name__)


class SnapshotDataSource(DataSource):
    """
    Data source backed by a final results file that never changes.

    The document is parsed on the first successful fetch and the parsed
    records are reused afterwards. Failed reads are not remembered, so a
    missing file can be fixed without a restart.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize snapshot data source.

        Args:
            path: Path to a JSON file containing an array of metric objects
        """
        self.path = Path(path)
        self._records: Optional[list[dict[str, Any]]] = None

    async def fetch(self) -> list[dict[str, Any]]:
        if self._records is None:
            self._records = await asyncio.to_thread(self._load)
        return self._records

    def _load(self) -> list[dict[str, Any]]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot read snapshot {self.path}: {e}")
            raise SourceUnavailable(f"Snapshot {self.path} is unavailable: {e}") from e
        except UnicodeDecodeError as e:
            logger.error(f"Snapshot {self.path} is not valid UTF-8: {e}")
            raise MalformedPayload(f"Snapshot {self.path} is not valid UTF-8") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Snapshot {self.path} is not valid JSON: {e}")
            raise MalformedPayload(f"Snapshot {self.path} is not valid JSON: {e}") from e

        records = ensure_record_list(data, str(self.path))
        logger.info(f"Loaded {len(records)} records from snapshot {self.path}")
        return records
