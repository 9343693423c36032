"""Record source backed by a JSON export of the document store.

The file holds one list of records per collection::

    {
      "users": [{"id": "u1", "name": "Ana", "role": "user",
                 "createdAt": "2024-01-10T12:00:00Z"}],
      "foods": [...]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from diabreport.sources.base import Filter, RawRecord, RecordSource
from diabreport.sources.memory import InMemoryRecordSource

logger = logging.getLogger(__name__)


class JsonFileRecordSource(RecordSource):
    """Load a JSON export lazily and query it in memory.

    The file is read on the first fetch.  A missing or malformed file
    raises on that fetch, so the report run fails instead of reporting
    zero records.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._memory: InMemoryRecordSource | None = None

    def is_available(self) -> bool:
        return self.path.is_file()

    def _load(self) -> InMemoryRecordSource:
        if self._memory is None:
            if not self.path.is_file():
                raise FileNotFoundError(f"Record file not found: {self.path}")
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"{self.path} must hold an object of collections")
            self._memory = InMemoryRecordSource(
                {name: records for name, records in data.items() if isinstance(records, list)}
            )
            logger.info("Loaded record file %s (%d collections)", self.path, len(data))
        return self._memory

    def fetch_records(self, collection: str, filters: list[Filter]) -> list[RawRecord]:
        return self._load().fetch_records(collection, filters)
