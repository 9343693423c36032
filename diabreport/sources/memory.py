"""In-memory record source.  Evaluates filters locally."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from diabreport.sources.base import Filter, RawRecord, RecordSource

logger = logging.getLogger(__name__)


class InMemoryRecordSource(RecordSource):
    """Serve records from plain dicts keyed by collection name.

    Parameters
    ----------
    collections:
        ``{"users": [...], "foods": [...]}``.  Records are copied on the
        way in so later edits by the caller do not leak into reports.
    """

    def __init__(self, collections: Mapping[str, Iterable[RawRecord]] | None = None) -> None:
        self._collections: dict[str, list[dict]] = {}
        for name, records in (collections or {}).items():
            self.add_records(name, records)

    def add_records(self, collection: str, records: Iterable[RawRecord]) -> None:
        self._collections.setdefault(collection, []).extend(dict(r) for r in records)

    def fetch_records(self, collection: str, filters: list[Filter]) -> list[RawRecord]:
        records = self._collections.get(collection, [])
        matched = [r for r in records if all(f.matches(r) for f in filters)]
        logger.debug("Fetched %d/%d records from %s", len(matched), len(records), collection)
        return matched
