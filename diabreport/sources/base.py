"""RecordSource interface and the query filters a report run sends to it."""

from __future__ import annotations

import abc
import logging
from datetime import date
from typing import Any, Literal, Mapping

from pydantic import BaseModel

from diabreport.reports.assembler import USER_ROLE, window_bounds
from diabreport.reports.projector import coerce_timestamp
from diabreport.reports.types import ReportType

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, Any]


class Filter(BaseModel):
    """A single ``field op value`` condition, as understood by the store."""

    field: str
    op: Literal["==", ">=", "<="]
    value: Any = None

    def matches(self, record: RawRecord) -> bool:
        """Evaluate the condition against a record held in memory.

        Ordering comparisons on ``createdAt`` compare timestamps; a record
        without the field never matches.
        """
        if self.field not in record:
            return False
        actual = record[self.field]
        expected = self.value
        if self.op == "==":
            return actual == expected
        if self.field == "createdAt":
            actual = coerce_timestamp(actual)
            expected = coerce_timestamp(expected)
        if actual is None or expected is None:
            return False
        try:
            if self.op == ">=":
                return actual >= expected
            return actual <= expected
        except TypeError:
            return False


def report_filters(report_type: ReportType, start: date, end: date) -> list[Filter]:
    """Filters every report run sends: creation window, plus role for users."""
    lower, upper = window_bounds(start, end)
    filters: list[Filter] = []
    if report_type is ReportType.USERS:
        filters.append(Filter(field="role", op="==", value=USER_ROLE))
    filters.append(Filter(field="createdAt", op=">=", value=lower))
    filters.append(Filter(field="createdAt", op="<=", value=upper))
    return filters


class RecordSource(abc.ABC):
    """Read-only access to the document store's collections."""

    @abc.abstractmethod
    def fetch_records(self, collection: str, filters: list[Filter]) -> list[RawRecord]:
        """Return every record of *collection* matching all *filters*.

        Implementations raise on transport or permission failures; they
        must never hide a failure behind an empty list.
        """

    def is_available(self) -> bool:
        """Return True if the source can currently be queried."""
        return True
