"""Dataset assembler — project, filter, deduplicate and sort one report run."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, Mapping
from zoneinfo import ZoneInfo

from diabreport.reports.dataset import Dataset, ProjectedRow
from diabreport.reports.projector import coerce_timestamp, project
from diabreport.reports.types import ReportType

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Only patients show up in the users report; admins live in the same collection
USER_ROLE = "user"


def window_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Widen calendar dates to ``00:00:00.000`` / ``23:59:59.999`` UTC."""
    lower = datetime.combine(start, time.min, tzinfo=timezone.utc)
    upper = datetime.combine(end, time(23, 59, 59, 999000), tzinfo=timezone.utc)
    return lower, upper


def _sort_key(row: ProjectedRow) -> datetime:
    return row.created_at or _EPOCH


def _in_window(moment: datetime | None, bounds: tuple[datetime, datetime] | None) -> bool:
    if moment is None or bounds is None:
        return True
    return bounds[0] <= moment <= bounds[1]


def assemble(
    report_type: ReportType,
    records: Iterable[Mapping[str, Any]],
    window_start: date | None = None,
    window_end: date | None = None,
    *,
    generated_at: datetime | None = None,
    tz: str | ZoneInfo | None = None,
) -> Dataset:
    """Build the Dataset of one report run.

    Parameters
    ----------
    report_type:
        Selects the projector and the column set.
    records:
        Raw records as fetched, normally already filtered by the store.
    window_start, window_end:
        Inclusive calendar window.  Records whose creation time is known
        and falls outside it are dropped; undated records are kept.
    generated_at:
        Run timestamp.  Defaults to now (UTC).
    tz:
        Time zone for the rendered creation dates.

    Returns
    -------
    Dataset
        Rows newest first; undated rows last; ties keep fetch order.
    """
    bounds = None
    if window_start is not None and window_end is not None:
        bounds = window_bounds(window_start, window_end)

    rows: list[ProjectedRow] = []
    seen: set[str] = set()
    skipped_role = skipped_window = duplicates = 0

    for position, record in enumerate(records):
        if report_type is ReportType.USERS and record.get("role") != USER_ROLE:
            skipped_role += 1
            continue
        if not _in_window(coerce_timestamp(record.get("createdAt")), bounds):
            skipped_window += 1
            continue

        row = project(report_type, record, tz=tz)
        if row.id:
            if row.id in seen:
                duplicates += 1
                continue
            seen.add(row.id)
        else:
            row.id = f"{report_type.value}-{position}"
        rows.append(row)

    # sorted() is stable, so equal timestamps keep fetch order
    rows = sorted(rows, key=_sort_key, reverse=True)

    logger.debug(
        "Assembled %s: %d rows (%d non-user, %d outside window, %d duplicate)",
        report_type.value, len(rows), skipped_role, skipped_window, duplicates,
    )

    kwargs: dict[str, Any] = {}
    if generated_at is not None:
        kwargs["generated_at"] = generated_at
    return Dataset(
        report_type=report_type,
        rows=rows,
        window_start=window_start,
        window_end=window_end,
        **kwargs,
    )
