"""ProjectedRow and Dataset models shared by every exporter."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from diabreport.reports.types import ReportType


class ProjectedRow(BaseModel):
    """One exported record: ordered column key -> display text."""

    id: str = ""
    """Store identifier, or a synthetic ``<type>-<n>`` one when absent."""

    values: dict[str, str] = Field(default_factory=dict)
    """Display text per column key, in the report type's column order."""

    created_at: datetime | None = Field(default=None, exclude=True)
    """Original creation time.  Used for sorting only, never exported."""

    def get(self, key: str, default: str = "") -> str:
        return self.values.get(key, default)


class Dataset(BaseModel):
    """The rows of one report run plus the facts printed around them."""

    report_type: ReportType
    rows: list[ProjectedRow] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    """Timestamp of the run; drives footers and file names."""

    window_start: date | None = None
    window_end: date | None = None

    @property
    def columns(self) -> tuple[str, ...]:
        """Column keys in output order (identifier excluded)."""
        return self.report_type.columns

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_records(self) -> list[dict[str, Any]]:
        """Public row representation: identifier plus display values."""
        return [{"id": row.id, **row.values} for row in self.rows]
