"""ReportRequest validation and the on-screen pagination view."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, Field

from diabreport.config import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from diabreport.reports.errors import ReportValidationError
from diabreport.reports.types import ReportType

T = TypeVar("T")

MSG_TYPE_REQUIRED = "Selecione o tipo de relatório"
MSG_DATES_REQUIRED = "Data inicial e final são obrigatórias"
MSG_INVALID_DATE = "Data inválida: use o formato AAAA-MM-DD"
MSG_START_AFTER_END = "Data inicial deve ser menor ou igual à data final"
MSG_FUTURE_DATE = "Não é permitido selecionar datas futuras"
MSG_PAGE_SIZE = "Quantidade de registros por página inválida"


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ReportValidationError(MSG_INVALID_DATE) from exc


class ReportRequest(BaseModel):
    """A validated request for one report run."""

    report_type: ReportType
    start: date
    end: date
    page_size: int = DEFAULT_PAGE_SIZE
    """On-screen page size.  Exported artifacts ignore it."""

    @classmethod
    def build(
        cls,
        report_type: Any,
        start: Any,
        end: Any,
        *,
        page_size: int | None = None,
        today: date | None = None,
    ) -> ReportRequest:
        """Validate raw form input and return a request.

        *start* and *end* are ISO ``YYYY-MM-DD`` strings (or dates).
        *today* is the caller's clock; defaults to the local date.

        Raises
        ------
        ReportValidationError
            On a missing type, missing or malformed dates, start after
            end, a date in the future or an unsupported page size.
        """
        if not report_type:
            raise ReportValidationError(MSG_TYPE_REQUIRED)
        try:
            kind = ReportType.parse(report_type)
        except ValueError as exc:
            raise ReportValidationError(MSG_TYPE_REQUIRED) from exc

        start_date = _parse_date(start)
        end_date = _parse_date(end)
        if start_date is None or end_date is None:
            raise ReportValidationError(MSG_DATES_REQUIRED)
        if start_date > end_date:
            raise ReportValidationError(MSG_START_AFTER_END)
        today = today or date.today()
        if start_date > today or end_date > today:
            raise ReportValidationError(MSG_FUTURE_DATE)

        size = DEFAULT_PAGE_SIZE if page_size is None else page_size
        if size not in PAGE_SIZE_OPTIONS:
            raise ReportValidationError(MSG_PAGE_SIZE)

        return cls(report_type=kind, start=start_date, end=end_date, page_size=size)


class Page(BaseModel):
    """One on-screen page of rows.  Never alters the underlying sequence."""

    items: list[Any] = Field(default_factory=list)
    number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size) if self.page_size else 0

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def paginate(rows: Sequence[T], number: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice *rows* for page *number* (1-based).

    Out-of-range page numbers are clamped to the first/last page.
    """
    if page_size not in PAGE_SIZE_OPTIONS:
        raise ReportValidationError(MSG_PAGE_SIZE)
    total_pages = max(math.ceil(len(rows) / page_size), 1)
    number = min(max(number, 1), total_pages)
    start = (number - 1) * page_size
    return Page(
        items=list(rows[start:start + page_size]),
        number=number,
        page_size=page_size,
        total_items=len(rows),
    )
