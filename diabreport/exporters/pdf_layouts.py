"""Table layouts of the PDF export.

``GenericLayout`` sizes columns with the width allocator and truncates
cell text to what fits the column.  ``UsersDenseLayout`` serves the users
report, which has too many columns for proportional shrinking to stay
readable: it uses hand-tuned widths, abbreviated headers and abbreviated
values instead.
"""

from __future__ import annotations

import abc
import math
from types import MappingProxyType
from typing import Mapping

from diabreport.config import CHARS_PER_MM, TABLE_WIDTH_MM
from diabreport.reports.dataset import Dataset, ProjectedRow
from diabreport.reports.labels import abbreviate_diabetes, abbreviate_gender, column_label, truncate
from diabreport.reports.types import ReportType, require_exhaustive
from diabreport.reports.widths import ColumnWidthPlan, allocate

MISSING = "-"


def max_chars(width_mm: float) -> int:
    """Characters that fit a column *width_mm* wide."""
    return math.floor(width_mm * CHARS_PER_MM)


class PDFLayout(abc.ABC):
    """How one report type's table is laid out inside the shared page frame."""

    body_font_size: float = 8
    header_font_size: float = 9
    body_padding_mm: float = 2.5
    header_padding_mm: float = 3
    center_headers: bool = False

    @abc.abstractmethod
    def headers(self, dataset: Dataset) -> list[str]:
        """Header text per column, in column order."""

    @abc.abstractmethod
    def widths(self, dataset: Dataset) -> ColumnWidthPlan:
        """Column widths in millimetres."""

    @abc.abstractmethod
    def cells(self, row: ProjectedRow, dataset: Dataset, widths: ColumnWidthPlan) -> list[str]:
        """Display text of *row*, one entry per column."""


class GenericLayout(PDFLayout):
    """Allocator widths, dictionary headers, width-derived truncation."""

    def __init__(self, budget_mm: int = TABLE_WIDTH_MM) -> None:
        self.budget_mm = budget_mm

    def headers(self, dataset: Dataset) -> list[str]:
        return [column_label(c) for c in dataset.columns]

    def widths(self, dataset: Dataset) -> ColumnWidthPlan:
        return allocate(dataset.columns, self.budget_mm, dataset.report_type)

    def cells(self, row: ProjectedRow, dataset: Dataset, widths: ColumnWidthPlan) -> list[str]:
        return [
            truncate(row.get(c) or MISSING, max_chars(widths[c]))
            for c in dataset.columns
        ]


# Headers are broken on purpose so they wrap inside the narrow columns
USERS_DENSE_HEADERS: Mapping[str, str] = MappingProxyType({
    "nome": "Nome",
    "email": "E-mail",
    "genero": "Gên",
    "diabetes": "Tipo Diab",
    "duracao": "Dura ção",
    "peso": "Pe so (kg)",
    "altura": "Alt (c m)",
    "imc": "I M C",
    "acompanhamento": "Acomp anham ento",
    "hipertenso": "Hipe rten so",
    "possuiComplicacoes": "Possui Compli cações",
    "descricaoComplicacoes": "Descrição das Complicações",
    "medicamentos": "Medicamentos",
    "status": "Sta tus",
    "dataCadastro": "Data C adastr o",
})

USERS_DENSE_WIDTHS: Mapping[str, int] = MappingProxyType({
    "nome": 28,
    "email": 35,
    "genero": 12,
    "diabetes": 16,
    "duracao": 16,
    "peso": 14,
    "altura": 14,
    "imc": 12,
    "acompanhamento": 18,
    "hipertenso": 16,
    "possuiComplicacoes": 18,
    "descricaoComplicacoes": 35,
    "medicamentos": 35,
    "status": 14,
    "dataCadastro": 20,
})

USERS_DENSE_LIMITS: Mapping[str, int] = MappingProxyType({
    "nome": 25,
    "email": 30,
    "descricaoComplicacoes": 35,
    "medicamentos": 35,
})

_FLAG_COLUMNS = ("acompanhamento", "hipertenso", "possuiComplicacoes")


class UsersDenseLayout(PDFLayout):
    """Fixed widths and abbreviations for the fifteen-column users table."""

    body_font_size = 7
    header_font_size = 7
    body_padding_mm = 1.5
    header_padding_mm = 2
    center_headers = True

    def headers(self, dataset: Dataset) -> list[str]:
        return [USERS_DENSE_HEADERS.get(c, column_label(c)) for c in dataset.columns]

    def widths(self, dataset: Dataset) -> ColumnWidthPlan:
        return {c: USERS_DENSE_WIDTHS[c] for c in dataset.columns}

    def cells(self, row: ProjectedRow, dataset: Dataset, widths: ColumnWidthPlan) -> list[str]:
        return [self._cell(c, row.get(c)) for c in dataset.columns]

    @staticmethod
    def _cell(key: str, value: str) -> str:
        if key in _FLAG_COLUMNS:
            return "Sim" if value == "Sim" else "Não"
        if key == "status":
            return "Ativo" if value == "Ativo" else "Inativo"
        text = value or MISSING
        if key == "genero":
            return abbreviate_gender(text)
        if key == "diabetes":
            return abbreviate_diabetes(text)
        if key in USERS_DENSE_LIMITS:
            return truncate(text, USERS_DENSE_LIMITS[key])
        return text


LAYOUTS: Mapping[ReportType, type[PDFLayout]] = MappingProxyType({
    ReportType.USERS: UsersDenseLayout,
    ReportType.MEDICATIONS: GenericLayout,
    ReportType.FOODS: GenericLayout,
    ReportType.COMPLICATIONS: GenericLayout,
})

require_exhaustive(LAYOUTS, "LAYOUTS")


def layout_for(report_type: ReportType) -> PDFLayout:
    return LAYOUTS[report_type]()
