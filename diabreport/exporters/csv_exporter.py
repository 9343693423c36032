"""CSV exporter — semicolon-separated, UTF-8 with BOM, CRLF line breaks.

Layout::

    <BOM>Nome;Classificação NOVA;...\r\n
    Arroz;Grupo 1 - In natura/Minimamente processados;...\r\n
    \r\n
    "Relatório gerado em: 19/10/2026, 14:03:05"

Empty values stay empty (no '-' placeholder as in the PDF).
"""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from diabreport.config import CSV_BOM, CSV_DELIMITER, CSV_LINE_TERMINATOR
from diabreport.exporters.base import Exporter
from diabreport.reports.dataset import Dataset
from diabreport.reports.labels import column_label, format_datetime, to_text

logger = logging.getLogger(__name__)

_QUOTE = '"'


def escape_field(value: str, delimiter: str = CSV_DELIMITER) -> str:
    """Quote *value* if it holds the delimiter, a double quote or a newline."""
    if delimiter in value or _QUOTE in value or "\n" in value:
        return _QUOTE + value.replace(_QUOTE, _QUOTE * 2) + _QUOTE
    return value


def unescape_field(field: str) -> str:
    """Inverse of :func:`escape_field` for a single field."""
    if len(field) >= 2 and field.startswith(_QUOTE) and field.endswith(_QUOTE):
        return field[1:-1].replace(_QUOTE * 2, _QUOTE)
    return field


def footer_line(dataset: Dataset, tz: str | ZoneInfo | None = None) -> str:
    return f'"Relatório gerado em: {format_datetime(dataset.generated_at, tz)}"'


class CSVExporter(Exporter):
    """Render a Dataset as spreadsheet-friendly CSV bytes.

    Parameters
    ----------
    tz:
        Time zone of the generated-at footer.
    """

    def __init__(self, tz: str | ZoneInfo | None = None) -> None:
        self.tz = tz

    @property
    def format_name(self) -> str:
        return "csv"

    @property
    def media_type(self) -> str:
        return "text/csv;charset=utf-8"

    def render(self, dataset: Dataset) -> bytes:
        columns = dataset.columns
        lines = [CSV_DELIMITER.join(escape_field(column_label(c)) for c in columns)]
        for row in dataset.rows:
            lines.append(
                CSV_DELIMITER.join(escape_field(to_text(row.get(c) or "")) for c in columns)
            )
        lines.append("")
        lines.append(footer_line(dataset, self.tz))

        content = (CSV_BOM + CSV_LINE_TERMINATOR.join(lines)).encode("utf-8")
        logger.debug("Rendered CSV for %s: %d rows, %d bytes",
                     dataset.report_type.value, dataset.row_count, len(content))
        return content


def to_csv(dataset: Dataset, tz: str | ZoneInfo | None = None) -> bytes:
    """Shortcut for ``CSVExporter(tz).render(dataset)``."""
    return CSVExporter(tz).render(dataset)
