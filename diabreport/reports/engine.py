"""ReportEngine — main entry point for report runs.

Usage::

    from diabreport import ReportEngine
    from diabreport.sources import JsonFileRecordSource

    engine = ReportEngine(JsonFileRecordSource("store.json"))
    dataset = engine.run("foods", "2024-01-01", "2024-01-31")
    engine.export(dataset, "csv").write("exports")
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from diabreport.config import DEFAULT_OUTPUT_DIR, DEFAULT_PAGE_SIZE, DEFAULT_TIMEZONE
from diabreport.config_manager import as_bool, configure_logging
from diabreport.exporters.base import ExportArtifact, Exporter
from diabreport.exporters.csv_exporter import CSVExporter
from diabreport.exporters.pdf_exporter import PDFExporter
from diabreport.reports.assembler import assemble
from diabreport.reports.dataset import Dataset
from diabreport.reports.errors import ExportError, ReportFetchError, ReportValidationError
from diabreport.reports.request import Page, ReportRequest, paginate
from diabreport.sources.base import RecordSource, report_filters
from diabreport.sources.json_file import JsonFileRecordSource
from diabreport.sources.memory import InMemoryRecordSource

logger = logging.getLogger(__name__)


class ReportEngine:
    """Validate, fetch, assemble and export report runs.

    Parameters
    ----------
    source:
        Record source queried once per run.
    tz:
        Time zone for every date shown to the reader.
    output_dir:
        Default directory for :meth:`save`.
    pdf_compression:
        Compress PDF page streams.
    """

    def __init__(
        self,
        source: RecordSource,
        *,
        tz: str = DEFAULT_TIMEZONE,
        output_dir: str | Path = DEFAULT_OUTPUT_DIR,
        pdf_compression: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.source = source
        self.tz = ZoneInfo(tz)
        self.output_dir = Path(output_dir)
        self.page_size = page_size
        self._exporters: dict[str, Exporter] = {
            "csv": CSVExporter(self.tz),
            "pdf": PDFExporter(self.tz, compress=pdf_compression),
        }

    @classmethod
    def from_config(cls, config: dict[str, str], source: RecordSource | None = None) -> ReportEngine:
        """Build an engine from a :class:`ConfigManager` dict.

        Without an explicit *source*, ``DIABREPORT_DATA_FILE`` is used, or
        an empty in-memory source when that is unset.
        """
        configure_logging(config.get("DIABREPORT_LOG_LEVEL", "INFO"))
        if source is None:
            data_file = config.get("DIABREPORT_DATA_FILE", "")
            source = JsonFileRecordSource(data_file) if data_file else InMemoryRecordSource()
        return cls(
            source,
            tz=config.get("DIABREPORT_TIMEZONE") or DEFAULT_TIMEZONE,
            output_dir=config.get("DIABREPORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
            pdf_compression=as_bool(config.get("DIABREPORT_PDF_COMPRESSION")),
            page_size=int(config.get("DIABREPORT_PAGE_SIZE") or DEFAULT_PAGE_SIZE),
        )

    def today(self) -> date:
        """The caller's calendar date in the engine's time zone."""
        return datetime.now(self.tz).date()

    def request(
        self,
        report_type: Any,
        start: Any,
        end: Any,
        *,
        page_size: int | None = None,
        today: date | None = None,
    ) -> ReportRequest:
        """Validate raw input; raises ReportValidationError before any fetch."""
        return ReportRequest.build(
            report_type,
            start,
            end,
            page_size=page_size or self.page_size,
            today=today or self.today(),
        )

    def generate(self, request: ReportRequest, *, generated_at: datetime | None = None) -> Dataset:
        """Fetch the records of *request* and assemble its Dataset.

        Raises
        ------
        ReportFetchError
            If the source raises.  The original exception is chained.
        """
        report_type = request.report_type
        filters = report_filters(report_type, request.start, request.end)
        try:
            records = self.source.fetch_records(report_type.collection, filters)
        except Exception as exc:
            logger.exception(
                "Fetching %s for %s..%s failed", report_type.collection, request.start, request.end
            )
            raise ReportFetchError() from exc

        dataset = assemble(
            report_type,
            records,
            request.start,
            request.end,
            generated_at=generated_at or datetime.now(timezone.utc),
            tz=self.tz,
        )
        logger.info(
            "Generated %s report %s..%s with %d rows",
            report_type.value, request.start, request.end, dataset.row_count,
        )
        return dataset

    def run(self, report_type: Any, start: Any, end: Any, *, today: date | None = None) -> Dataset:
        """Validate and generate in one call."""
        return self.generate(self.request(report_type, start, end, today=today))

    def export(self, dataset: Dataset, fmt: str) -> ExportArtifact:
        """Serialize *dataset* as 'csv' or 'pdf'.

        Raises
        ------
        ReportValidationError
            For an unknown format.
        ExportError
            If serialization fails.  This is a defect, logged in full.
        """
        exporter = self._exporters.get(fmt.lower())
        if exporter is None:
            raise ReportValidationError(f"Formato de exportação desconhecido: {fmt}")
        try:
            artifact = exporter.export(dataset)
        except Exception as exc:
            logger.exception("Exporting %s as %s failed", dataset.report_type.value, fmt)
            raise ExportError(f"Erro ao exportar relatório em {fmt.upper()}") from exc
        logger.info("Exported %s (%d bytes)", artifact.filename, artifact.size)
        return artifact

    def export_csv(self, dataset: Dataset) -> ExportArtifact:
        return self.export(dataset, "csv")

    def export_pdf(self, dataset: Dataset) -> ExportArtifact:
        return self.export(dataset, "pdf")

    def save(self, artifact: ExportArtifact, directory: str | Path | None = None) -> Path:
        return artifact.write(directory or self.output_dir)

    def page(self, dataset: Dataset, number: int = 1, page_size: int | None = None) -> Page:
        """On-screen page of *dataset*; exports are unaffected."""
        return paginate(dataset.rows, number, page_size or self.page_size)
