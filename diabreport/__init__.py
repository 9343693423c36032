"""diabreport — report export engine of the diabetes management console."""

__version__ = "1.0.0"

from diabreport.config_manager import ConfigManager, configure_logging
from diabreport.exporters import CSVExporter, ExportArtifact, PDFExporter, to_csv, to_pdf
from diabreport.reports import (
    Dataset,
    ExportError,
    ProjectedRow,
    ReportError,
    ReportFetchError,
    ReportRequest,
    ReportType,
    ReportValidationError,
    allocate,
    assemble,
    paginate,
    project,
)
from diabreport.reports.engine import ReportEngine
from diabreport.sources import InMemoryRecordSource, JsonFileRecordSource, RecordSource

__all__ = [
    "__version__",
    # Engine
    "ReportEngine",
    "ReportRequest",
    # Model
    "Dataset",
    "ProjectedRow",
    "ReportType",
    "allocate",
    "assemble",
    "paginate",
    "project",
    # Export
    "CSVExporter",
    "ExportArtifact",
    "PDFExporter",
    "to_csv",
    "to_pdf",
    # Sources
    "InMemoryRecordSource",
    "JsonFileRecordSource",
    "RecordSource",
    # Errors
    "ExportError",
    "ReportError",
    "ReportFetchError",
    "ReportValidationError",
    # Config
    "ConfigManager",
    "configure_logging",
]
