"""Report model — types, labels, projection, assembly and column widths."""

from diabreport.reports.assembler import assemble, window_bounds
from diabreport.reports.dataset import Dataset, ProjectedRow
from diabreport.reports.errors import ExportError, ReportError, ReportFetchError, ReportValidationError
from diabreport.reports.projector import project
from diabreport.reports.request import Page, ReportRequest, paginate
from diabreport.reports.types import ReportType
from diabreport.reports.widths import allocate

__all__ = [
    "Dataset",
    "ExportError",
    "Page",
    "ProjectedRow",
    "ReportError",
    "ReportFetchError",
    "ReportRequest",
    "ReportType",
    "ReportValidationError",
    "allocate",
    "assemble",
    "paginate",
    "project",
    "window_bounds",
]
