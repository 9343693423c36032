"""Exporters — CSV and PDF renderings of a Dataset."""

from diabreport.exporters.base import ExportArtifact, Exporter, artifact_filename
from diabreport.exporters.csv_exporter import CSVExporter, to_csv
from diabreport.exporters.pdf_exporter import PDFExporter, to_pdf
from diabreport.exporters.pdf_layouts import GenericLayout, PDFLayout, UsersDenseLayout

__all__ = [
    "CSVExporter",
    "ExportArtifact",
    "Exporter",
    "GenericLayout",
    "PDFExporter",
    "PDFLayout",
    "UsersDenseLayout",
    "artifact_filename",
    "to_csv",
    "to_pdf",
]
