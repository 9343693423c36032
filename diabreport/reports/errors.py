"""Errors raised at the report-run boundary."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for every report-run failure."""


class ReportValidationError(ReportError, ValueError):
    """The request is incomplete or inconsistent; nothing was fetched."""


class ReportFetchError(ReportError):
    """The record source failed or refused the query."""

    def __init__(self, message: str = "Erro ao gerar relatório. Tente novamente.") -> None:
        super().__init__(message)


class ExportError(ReportError):
    """Serializing a dataset failed.  Indicates a bug, not bad input."""
