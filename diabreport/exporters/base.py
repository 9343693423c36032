"""Abstract Exporter interface and the artifact every exporter returns."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from diabreport.config import FILE_PREFIX
from diabreport.reports.dataset import Dataset
from diabreport.reports.types import ReportType

logger = logging.getLogger(__name__)


def artifact_filename(report_type: ReportType, generated_at: datetime, extension: str) -> str:
    """``relatorio_<type>_<YYYY-MM-DD>.<ext>``; the date is the UTC run date."""
    if generated_at.tzinfo is not None:
        generated_at = generated_at.astimezone(timezone.utc)
    return f"{FILE_PREFIX}_{report_type.value}_{generated_at.date().isoformat()}.{extension}"


@dataclass(frozen=True)
class ExportArtifact:
    """Bytes of one exported file plus its name."""

    content: bytes
    filename: str
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    def write(self, directory: str | Path) -> Path:
        """Write the artifact into *directory* (created if needed)."""
        folder = Path(directory)
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / self.filename
        path.write_bytes(self.content)
        logger.info("Wrote %s (%d bytes)", path, self.size)
        return path

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "media_type": self.media_type,
            "size": self.size,
        }


class Exporter(abc.ABC):
    """Base class for the CSV and PDF exporters."""

    @property
    @abc.abstractmethod
    def format_name(self) -> str:
        """Short format identifier, also the file extension ('csv', 'pdf')."""

    @property
    @abc.abstractmethod
    def media_type(self) -> str:
        """MIME type of the produced bytes."""

    @abc.abstractmethod
    def render(self, dataset: Dataset) -> bytes:
        """Serialize *dataset* to bytes."""

    def export(self, dataset: Dataset) -> ExportArtifact:
        """Render *dataset* and name the result after its type and run date."""
        return ExportArtifact(
            content=self.render(dataset),
            filename=artifact_filename(dataset.report_type, dataset.generated_at, self.format_name),
            media_type=self.media_type,
        )
