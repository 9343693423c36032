"""PDF exporter — A4 landscape table with a decorated header and footer.

Every page gets the same decoration from :class:`PageDecorator`: a filled
header band with the report title, a metadata strip (period, total,
generation time) at fixed offsets, a rule, and a footer with the page
number, the system caption and the generation time.  The table itself is
produced by the report type's :class:`PDFLayout`.
"""

from __future__ import annotations

import io
import logging
from datetime import date
from xml.sax.saxutils import escape
from zoneinfo import ZoneInfo

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import BaseDocTemplate, Frame, PageTemplate, Paragraph, Table, TableStyle

from diabreport.config import (
    ACCENT_RGB,
    BOTTOM_MARGIN_MM,
    FOOTER_CAPTION,
    FOOTER_TEXT_RGB,
    HEADER_BAND_MM,
    PAGE_HEIGHT_MM,
    RULE_RGB,
    SIDE_MARGIN_MM,
    STRIPE_RGB,
    SYSTEM_CAPTION,
    TABLE_WIDTH_MM,
    TOP_MARGIN_MM,
)
from diabreport.exporters.base import Exporter
from diabreport.exporters.pdf_layouts import PDFLayout, layout_for
from diabreport.reports.dataset import Dataset
from diabreport.reports.labels import format_date, format_datetime

logger = logging.getLogger(__name__)

_FONT = "Helvetica"
_FONT_BOLD = "Helvetica-Bold"


def rgb(triple: tuple[int, int, int]) -> colors.Color:
    """reportlab colour from 0-255 components."""
    r, g, b = triple
    return colors.Color(r / 255, g / 255, b / 255)


def period_text(start: date | None, end: date | None) -> str:
    if start is None or end is None:
        return "-"
    return f"{format_date(start)} até {format_date(end)}"


class PageDecorator:
    """Page callback drawing the header band, metadata strip and footer.

    Positions are fixed offsets in millimetres measured from the top-left
    corner, except the footer caption which is centred on its measured
    width.
    """

    def __init__(self, dataset: Dataset, tz: str | ZoneInfo | None = None) -> None:
        self.title = dataset.report_type.label.upper()
        self.period = period_text(dataset.window_start, dataset.window_end)
        self.total = str(dataset.row_count)
        self.generated = format_datetime(dataset.generated_at, tz)
        self.pages_drawn = 0

    def __call__(self, canvas, doc) -> None:
        width, height = doc.pagesize
        canvas.saveState()
        self.draw_header(canvas, width, height)
        self.draw_metadata(canvas, width, height)
        self.draw_footer(canvas, width, height, doc.page)
        canvas.restoreState()
        self.pages_drawn += 1

    @staticmethod
    def _y(height: float, top_mm: float) -> float:
        return height - top_mm * mm

    def draw_header(self, canvas, width: float, height: float) -> None:
        canvas.setFillColor(rgb(ACCENT_RGB))
        canvas.rect(0, height - HEADER_BAND_MM * mm, width, HEADER_BAND_MM * mm, fill=1, stroke=0)

        canvas.setFillColor(colors.white)
        canvas.setFont(_FONT_BOLD, 14)
        canvas.drawString(2 * mm, self._y(height, 10), self.title)
        canvas.setFont(_FONT, 9)
        canvas.drawString(200 * mm, self._y(height, 10), SYSTEM_CAPTION)

    def draw_metadata(self, canvas, width: float, height: float) -> None:
        canvas.setFillColor(colors.black)
        for label, label_x, value, value_x, top in (
            ("PERÍODO:", 2, self.period, 20, 22),
            ("TOTAL:", 2, self.total, 17, 28),
            ("GERADO:", 70, self.generated, 85, 28),
        ):
            canvas.setFont(_FONT_BOLD, 9)
            canvas.drawString(label_x * mm, self._y(height, top), label)
            canvas.setFont(_FONT, 9)
            canvas.drawString(value_x * mm, self._y(height, top), value)

        canvas.setStrokeColor(rgb(RULE_RGB))
        canvas.line(2 * mm, self._y(height, 32), width - 2 * mm, self._y(height, 32))

    def draw_footer(self, canvas, width: float, height: float, page_number: int) -> None:
        canvas.setStrokeColor(rgb(RULE_RGB))
        canvas.line(2 * mm, 15 * mm, width - 2 * mm, 15 * mm)

        canvas.setFont(_FONT, 7)
        canvas.setFillColor(rgb(FOOTER_TEXT_RGB))
        canvas.drawString(2 * mm, 8 * mm, f"Página {page_number}")
        canvas.drawString(width - 60 * mm, 8 * mm, f"Gerado em: {self.generated}")

        caption_width = canvas.stringWidth(FOOTER_CAPTION, _FONT, 7)
        canvas.drawString((width - caption_width) / 2, 8 * mm, FOOTER_CAPTION)


def table_frame() -> Frame:
    """Frame holding the table: top-left corner at (2 mm, 36 mm), 293 mm wide."""
    # No inner padding, so the table lines up with the rules at x=2 mm
    return Frame(
        SIDE_MARGIN_MM * mm,
        BOTTOM_MARGIN_MM * mm,
        TABLE_WIDTH_MM * mm,
        (PAGE_HEIGHT_MM - TOP_MARGIN_MM - BOTTOM_MARGIN_MM) * mm,
        leftPadding=0,
        rightPadding=0,
        topPadding=0,
        bottomPadding=0,
        id="table",
    )


def build_table(dataset: Dataset, layout: PDFLayout) -> Table:
    """Lay out the header row and data rows of *dataset* as a Table."""
    widths = layout.widths(dataset)
    total_mm = sum(widths.values())
    if total_mm > TABLE_WIDTH_MM:
        logger.warning(
            "%s table is %d mm wide, %d mm more than the page frame",
            dataset.report_type.value, total_mm, total_mm - TABLE_WIDTH_MM,
        )

    header_style = ParagraphStyle(
        "ReportHeader",
        fontName=_FONT_BOLD,
        fontSize=layout.header_font_size,
        leading=layout.header_font_size * 1.15,
        textColor=colors.white,
        alignment=TA_CENTER if layout.center_headers else TA_LEFT,
    )
    body_style = ParagraphStyle(
        "ReportBody",
        fontName=_FONT,
        fontSize=layout.body_font_size,
        leading=layout.body_font_size * 1.15,
        alignment=TA_LEFT,
    )

    data = [[Paragraph(escape(text), header_style) for text in layout.headers(dataset)]]
    for row in dataset.rows:
        data.append([Paragraph(escape(text), body_style) for text in layout.cells(row, dataset, widths)])

    table = Table(
        data,
        colWidths=[widths[c] * mm for c in dataset.columns],
        repeatRows=1,
        hAlign="LEFT",
    )
    body_pad = layout.body_padding_mm * mm
    head_pad = layout.header_padding_mm * mm
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), rgb(ACCENT_RGB)),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, rgb(STRIPE_RGB)]),
        ("GRID", (0, 0), (-1, -1), 0.1 * mm, rgb(RULE_RGB)),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), body_pad),
        ("RIGHTPADDING", (0, 0), (-1, -1), body_pad),
        ("TOPPADDING", (0, 0), (-1, -1), body_pad),
        ("BOTTOMPADDING", (0, 0), (-1, -1), body_pad),
        ("LEFTPADDING", (0, 0), (-1, 0), head_pad),
        ("RIGHTPADDING", (0, 0), (-1, 0), head_pad),
        ("TOPPADDING", (0, 0), (-1, 0), head_pad),
        ("BOTTOMPADDING", (0, 0), (-1, 0), head_pad),
    ]))
    return table


class PDFExporter(Exporter):
    """Render a Dataset as a paginated PDF table.

    Parameters
    ----------
    tz:
        Time zone of the generation timestamps.
    compress:
        Compress page streams.  Off by default so the text stays greppable.
    """

    def __init__(self, tz: str | ZoneInfo | None = None, compress: bool = False) -> None:
        self.tz = tz
        self.compress = compress

    @property
    def format_name(self) -> str:
        return "pdf"

    @property
    def media_type(self) -> str:
        return "application/pdf"

    def layout(self, dataset: Dataset) -> PDFLayout:
        return layout_for(dataset.report_type)

    def decorator(self, dataset: Dataset) -> PageDecorator:
        return PageDecorator(dataset, self.tz)

    def render(self, dataset: Dataset) -> bytes:
        buffer = io.BytesIO()
        doc = BaseDocTemplate(
            buffer,
            pagesize=landscape(A4),
            leftMargin=SIDE_MARGIN_MM * mm,
            rightMargin=SIDE_MARGIN_MM * mm,
            topMargin=TOP_MARGIN_MM * mm,
            bottomMargin=BOTTOM_MARGIN_MM * mm,
            title=dataset.report_type.label,
            author=FOOTER_CAPTION,
            pageCompression=1 if self.compress else 0,
        )
        decorate = self.decorator(dataset)
        doc.addPageTemplates([
            PageTemplate(id="report", frames=[table_frame()], onPage=decorate),
        ])
        doc.build([build_table(dataset, self.layout(dataset))])
        content = buffer.getvalue()
        logger.debug("Rendered PDF for %s: %d rows, %d pages, %d bytes",
                     dataset.report_type.value, dataset.row_count, decorate.pages_drawn, len(content))
        return content


def to_pdf(
    dataset: Dataset,
    window_start: date | None = None,
    window_end: date | None = None,
    tz: str | ZoneInfo | None = None,
) -> bytes:
    """Render *dataset*; explicit window dates override the dataset's own."""
    if window_start is not None or window_end is not None:
        dataset = dataset.model_copy(update={
            "window_start": window_start or dataset.window_start,
            "window_end": window_end or dataset.window_end,
        })
    return PDFExporter(tz).render(dataset)
