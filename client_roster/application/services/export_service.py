"""Report exports of a (filtered) client list — Excel, CSV and PDF.

Each exporter is a pure function of the client list it is given and returns
the finished file as bytes inside an :class:`ExportArtifact`; nothing is
read from the store here.

Libraries:
    - XLSX: openpyxl
    - PDF: PyMuPDF (fitz)
    - CSV: stdlib csv
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

import fitz  # PyMuPDF
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill

from client_roster.application.services import roster_metrics
from client_roster.domain.entities import Client, ensure_utc

logger = logging.getLogger(__name__)

REPORT_TITLE = "GSOS Client Management Report"
SYSTEM_NAME = "GSOS Client Management System"
NO_VERSION_LABEL = "No Version"

CSV_COLUMNS = [
    "Client Name",
    "Domain URL",
    "Client ID",
    "Latest Pull Date",
    "Latest Pull By",
    "GSOS Version",
    "Created Date",
    "Last Updated",
]


@dataclass(frozen=True)
class ExportArtifact:
    """A rendered export ready to be downloaded."""

    filename: str
    media_type: str
    content: bytes


def _format_date(value: datetime | None, missing: str = "N/A") -> str:
    if value is None:
        return missing
    return ensure_utc(value).strftime("%Y-%m-%d")


def _generated_at(now: datetime | None) -> datetime:
    return ensure_utc(now) if now is not None else datetime.now(timezone.utc)


def _sheet_text(value: str) -> str:
    """Drop control characters that openpyxl refuses to write."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _client_row(client: Client) -> list[str]:
    """Values shared by every format, in ``CSV_COLUMNS`` order (minus Last Updated)."""
    return [
        client.client_name,
        client.domain_url,
        client.client_id,
        _format_date(client.latest_pull_date, missing="Never"),
        client.latest_pull_by or "N/A",
        client.gsos_version or "N/A",
        _format_date(client.created_at),
    ]


# ── Excel ────────────────────────────────────────────────────────────


def export_to_excel(
    clients: list[Client], filename: str = "clients", now: datetime | None = None
) -> ExportArtifact:
    """Workbook with "Client Data", "Summary" and "Version Breakdown" sheets."""
    generated = _generated_at(now)
    workbook = Workbook()
    bold = Font(bold=True)

    client_sheet = workbook.active
    client_sheet.title = "Client Data"
    client_sheet.append(CSV_COLUMNS[:-1])
    for client in clients:
        client_sheet.append([_sheet_text(value) for value in _client_row(client)])

    with_history = sum(1 for c in clients if c.has_pull_history)
    summary_sheet = workbook.create_sheet("Summary")
    summary_sheet.append(["Metric", "Value"])
    summary_sheet.append(["Total Clients", len(clients)])
    summary_sheet.append(["Clients with Pull History", with_history])
    summary_sheet.append(["Clients without Pull History", len(clients) - with_history])
    summary_sheet.append(["Different GSOS Versions", roster_metrics.distinct_versions(clients)])
    summary_sheet.append(["Report Generated", generated.strftime("%Y-%m-%d %H:%M:%S UTC")])

    version_sheet = workbook.create_sheet("Version Breakdown")
    version_sheet.append(["GSOS Version", "Client Count"])
    for version, count in roster_metrics.version_histogram(clients, unknown_label=NO_VERSION_LABEL):
        version_sheet.append([_sheet_text(version), count])

    for sheet in workbook.worksheets:
        for cell in sheet[1]:
            cell.font = bold
        for column in sheet.columns:
            width = max(len(str(cell.value or "")) for cell in column)
            sheet.column_dimensions[column[0].column_letter].width = min(width + 2, 60)

    buffer = io.BytesIO()
    workbook.save(buffer)
    logger.info("Excel export: %d clients", len(clients))
    return ExportArtifact(
        filename=f"{filename}.xlsx",
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        content=buffer.getvalue(),
    )


# ── CSV ──────────────────────────────────────────────────────────────


def export_to_csv(
    clients: list[Client], filename: str = "clients", now: datetime | None = None
) -> ExportArtifact:
    """Client rows preceded by a ``#``-commented metadata block.

    Readers should skip lines starting with ``#`` and blank lines; the first
    remaining line is the column header.
    """
    generated = _generated_at(now)
    buffer = io.StringIO()
    buffer.write(f"# {REPORT_TITLE}\n")
    buffer.write(f"# Generated on: {generated.strftime('%Y-%m-%d %H:%M:%S UTC')}\n")
    buffer.write(f"# Total Clients: {len(clients)}\n")
    buffer.write(f"# Clients with Pull History: {sum(1 for c in clients if c.has_pull_history)}\n")
    buffer.write("\n\n")

    # Every field is quoted, so no data row can start with the comment marker
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_ALL)
    writer.writerow(CSV_COLUMNS)
    for client in clients:
        writer.writerow([*_client_row(client), _format_date(client.updated_at)])

    logger.info("CSV export: %d clients", len(clients))
    return ExportArtifact(
        filename=f"{filename}.csv",
        media_type="text/csv; charset=utf-8",
        content=buffer.getvalue().encode("utf-8"),
    )


# ── PDF ──────────────────────────────────────────────────────────────

_MM = 72 / 25.4
_PAGE_WIDTH, _PAGE_HEIGHT = fitz.paper_size("a4")
_MARGIN = 14 * _MM

_ACCENT = (102 / 255, 126 / 255, 234 / 255)
_STRIPE = (245 / 255, 247 / 255, 250 / 255)
_WHITE = (1, 1, 1)
_BLACK = (0, 0, 0)
_GRAY = (0.5, 0.5, 0.5)

_PDF_HEADERS = ["Client Name", "Domain URL", "Client ID", "Latest Pull", "Pull By", "Version"]
_PDF_COLUMN_WIDTHS = [w * _MM for w in (35, 45, 25, 25, 25, 20)]
_TABLE_FONT_SIZE = 8
_CELL_PADDING = 3
_ROW_HEIGHT = _TABLE_FONT_SIZE + 2 * _CELL_PADDING + 2
_TABLE_START_Y = 90 * _MM
_CONTINUATION_START_Y = _MARGIN
_TABLE_BOTTOM = _PAGE_HEIGHT - 20 * _MM


def _fit_text(text: str, width: float, fontname: str = "helv") -> str:
    """Truncate ``text`` with an ellipsis so it fits inside ``width`` points."""
    available = width - 2 * _CELL_PADDING
    if fitz.get_text_length(text, fontname=fontname, fontsize=_TABLE_FONT_SIZE) <= available:
        return text
    while text and fitz.get_text_length(
        text + "...", fontname=fontname, fontsize=_TABLE_FONT_SIZE
    ) > available:
        text = text[:-1]
    return text + "..."


def _draw_table_row(
    page: fitz.Page,
    top: float,
    values: list[str],
    *,
    fill: tuple[float, float, float] | None,
    text_color: tuple[float, float, float],
    fontname: str,
) -> None:
    left = _MARGIN
    if fill is not None:
        page.draw_rect(
            fitz.Rect(left, top, left + sum(_PDF_COLUMN_WIDTHS), top + _ROW_HEIGHT),
            color=None,
            fill=fill,
        )
    baseline = top + _CELL_PADDING + _TABLE_FONT_SIZE
    for value, width in zip(values, _PDF_COLUMN_WIDTHS):
        page.insert_text(
            (left + _CELL_PADDING, baseline),
            _fit_text(value, width, fontname),
            fontsize=_TABLE_FONT_SIZE,
            fontname=fontname,
            color=text_color,
        )
        left += width


def _draw_table_header(page: fitz.Page, top: float) -> float:
    _draw_table_row(page, top, _PDF_HEADERS, fill=_ACCENT, text_color=_WHITE, fontname="hebo")
    return top + _ROW_HEIGHT


def _draw_report_header(page: fitz.Page, clients: list[Client], generated: datetime) -> None:
    page.draw_rect(fitz.Rect(0, 0, _PAGE_WIDTH, 40 * _MM), color=None, fill=_ACCENT)
    page.insert_text(
        (_MARGIN, 20 * _MM), REPORT_TITLE.upper(), fontsize=20, fontname="hebo", color=_WHITE
    )
    page.insert_text(
        (_MARGIN, 30 * _MM),
        f"Generated on: {generated.strftime('%Y-%m-%d')} at {generated.strftime('%H:%M:%S')} UTC",
        fontsize=12,
        fontname="helv",
        color=_WHITE,
    )

    page.insert_text(
        (_MARGIN, 55 * _MM), "Summary Statistics", fontsize=14, fontname="hebo", color=_BLACK
    )
    lines = [
        f"Total Clients: {len(clients)}",
        f"Clients with Pull History: {sum(1 for c in clients if c.has_pull_history)}",
        f"Different GSOS Versions: {roster_metrics.distinct_versions(clients)}",
    ]
    for offset, line in enumerate(lines):
        page.insert_text(
            (_MARGIN, (65 + 7 * offset) * _MM), line, fontsize=10, fontname="helv", color=_BLACK
        )


def _draw_footers(doc: fitz.Document) -> None:
    page_count = doc.page_count
    baseline = _PAGE_HEIGHT - 10 * _MM
    for number, page in enumerate(doc, start=1):
        page.insert_text(
            (_MARGIN, baseline), f"Page {number} of {page_count}",
            fontsize=8, fontname="helv", color=_GRAY,
        )
        right_width = fitz.get_text_length(SYSTEM_NAME, fontname="helv", fontsize=8)
        page.insert_text(
            (_PAGE_WIDTH - _MARGIN - right_width, baseline), SYSTEM_NAME,
            fontsize=8, fontname="helv", color=_GRAY,
        )


def export_to_pdf(
    clients: list[Client], filename: str = "clients", now: datetime | None = None
) -> ExportArtifact:
    """A4 report: header band, summary block, then a paginated striped table."""
    generated = _generated_at(now)
    doc = fitz.open()
    try:
        page = doc.new_page(width=_PAGE_WIDTH, height=_PAGE_HEIGHT)
        _draw_report_header(page, clients, generated)
        top = _draw_table_header(page, _TABLE_START_Y)

        for index, client in enumerate(clients):
            if top + _ROW_HEIGHT > _TABLE_BOTTOM:
                page = doc.new_page(width=_PAGE_WIDTH, height=_PAGE_HEIGHT)
                top = _draw_table_header(page, _CONTINUATION_START_Y)
            _draw_table_row(
                page,
                top,
                _client_row(client)[:6],
                fill=_STRIPE if index % 2 else None,
                text_color=_BLACK,
                fontname="helv",
            )
            top += _ROW_HEIGHT

        _draw_footers(doc)
        content = doc.tobytes()
        logger.info("PDF export: %d clients on %d pages", len(clients), doc.page_count)
    finally:
        doc.close()

    return ExportArtifact(filename=f"{filename}.pdf", media_type="application/pdf", content=content)


EXPORTERS = {
    "xlsx": export_to_excel,
    "csv": export_to_csv,
    "pdf": export_to_pdf,
}
