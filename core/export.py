# core/export.py

"""
Export collaborator: writes a `Report` to disk as a file artifact.

Supported formats:
- "xlsx": a spreadsheet workbook with a single "Data" sheet (openpyxl)
- "pdf": a paginated table document with the header row repeated on every page (reportlab)
- "csv": a spreadsheet-compatible CSV file (UTF-8 with BOM so spreadsheet tools detect the encoding)
- "text": a Word-compatible itemized text report, one block per row

All formats preserve the header order and row order of the report exactly.
"""

from __future__ import annotations

import csv
import io
import os
from typing import Any
from xml.sax.saxutils import escape

from openpyxl import Workbook
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from core.logger import get_logger
from core.reports import Report
from core.response import ErrorCode, Response

log = get_logger(__name__)

FORMAT_EXTENSIONS: dict[str, str] = {
    "xlsx": ".xlsx",
    "pdf": ".pdf",
    "csv": ".csv",
    "text": ".doc",
}

PAGE_SIZE = landscape(A4)
PAGE_MARGIN = 28


# === renderers ===


def render_csv(report: Report) -> str:
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(report.headers)
    writer.writerows(report.as_table())

    return output.getvalue()


def render_xlsx(report: Report) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Data"

    sheet.append(report.headers)
    for row in report.as_table():
        sheet.append(row)

    buffer = io.BytesIO()
    workbook.save(buffer)

    return buffer.getvalue()


def build_pdf_story(report: Report, rows_per_page: int = 40) -> list[Any]:
    """
    Lays the report out as reportlab flowables: a title, then one table per page of rows.

    Each table starts with the header row and also repeats it if reportlab has to split the
    table across pages. A report with no rows still produces one header-only table.

    Raises:
        ValueError: If `rows_per_page` is less than 1.
    """
    if rows_per_page < 1:
        raise ValueError("rows_per_page must be at least 1.")

    styles = getSampleStyleSheet()
    header_style = ParagraphStyle(
        "ReportHeader",
        parent=styles["Normal"],
        fontName="Helvetica-Bold",
        fontSize=9,
        textColor=colors.whitesmoke,
    )
    body_style = ParagraphStyle("ReportBody", parent=styles["Normal"], fontSize=8, leading=10)

    header_row = [Paragraph(escape(h.upper()), header_style) for h in report.headers]
    table = report.as_table()
    chunks = [table[i : i + rows_per_page] for i in range(0, len(table), rows_per_page)] or [[]]

    usable_width = PAGE_SIZE[0] - 2 * PAGE_MARGIN
    col_widths = [usable_width / max(len(report.headers), 1)] * len(report.headers)

    story: list[Any] = [Paragraph(escape(report.title), styles["Title"]), Spacer(1, 12)]

    for number, chunk in enumerate(chunks):
        if number:
            story.append(PageBreak())

        rows = [header_row] + [[Paragraph(escape(cell), body_style) for cell in row] for row in chunk]
        pdf_table = Table(rows, colWidths=col_widths, repeatRows=1, hAlign="LEFT")
        pdf_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1e3a8a")),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("GRID", (0, 0), (-1, -1), 0.4, colors.grey),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f1f5f9")]),
                ]
            )
        )
        story.append(pdf_table)

    return story


def render_pdf(report: Report, rows_per_page: int = 40) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=report.title,
    )
    doc.build(build_pdf_story(report, rows_per_page))

    return buffer.getvalue()


def render_text_report(report: Report) -> str:
    lines = [f"Relatório SME Curso - {report.title}", ""]

    for index, row in enumerate(report.rows, 1):
        lines.append(f"Item {index}:")
        lines.extend(f"{h.upper()}: {row.get(h, '')}" for h in report.headers)
        lines.append("-" * 26)

    return "\n".join(lines) + "\n"


def render_report(report: Report, fmt: str, rows_per_page: int = 40) -> bytes:
    """
    Renders a report to the bytes of the given format.

    Raises:
        KeyError: If `fmt` is not in `FORMAT_EXTENSIONS`.
        ValueError: If `rows_per_page` is less than 1 for the "pdf" format.
    """
    match fmt:
        case "xlsx":
            return render_xlsx(report)
        case "pdf":
            return render_pdf(report, rows_per_page)
        case "csv":
            return render_csv(report).encode("utf-8-sig")
        case "text":
            return render_text_report(report).encode("utf-8")
        case _:
            raise KeyError(fmt)


# === file export ===


def export_report(
    report: Report,
    fmt: str,
    out_dir: str,
    rows_per_page: int = 40,
) -> Response:
    """
    Renders a report in the given format and writes it to `out_dir`.

    Args:
        report (Report): The report to export.
        fmt (str): One of "xlsx", "pdf", "csv", or "text".
        out_dir (str): The target directory; created if missing.
        rows_per_page (int): Rows per page for the "pdf" format.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the file was written.
                - False if the format is unknown, the layout fails, or the file could not be written.
            - error (ErrorCode | str | None):
                - `ErrorCode.INVALID_FIELD_VALUE` if the format or page size is invalid.
                - `ErrorCode.INTERNAL_ERROR` if the PDF layout cannot be built.
                - `ErrorCode.PERSISTENCE_FAILURE` if writing to disk fails.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "path" (str): The written file path.

    Notes:
        - Existing files with the same name are overwritten.
    """
    if fmt not in FORMAT_EXTENSIONS:
        return Response.fail(
            detail=f"Unknown export format '{fmt}'. Choose from: {', '.join(FORMAT_EXTENSIONS)}.",
            error=ErrorCode.INVALID_FIELD_VALUE,
        )

    path = os.path.join(out_dir, f"{report.name}{FORMAT_EXTENSIONS[fmt]}")

    try:
        content = render_report(report, fmt, rows_per_page)

        os.makedirs(out_dir, exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)

    except ValueError as e:
        return Response.fail(
            detail=f"Invalid field value: {e}",
            error=ErrorCode.INVALID_FIELD_VALUE,
        )

    except LayoutError as e:
        log.error("report_layout_failed", report=report.name, error=str(e))
        return Response.fail(
            detail=f"Failed to lay out report: {e}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    except OSError as e:
        log.warning("report_export_failed", report=report.name, path=path, error=str(e))
        return Response.fail(
            detail=f"Failed to write report to disk: {e}",
            error=ErrorCode.PERSISTENCE_FAILURE,
            status_code=500,
        )

    else:
        log.info("report_exported", report=report.name, format=fmt, path=path)
        return Response.succeed(
            detail=f"Report written to {path}.",
            data={
                "path": path,
            },
        )
