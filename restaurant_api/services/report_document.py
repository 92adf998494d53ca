"""Printable PDF rendering and email text for period reports."""

from __future__ import annotations

import io
from decimal import Decimal
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from restaurant_api.config import settings
from restaurant_api.logger import get_logger
from restaurant_api.services.errors import DependencyFailure

logger = get_logger(__name__)

_ITEM_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#DDDDDD")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
    ]
)

_SUMMARY_TABLE_STYLE = TableStyle(
    [
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.black),
    ]
)


def _money(value: Decimal | int | float) -> str:
    return f"{Decimal(str(value)).quantize(Decimal('0.01'))} {settings.currency_label}"


def report_title(period: str) -> str:
    return f"{settings.restaurant_name} {period.capitalize()} Report"


def report_filename(period: str, date: str) -> str:
    return f"report-{period}-{date}.pdf"


def report_subject(period: str, date: str, *, automatic: bool = False) -> str:
    prefix = "Automatic " if automatic else ""
    return f"{prefix}{period.capitalize()} Report - {date}"


def report_body(period: str, date: str, *, automatic: bool = False) -> str:
    if automatic:
        return f"Please find attached the automatic {period} report for {date}."
    return f"Here is your {period} restaurant report."


def _build_story(report: dict[str, Any]) -> list[Any]:
    styles = getSampleStyleSheet()
    story: list[Any] = [
        Paragraph(escape(report_title(report["period"])), styles["Title"]),
        Paragraph(f"Period: {escape(str(report['date']))}", styles["Normal"]),
        Spacer(1, 0.25 * inch),
    ]

    rows: list[list[str]] = [["Item", "Qty", "Total"]]
    rows.extend(
        [str(item["name"]), str(item["quantity"]), _money(item["total"])] for item in report["items"]
    )
    item_table = Table(rows, colWidths=[3.5 * inch, 1 * inch, 1.75 * inch], repeatRows=1)
    item_table.setStyle(_ITEM_TABLE_STYLE)
    story.append(item_table)
    story.append(Spacer(1, 0.3 * inch))

    revenue = Decimal(str(report["revenue"]))
    expenses = Decimal(str(report["expenses"]))
    summary = Table(
        [
            ["Total Revenue", _money(revenue)],
            ["Expenses", _money(expenses)],
            ["Profit", _money(revenue - expenses)],
        ],
        colWidths=[3.5 * inch, 2.75 * inch],
    )
    summary.setStyle(_SUMMARY_TABLE_STYLE)
    story.append(summary)
    return story


def render_report_pdf(report: dict[str, Any]) -> bytes:
    """Render an assembled report (see report_data.get_report) to PDF bytes.

    Raises:
        DependencyFailure: reportlab could not build the document.
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=report_title(report["period"]),
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )
    try:
        doc.build(_build_story(report))
    except Exception as exc:
        logger.error(
            "Report PDF rendering failed",
            period=report.get("period"),
            date=report.get("date"),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise DependencyFailure("Report rendering failed") from exc
    return buffer.getvalue()
