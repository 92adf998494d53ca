"""Tests for PDF rendering and report email text."""

from decimal import Decimal

import pytest

from restaurant_api.config import settings
from restaurant_api.services.errors import DependencyFailure
from restaurant_api.services.report_document import (
    render_report_pdf,
    report_body,
    report_filename,
    report_subject,
    report_title,
)


def _report(**overrides):
    report = {
        "period": "monthly",
        "date": "2024-03",
        "items": [
            {"name": "Burger", "quantity": 2, "total": Decimal("20.00")},
            {"name": "Cola & Lime <large>", "quantity": 3, "total": Decimal("7.50")},
        ],
        "revenue": Decimal("27.50"),
        "expenses": Decimal("8.25"),
        "profit": Decimal("19.25"),
    }
    report.update(overrides)
    return report


def test_render_produces_pdf_bytes():
    document = render_report_pdf(_report())
    assert document.startswith(b"%PDF")
    assert len(document) > 500


def test_render_empty_report():
    document = render_report_pdf(_report(items=[], revenue=Decimal("0"), expenses=Decimal("0")))
    assert document.startswith(b"%PDF")


def test_render_failure_is_dependency_failure():
    broken = _report()
    del broken["items"]
    with pytest.raises(DependencyFailure, match="Report rendering failed"):
        render_report_pdf(broken)


def test_title_uses_restaurant_name(monkeypatch):
    monkeypatch.setattr(settings, "restaurant_name", "Chez Test")
    assert report_title("daily") == "Chez Test Daily Report"


def test_subjects():
    assert report_subject("monthly", "2024-03") == "Monthly Report - 2024-03"
    assert report_subject("daily", "2024-03-01", automatic=True) == "Automatic Daily Report - 2024-03-01"


def test_bodies():
    assert report_body("yearly", "2023") == "Here is your yearly restaurant report."
    assert (
        report_body("yearly", "2023", automatic=True)
        == "Please find attached the automatic yearly report for 2023."
    )


def test_filename():
    assert report_filename("daily", "2024-03-01") == "report-daily-2024-03-01.pdf"
