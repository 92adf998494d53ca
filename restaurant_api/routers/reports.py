"""Period report API: JSON payload and on-demand email delivery."""

import asyncio

from fastapi import APIRouter, Query

from restaurant_api.deps import CurrentAdminId, SessionMaker
from restaurant_api.logger import get_logger, log_exception
from restaurant_api.schemas import ReportResponse, SendReportRequest, SendReportResponse
from restaurant_api.services import DependencyFailure, InvalidRequest, mailer
from restaurant_api.services.report_data import get_report
from restaurant_api.services.report_document import (
    render_report_pdf,
    report_body,
    report_filename,
    report_subject,
)
from restaurant_api.utils.exceptions import raise_bad_request, raise_internal_error

router = APIRouter(prefix="/api", tags=["reports"])
logger = get_logger(__name__)


@router.get("/report", response_model=ReportResponse)
async def read_report(
    sessionmaker: SessionMaker,
    _: CurrentAdminId,
    period: str = Query(..., description="daily, monthly or yearly"),
    date: str = Query(..., description="YYYY-MM-DD, YYYY-MM or YYYY"),
) -> dict:
    """Revenue, expenses, profit and itemized sales for one period."""
    try:
        return await get_report(sessionmaker, period, date)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)


@router.post("/send-report", response_model=SendReportResponse)
async def send_report(
    payload: SendReportRequest,
    sessionmaker: SessionMaker,
    _: CurrentAdminId,
) -> SendReportResponse:
    """Assemble a report and email it as a PDF to a single address."""
    if not payload.period or not payload.date or not payload.email:
        raise_bad_request("Period, date, and email are required")

    try:
        report = await get_report(sessionmaker, payload.period, payload.date)
        document = await asyncio.to_thread(render_report_pdf, report)
        await mailer.send_report_email(
            [payload.email],
            report_subject(report["period"], report["date"]),
            report_body(report["period"], report["date"]),
            document,
            report_filename(report["period"], report["date"]),
        )
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    except DependencyFailure as exc:
        log_exception(logger, exc, "Send report failed", period=payload.period, date=payload.date)
        raise_internal_error("Failed to send report", cause=exc)

    logger.info("Report sent", period=payload.period, date=payload.date)
    return SendReportResponse(message="Report sent successfully!")
