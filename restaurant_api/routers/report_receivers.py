"""Report receiver (scheduled email opt-in) API router."""

from fastapi import APIRouter, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.schemas import MessageResponse, ReportReceiverResponse, ReportReceiverWrite
from restaurant_api.services import InvalidRequest, NotFound, report_receivers
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found

router = APIRouter(prefix="/api/report-receivers", tags=["report-receivers"])


@router.get("", response_model=list[ReportReceiverResponse])
async def list_receivers(db: DbSession, _: CurrentAdminId) -> list[dict]:
    """Receivers joined with admin username and email."""
    return await report_receivers.list_receivers(db)


@router.post("", response_model=ReportReceiverResponse, status_code=status.HTTP_201_CREATED)
async def create_receiver(
    data: ReportReceiverWrite,
    db: DbSession,
    _: CurrentAdminId,
) -> dict:
    try:
        receiver = await report_receivers.create_receiver(db, data)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return receiver


@router.put("/{receiver_id}", response_model=ReportReceiverResponse)
async def update_receiver(
    receiver_id: int,
    data: ReportReceiverWrite,
    db: DbSession,
    _: CurrentAdminId,
) -> dict:
    try:
        receiver = await report_receivers.update_receiver(db, receiver_id, data)
    except NotFound as exc:
        raise_not_found(f"Receiver with id {receiver_id}", cause=exc)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return receiver


@router.delete("/{receiver_id}", response_model=MessageResponse)
async def delete_receiver(receiver_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await report_receivers.delete_receiver(db, receiver_id)
    except NotFound as exc:
        raise_not_found(f"Receiver with id {receiver_id}", cause=exc)
    await db.commit()
    return MessageResponse(message="Receiver deleted successfully")
