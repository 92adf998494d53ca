"""Call-a-waiter API router.

Guests raise requests without signing in; staff list and clear them.
"""

from fastapi import APIRouter, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.schemas import CallWaiterCreate, CallWaiterResponse, MessageResponse
from restaurant_api.services import InvalidRequest, NotFound, call_waiter
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found

router = APIRouter(prefix="/api/call-waiter", tags=["call-waiter"])


@router.get("", response_model=list[CallWaiterResponse])
async def list_requests(db: DbSession, _: CurrentAdminId) -> list[CallWaiterResponse]:
    return [CallWaiterResponse.model_validate(r) for r in await call_waiter.list_requests(db)]


@router.post("", response_model=CallWaiterResponse, status_code=status.HTTP_201_CREATED)
async def create_request(data: CallWaiterCreate, db: DbSession) -> CallWaiterResponse:
    try:
        request = await call_waiter.call_waiter(db, data.table_number)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return CallWaiterResponse.model_validate(request)


@router.delete("/{call_id}", response_model=MessageResponse)
async def clear_request(call_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await call_waiter.clear_request(db, call_id)
    except NotFound as exc:
        raise_not_found("Request", cause=exc)
    await db.commit()
    return MessageResponse(message="Request cleared", id=call_id)


@router.delete("", response_model=MessageResponse)
async def clear_all_requests(db: DbSession, _: CurrentAdminId) -> MessageResponse:
    await call_waiter.clear_all_requests(db)
    await db.commit()
    return MessageResponse(message="All requests cleared")
