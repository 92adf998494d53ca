"""Wastage API router."""

from fastapi import APIRouter, HTTPException, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.logger import get_logger
from restaurant_api.schemas import MessageResponse, WastageCreate, WastageResponse, WastageUpdate
from restaurant_api.services import NotFound, wastage
from restaurant_api.utils.exceptions import raise_not_found

router = APIRouter(prefix="/api/wastage", tags=["wastage"])
logger = get_logger(__name__)


@router.post("", response_model=WastageResponse, status_code=status.HTTP_201_CREATED)
async def create_wastage(
    data: WastageCreate,
    db: DbSession,
    admin_id: CurrentAdminId,
) -> dict:
    """Record wastage by the current admin, with its linked expense."""
    try:
        record = await wastage.create_wastage(db, data, admin_id)
    except NotFound as exc:
        raise_not_found("Item", cause=exc)
    await db.commit()
    return record


@router.get("", response_model=list[WastageResponse])
async def list_wastage(db: DbSession, _: CurrentAdminId) -> list[dict]:
    return await wastage.list_wastage(db)


@router.put("/{wastage_id}", response_model=WastageResponse)
async def update_wastage(
    wastage_id: int,
    data: WastageUpdate,
    db: DbSession,
    _: CurrentAdminId,
) -> dict:
    try:
        record = await wastage.update_wastage(db, wastage_id, data)
    except NotFound as exc:
        logger.debug("Wastage update target missing", wastage_id=wastage_id, error=str(exc))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    await db.commit()
    return record


@router.delete("/{wastage_id}", response_model=MessageResponse)
async def delete_wastage(wastage_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await wastage.delete_wastage(db, wastage_id)
    except NotFound as exc:
        raise_not_found("Wastage record", cause=exc)
    await db.commit()
    return MessageResponse(message="Wastage and associated expense deleted successfully")
