"""Stock purchase API router."""

from fastapi import APIRouter, HTTPException, Query, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.schemas import (
    MessageResponse,
    StockCreate,
    StockLevelResponse,
    StockResponse,
    StockUpdate,
)
from restaurant_api.services import InvalidRequest, NotFound, stock
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.post("", response_model=StockResponse, status_code=status.HTTP_201_CREATED)
async def create_stock(
    data: StockCreate,
    db: DbSession,
    _: CurrentAdminId,
) -> dict:
    """Record a purchase and log its cost as a "stock" expense."""
    try:
        entry = await stock.create_stock(db, data)
    except NotFound as exc:
        raise_not_found("Item", cause=exc)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return entry


@router.get("", response_model=list[StockResponse])
async def list_stock(db: DbSession, _: CurrentAdminId) -> list[dict]:
    return await stock.list_stock(db)


@router.get("/current", response_model=list[StockLevelResponse])
async def current_stock(db: DbSession, _: CurrentAdminId) -> list[dict]:
    """Purchased minus wasted minus sold, per purchased item."""
    return await stock.current_stock(db)


@router.get("/low", response_model=list[StockLevelResponse])
async def low_stock(
    db: DbSession,
    _: CurrentAdminId,
    threshold: int = Query(stock.DEFAULT_LOW_STOCK_THRESHOLD, ge=0),
) -> list[dict]:
    return await stock.low_stock(db, threshold)


@router.put("/{stock_id}", response_model=StockResponse)
async def update_stock(
    stock_id: int,
    data: StockUpdate,
    db: DbSession,
    _: CurrentAdminId,
) -> dict:
    try:
        entry = await stock.update_stock(db, stock_id, data)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    await db.commit()
    return entry


@router.delete("/{stock_id}", response_model=MessageResponse)
async def delete_stock(stock_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await stock.delete_stock(db, stock_id)
    except NotFound as exc:
        raise_not_found("Stock entry", cause=exc)
    await db.commit()
    return MessageResponse(message="Stock entry deleted")
