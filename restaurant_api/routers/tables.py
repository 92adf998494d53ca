"""Dining tables and table QR codes API router."""

from typing import Any

from fastapi import APIRouter, Response, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.schemas import MessageResponse, TableResponse, TablesCreate
from restaurant_api.services import NotFound, tables
from restaurant_api.utils.exceptions import raise_not_found

router = APIRouter(prefix="/api/tables", tags=["tables"])


@router.get("", response_model=list[TableResponse])
async def list_tables(db: DbSession) -> list[dict[str, Any]]:
    return await tables.list_tables(db)


@router.post("", response_model=list[TableResponse], status_code=status.HTTP_201_CREATED)
async def create_tables(data: TablesCreate, db: DbSession, _: CurrentAdminId) -> list[dict[str, Any]]:
    created = await tables.create_tables(db, data.number_of_tables)
    await db.commit()
    return created


@router.post("/generate-qr-codes", response_model=MessageResponse)
async def generate_qr_codes(db: DbSession, _: CurrentAdminId) -> MessageResponse:
    """Refresh menu links for tables missing one or pointing at an old menu address."""
    updated = await tables.generate_qr_codes(db)
    await db.commit()
    return MessageResponse(message=f"QR codes generated for {updated} tables")


@router.get("/{table_number}/qr-code")
async def get_qr_code(table_number: int, db: DbSession) -> Response:
    """SVG QR code that opens the menu for this table."""
    try:
        content = await tables.table_qr_code(db, table_number)
    except NotFound as exc:
        raise_not_found(f"Table {table_number} QR code", cause=exc)
    return Response(content=content, media_type="image/svg+xml")


@router.delete("/{table_number}", response_model=MessageResponse)
async def delete_table(table_number: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await tables.delete_table(db, table_number)
    except NotFound as exc:
        raise_not_found("Table", cause=exc)
    await db.commit()
    return MessageResponse(message=f"Table {table_number} deleted successfully")


@router.delete("", response_model=MessageResponse)
async def delete_all_tables(db: DbSession, _: CurrentAdminId) -> MessageResponse:
    deleted = await tables.delete_all_tables(db)
    await db.commit()
    return MessageResponse(message=f"{deleted} tables deleted successfully")
