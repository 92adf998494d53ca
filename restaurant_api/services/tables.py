"""Dining tables and the QR codes that open the menu at each table."""

from __future__ import annotations

import asyncio
from typing import Any

from reportlab.graphics import renderSVG
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.config import settings
from restaurant_api.logger import get_logger
from restaurant_api.models import CallWaiterRequest, DiningTable
from restaurant_api.services.errors import NotFound

logger = get_logger(__name__)

QR_CODE_SIZE = 300


def table_menu_url(table_number: int) -> str:
    base = settings.public_menu_url
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}table={table_number}"


def _table_view(table: DiningTable) -> dict[str, Any]:
    return {
        "id": table.id,
        "table_number": table.table_number,
        "menu_url": table.menu_url,
        "qr_code_url": f"/api/tables/{table.table_number}/qr-code" if table.menu_url else None,
        "created_at": table.created_at,
    }


def render_qr_svg(data: str, size: int = QR_CODE_SIZE) -> bytes:
    """SVG QR code for data, high error correction, scaled to size points."""
    widget = QrCodeWidget(data, barLevel="H")
    x0, y0, x1, y1 = widget.getBounds()
    drawing = Drawing(size, size, transform=[size / (x1 - x0), 0, 0, size / (y1 - y0), 0, 0])
    drawing.add(widget)
    return renderSVG.drawToString(drawing).encode("utf-8")


async def _get_table(db: AsyncSession, table_number: int) -> DiningTable:
    result = await db.execute(select(DiningTable).where(DiningTable.table_number == table_number))
    table = result.scalar_one_or_none()
    if table is None:
        raise NotFound("Table not found")
    return table


async def list_tables(db: AsyncSession) -> list[dict[str, Any]]:
    result = await db.execute(select(DiningTable).order_by(DiningTable.table_number))
    return [_table_view(table) for table in result.scalars().all()]


async def create_tables(db: AsyncSession, count: int) -> list[dict[str, Any]]:
    """Append count tables numbered after the current highest one."""
    highest = (await db.execute(select(func.max(DiningTable.table_number)))).scalar() or 0
    tables = [
        DiningTable(table_number=number, menu_url=table_menu_url(number))
        for number in range(highest + 1, highest + count + 1)
    ]
    db.add_all(tables)
    await db.flush()
    for table in tables:
        await db.refresh(table)
    logger.info("Tables created", count=count, first=highest + 1, last=highest + count)
    return [_table_view(table) for table in tables]


async def generate_qr_codes(db: AsyncSession) -> int:
    """Point every table without a code, or with a stale menu URL, at the current menu.

    Returns the number of tables updated.
    """
    result = await db.execute(select(DiningTable))
    stale = [
        table
        for table in result.scalars().all()
        if table.menu_url != table_menu_url(table.table_number)
    ]
    for table in stale:
        table.menu_url = table_menu_url(table.table_number)
    await db.flush()
    logger.info("Table QR codes regenerated", count=len(stale))
    return len(stale)


async def table_qr_code(db: AsyncSession, table_number: int) -> bytes:
    table = await _get_table(db, table_number)
    if table.menu_url is None:
        raise NotFound("QR code not generated for this table")
    return await asyncio.to_thread(render_qr_svg, table.menu_url)


async def delete_table(db: AsyncSession, table_number: int) -> None:
    table = await _get_table(db, table_number)
    await db.execute(delete(CallWaiterRequest).where(CallWaiterRequest.table_number == table_number))
    await db.delete(table)
    await db.flush()


async def delete_all_tables(db: AsyncSession) -> int:
    await db.execute(delete(CallWaiterRequest))
    result = await db.execute(delete(DiningTable))
    logger.info("All tables deleted", count=result.rowcount)
    return result.rowcount


async def table_exists(db: AsyncSession, table_number: int) -> bool:
    result = await db.execute(
        select(DiningTable.id).where(DiningTable.table_number == table_number)
    )
    return result.scalar_one_or_none() is not None
