"""Scheduled report opt-in management."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import Admin, ReportReceiver
from restaurant_api.schemas.report_receiver import ReportReceiverWrite
from restaurant_api.services.errors import InvalidRequest, NotFound

logger = get_logger(__name__)


def _receiver_view(receiver: ReportReceiver, admin: Admin) -> dict[str, Any]:
    return {
        "id": receiver.id,
        "admin_id": receiver.admin_id,
        "receive_daily": receiver.receive_daily,
        "receive_monthly": receiver.receive_monthly,
        "receive_yearly": receiver.receive_yearly,
        "username": admin.username,
        "email": admin.email,
        "created_at": receiver.created_at,
        "updated_at": receiver.updated_at,
    }


async def _require_admin(db: AsyncSession, admin_id: int) -> Admin:
    admin = await db.get(Admin, admin_id)
    if admin is None:
        raise InvalidRequest(f"Invalid admin_id: {admin_id} does not exist in admins table")
    return admin


async def _get_receiver(db: AsyncSession, receiver_id: int) -> ReportReceiver:
    receiver = await db.get(ReportReceiver, receiver_id)
    if receiver is None:
        raise NotFound(f"Receiver with id {receiver_id} not found")
    return receiver


async def list_receivers(db: AsyncSession) -> list[dict[str, Any]]:
    result = await db.execute(
        select(ReportReceiver, Admin)
        .join(Admin, ReportReceiver.admin_id == Admin.id)
        .order_by(ReportReceiver.id)
    )
    return [_receiver_view(receiver, admin) for receiver, admin in result.all()]


async def create_receiver(db: AsyncSession, data: ReportReceiverWrite) -> dict[str, Any]:
    """Opt an admin in; each admin has at most one receiver row."""
    admin = await _require_admin(db, data.admin_id)
    existing = await db.execute(select(ReportReceiver.id).where(ReportReceiver.admin_id == data.admin_id))
    if existing.scalar_one_or_none() is not None:
        raise InvalidRequest(f"Receiver already exists for admin_id: {data.admin_id}")

    receiver = ReportReceiver(**data.model_dump())
    db.add(receiver)
    await db.flush()
    await db.refresh(receiver)
    logger.info("Report receiver added", receiver_id=receiver.id, admin_id=admin.id)
    return _receiver_view(receiver, admin)


async def update_receiver(db: AsyncSession, receiver_id: int, data: ReportReceiverWrite) -> dict[str, Any]:
    receiver = await _get_receiver(db, receiver_id)
    admin = await _require_admin(db, data.admin_id)
    duplicate = await db.execute(
        select(ReportReceiver.id)
        .where(ReportReceiver.admin_id == data.admin_id)
        .where(ReportReceiver.id != receiver_id)
    )
    if duplicate.scalar_one_or_none() is not None:
        raise InvalidRequest(f"Another receiver already exists for admin_id: {data.admin_id}")

    for field, value in data.model_dump().items():
        setattr(receiver, field, value)
    await db.flush()
    await db.refresh(receiver)
    return _receiver_view(receiver, admin)


async def delete_receiver(db: AsyncSession, receiver_id: int) -> None:
    receiver = await _get_receiver(db, receiver_id)
    await db.delete(receiver)
    await db.flush()
