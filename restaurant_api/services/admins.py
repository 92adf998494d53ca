"""Admin accounts and credential checks."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import Admin, ReportReceiver
from restaurant_api.schemas.auth import AdminCreate, AdminUpdate
from restaurant_api.security import hash_password, verify_password
from restaurant_api.services.errors import InvalidRequest, NotFound

logger = get_logger(__name__)


async def authenticate(db: AsyncSession, username: str, password: str) -> Admin | None:
    """Return the admin when the credentials match, else None."""
    result = await db.execute(select(Admin).where(Admin.username == username))
    admin = result.scalar_one_or_none()
    if admin is None or not verify_password(password, admin.hashed_password):
        return None
    return admin


async def list_admins(db: AsyncSession) -> list[Admin]:
    result = await db.execute(select(Admin).order_by(Admin.id))
    return list(result.scalars().all())


async def create_admin(db: AsyncSession, data: AdminCreate) -> Admin:
    existing = await db.execute(select(Admin.id).where(Admin.username == data.username))
    if existing.scalar_one_or_none() is not None:
        raise InvalidRequest(f"Admin '{data.username}' already exists")

    admin = Admin(
        username=data.username,
        email=str(data.email) if data.email else None,
        hashed_password=hash_password(data.password),
    )
    db.add(admin)
    try:
        await db.flush()
    except IntegrityError as exc:
        # Concurrent create with the same username
        raise InvalidRequest(f"Admin '{data.username}' already exists") from exc
    logger.info("Admin created", admin_id=admin.id, username=admin.username)
    return admin


async def delete_admin(db: AsyncSession, admin_id: int) -> None:
    admin = await db.get(Admin, admin_id)
    if admin is None:
        raise NotFound("Admin not found")
    await db.execute(delete(ReportReceiver).where(ReportReceiver.admin_id == admin_id))
    await db.delete(admin)
    await db.flush()


async def update_admin(db: AsyncSession, admin_id: int, data: AdminUpdate) -> Admin:
    """Apply a partial edit. Sending email as null clears it."""
    admin = await db.get(Admin, admin_id)
    if admin is None:
        raise NotFound("Admin not found")

    if data.username is not None and data.username != admin.username:
        existing = await db.execute(select(Admin.id).where(Admin.username == data.username))
        if existing.scalar_one_or_none() is not None:
            raise InvalidRequest(f"Admin '{data.username}' already exists")
        admin.username = data.username
    if data.password is not None:
        admin.hashed_password = hash_password(data.password)
    if "email" in data.model_fields_set:
        admin.email = str(data.email) if data.email else None

    try:
        await db.flush()
    except IntegrityError as exc:
        raise InvalidRequest(f"Admin '{data.username}' already exists") from exc
    await db.refresh(admin)
    logger.info("Admin updated", admin_id=admin.id, fields=sorted(data.model_fields_set))
    return admin
