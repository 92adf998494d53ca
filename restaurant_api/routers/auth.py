"""Admin login and account management API router."""

from fastapi import APIRouter, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.logger import get_logger
from restaurant_api.schemas import (
    AdminCreate,
    AdminResponse,
    AdminUpdate,
    LoginRequest,
    MessageResponse,
    TokenResponse,
)
from restaurant_api.security import create_access_token
from restaurant_api.services import InvalidRequest, NotFound, admins
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found, raise_unauthorized

router = APIRouter(prefix="/api", tags=["auth"])
logger = get_logger(__name__)


@router.post("/admin/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: DbSession) -> TokenResponse:
    """Exchange username and password for a bearer token."""
    admin = await admins.authenticate(db, data.username, data.password)
    if admin is None:
        logger.warning("Failed login attempt", username=data.username)
        raise_unauthorized("Invalid credentials")

    logger.info("Successful login", admin_id=admin.id)
    return TokenResponse(
        admin_id=admin.id,
        username=admin.username,
        access_token=create_access_token(data={"sub": str(admin.id)}),
    )


@router.get("/admins", response_model=list[AdminResponse])
async def list_admins(db: DbSession, _: CurrentAdminId) -> list[AdminResponse]:
    return [AdminResponse.model_validate(a) for a in await admins.list_admins(db)]


@router.post("/admins", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(data: AdminCreate, db: DbSession, _: CurrentAdminId) -> AdminResponse:
    try:
        admin = await admins.create_admin(db, data)
    except InvalidRequest as exc:
        await db.rollback()
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return AdminResponse.model_validate(admin)


@router.put("/admins/{admin_id}", response_model=AdminResponse)
async def update_admin(admin_id: int, data: AdminUpdate, db: DbSession, _: CurrentAdminId) -> AdminResponse:
    try:
        admin = await admins.update_admin(db, admin_id, data)
    except NotFound as exc:
        raise_not_found("Admin", cause=exc)
    except InvalidRequest as exc:
        await db.rollback()
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return AdminResponse.model_validate(admin)


@router.delete("/admins/{admin_id}", response_model=MessageResponse)
async def delete_admin(admin_id: int, db: DbSession, current_admin_id: CurrentAdminId) -> MessageResponse:
    if admin_id == current_admin_id:
        raise_bad_request("Cannot delete the signed-in admin")
    try:
        await admins.delete_admin(db, admin_id)
    except NotFound as exc:
        raise_not_found("Admin", cause=exc)
    await db.commit()
    return MessageResponse(message=f"Admin ID {admin_id} deleted successfully")
