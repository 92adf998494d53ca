"""Authentication helpers for request-scoped admin context."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.database import get_db
from restaurant_api.models import Admin
from restaurant_api.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login")


def _credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_admin_id(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> int:
    """Resolve the current admin ID from the bearer token."""
    payload = decode_access_token(token)
    if not payload:
        raise _credentials_error("Could not validate credentials")

    subject = payload.get("sub")
    if not subject:
        raise _credentials_error("Token missing subject")

    try:
        admin_id = int(subject)
    except (TypeError, ValueError):
        raise _credentials_error("Invalid admin ID format in token")

    result = await db.execute(select(Admin.id).where(Admin.id == admin_id))
    if result.scalar_one_or_none() is None:
        raise _credentials_error("Admin not found")

    return admin_id
