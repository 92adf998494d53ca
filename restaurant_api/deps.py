"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from restaurant_api.deps import CurrentAdminId, DbSession, SessionMaker

    async def my_endpoint(db: DbSession, admin_id: CurrentAdminId):
        # db is AsyncSession with get_db dependency injected
        # admin_id is int with get_current_admin_id dependency injected
        ...

SessionMaker is for services that fan out concurrent queries and need one
session per query.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from restaurant_api.auth import get_current_admin_id
from restaurant_api.database import get_db, get_session_maker

DbSession = Annotated[AsyncSession, Depends(get_db)]
SessionMaker = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)]
CurrentAdminId = Annotated[int, Depends(get_current_admin_id)]

__all__ = ["CurrentAdminId", "DbSession", "SessionMaker"]
