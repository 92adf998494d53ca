"""Public site footer settings API router."""

from fastapi import APIRouter

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.schemas import FooterSettings, FooterSettingsWrite
from restaurant_api.services import InvalidRequest, footer
from restaurant_api.utils.exceptions import raise_bad_request

router = APIRouter(prefix="/api/footer", tags=["footer"])


@router.get("", response_model=FooterSettings)
async def get_footer(db: DbSession) -> FooterSettings:
    return await footer.get_footer(db)


@router.put("", response_model=FooterSettings)
async def update_footer(data: FooterSettingsWrite, db: DbSession, _: CurrentAdminId) -> FooterSettings:
    try:
        updated = await footer.update_footer(db, data)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return updated
