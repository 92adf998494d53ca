"""Public site footer: social links, contact details, address and feature flags.

Stored as flat (type, label, value) rows and regrouped on read.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import FooterSetting
from restaurant_api.schemas.dining import FooterSettings, FooterSettingsWrite, SocialLink
from restaurant_api.services.errors import InvalidRequest

logger = get_logger(__name__)

SOCIAL = "social"
CONTACT = "contact"
LOCATION = "location"
FEATURE = "feature"
CALL_WAITER_FLAG = "call_waiter_enabled"


async def get_footer(db: AsyncSession) -> FooterSettings:
    result = await db.execute(select(FooterSetting).order_by(FooterSetting.id))
    footer = FooterSettings()
    for row in result.scalars().all():
        if row.type == SOCIAL:
            footer.social.append(SocialLink(label=row.label, value=row.value, display_name=row.display_name or ""))
        elif row.type == CONTACT and row.label in ("phone", "email"):
            getattr(footer.contact, row.label).append(row.value)
        elif row.type == LOCATION and row.label == "address":
            footer.location.address.append(row.value)
        elif row.type == FEATURE and row.label == CALL_WAITER_FLAG:
            footer.features.call_waiter_enabled = row.value == "true"
    return footer


def _rows(data: FooterSettingsWrite) -> list[FooterSetting]:
    rows = []
    for link in data.social:
        label, value = link.label.strip(), link.value.strip()
        if label and value:
            rows.append(FooterSetting(type=SOCIAL, label=label, value=value, display_name=link.display_name or label))

    if data.contact is not None:
        for label in ("phone", "email"):
            rows.extend(
                FooterSetting(type=CONTACT, label=label, value=value.strip())
                for value in getattr(data.contact, label)
                if value.strip()
            )

    if data.location is not None:
        rows.extend(
            FooterSetting(type=LOCATION, label="address", value=value.strip())
            for value in data.location.address
            if value.strip()
        )

    if data.features is not None:
        flag = "true" if data.features.call_waiter_enabled else "false"
        rows.append(FooterSetting(type=FEATURE, label=CALL_WAITER_FLAG, value=flag))
    return rows


async def update_footer(db: AsyncSession, data: FooterSettingsWrite) -> FooterSettings:
    """Replace every footer row with the submitted settings."""
    rows = _rows(data)
    if not rows:
        raise InvalidRequest("No valid settings provided")

    await db.execute(delete(FooterSetting))
    db.add_all(rows)
    await db.flush()
    logger.info("Footer settings replaced", rows=len(rows))
    return await get_footer(db)


async def call_waiter_enabled(db: AsyncSession) -> bool:
    result = await db.execute(
        select(FooterSetting.value).where(
            FooterSetting.type == FEATURE,
            FooterSetting.label == CALL_WAITER_FLAG,
        )
    )
    value = result.scalars().first()
    # Enabled unless an admin switched it off
    return value is None or value == "true"
