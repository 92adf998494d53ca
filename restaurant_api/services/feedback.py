"""Anonymous guest feedback."""

from __future__ import annotations

import nh3
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import Feedback
from restaurant_api.schemas.dining import FEEDBACK_MAX_LENGTH
from restaurant_api.services.errors import InvalidRequest, NotFound

logger = get_logger(__name__)


def sanitize_message(message: str) -> str:
    """Strip every HTML tag; script and style bodies are dropped with their tags."""
    return nh3.clean(message, tags=set(), attributes={}).strip()


async def submit_feedback(db: AsyncSession, message: str) -> Feedback:
    """Store a guest message.

    The length limit applies to the trimmed text before sanitizing.
    """
    text = (message or "").strip()
    if not text:
        raise InvalidRequest("Feedback message is required")
    if len(text) > FEEDBACK_MAX_LENGTH:
        raise InvalidRequest(f"Feedback cannot exceed {FEEDBACK_MAX_LENGTH} characters")

    clean = sanitize_message(text)
    if not clean:
        raise InvalidRequest("Feedback message is required")

    feedback = Feedback(message=clean)
    db.add(feedback)
    await db.flush()
    await db.refresh(feedback)
    logger.info("Feedback received", feedback_id=feedback.id, length=len(clean))
    return feedback


async def list_feedback(db: AsyncSession) -> list[Feedback]:
    """Newest first."""
    result = await db.execute(select(Feedback).order_by(Feedback.created_at.desc(), Feedback.id.desc()))
    return list(result.scalars().all())


async def delete_feedback(db: AsyncSession, feedback_id: int) -> None:
    feedback = await db.get(Feedback, feedback_id)
    if feedback is None:
        raise NotFound("Feedback not found")
    await db.delete(feedback)
    await db.flush()


async def delete_all_feedback(db: AsyncSession) -> None:
    await db.execute(delete(Feedback))
