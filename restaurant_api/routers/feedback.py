"""Guest feedback API router."""

from fastapi import APIRouter, HTTPException, Request, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.logger import get_logger
from restaurant_api.rate_limit import feedback_rate_limiter
from restaurant_api.schemas import FeedbackCreate, FeedbackResponse, MessageResponse
from restaurant_api.services import InvalidRequest, NotFound, feedback
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found

router = APIRouter(prefix="/api/feedback", tags=["feedback"])
logger = get_logger(__name__)


def _check_rate_limit(request: Request) -> None:
    client_ip = request.client.host if request.client else "unknown"
    allowed, retry_after = feedback_rate_limiter.is_allowed(client_ip)
    if not allowed:
        logger.warning("Feedback rate limit hit", client_ip=client_ip, retry_after=retry_after)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many feedback submissions, please try again later.",
            headers={"Retry-After": str(retry_after)},
        )


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(data: FeedbackCreate, request: Request, db: DbSession) -> FeedbackResponse:
    _check_rate_limit(request)
    try:
        entry = await feedback.submit_feedback(db, data.message)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return FeedbackResponse.model_validate(entry)


@router.get("", response_model=list[FeedbackResponse])
async def list_feedback(db: DbSession, _: CurrentAdminId) -> list[FeedbackResponse]:
    return [FeedbackResponse.model_validate(f) for f in await feedback.list_feedback(db)]


@router.delete("/{feedback_id}", response_model=MessageResponse)
async def delete_feedback(feedback_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await feedback.delete_feedback(db, feedback_id)
    except NotFound as exc:
        raise_not_found("Feedback", cause=exc)
    await db.commit()
    return MessageResponse(message="Feedback deleted successfully", id=feedback_id)


@router.delete("", response_model=MessageResponse)
async def delete_all_feedback(db: DbSession, _: CurrentAdminId) -> MessageResponse:
    await feedback.delete_all_feedback(db)
    await db.commit()
    return MessageResponse(message="All feedback deleted successfully")
