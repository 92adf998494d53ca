"""Expense ledger API router."""

from fastapi import APIRouter, Query, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.logger import get_logger
from restaurant_api.schemas import ExpenseCreate, ExpenseResponse, ExpenseUpdate, MessageResponse
from restaurant_api.services import InvalidRequest, NotFound, expenses
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found

router = APIRouter(prefix="/api/expenses", tags=["expenses"])
logger = get_logger(__name__)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    data: ExpenseCreate,
    db: DbSession,
    _: CurrentAdminId,
) -> ExpenseResponse:
    """Record an expense; recurring dates are computed two periods ahead."""
    try:
        expense = await expenses.create_expense(db, data)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return ExpenseResponse.model_validate(expense)


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(
    db: DbSession,
    _: CurrentAdminId,
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
) -> list[ExpenseResponse]:
    try:
        rows = await expenses.list_expenses(db, start, end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    return [ExpenseResponse.model_validate(row) for row in rows]


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    data: ExpenseUpdate,
    db: DbSession,
    _: CurrentAdminId,
) -> ExpenseResponse:
    try:
        expense = await expenses.update_expense(db, expense_id, data)
    except NotFound as exc:
        logger.debug("Expense not found for update", expense_id=expense_id)
        raise_not_found("Expense entry", cause=exc)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return ExpenseResponse.model_validate(expense)


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: int,
    db: DbSession,
    _: CurrentAdminId,
) -> MessageResponse:
    try:
        await expenses.delete_expense(db, expense_id)
    except NotFound as exc:
        raise_not_found("Expense entry", cause=exc)
    await db.commit()
    return MessageResponse(message="Expense deleted")
