"""Menu categories and items API router.

Reads are public; writes need an admin token.
"""

from fastapi import APIRouter, status

from restaurant_api.deps import CurrentAdminId, DbSession
from restaurant_api.schemas import (
    CategoryResponse,
    CategoryWrite,
    ItemBasicResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
    MessageResponse,
)
from restaurant_api.services import InvalidRequest, NotFound, menu
from restaurant_api.utils.exceptions import raise_bad_request, raise_not_found

router = APIRouter(prefix="/api", tags=["menu"])


@router.get("/menu", response_model=list[CategoryResponse])
async def list_categories(db: DbSession) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in await menu.list_categories(db)]


@router.post("/menu", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryWrite, db: DbSession, _: CurrentAdminId) -> CategoryResponse:
    try:
        category = await menu.create_category(db, data)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.put("/menu/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryWrite,
    db: DbSession,
    _: CurrentAdminId,
) -> CategoryResponse:
    try:
        category = await menu.update_category(db, category_id, data)
    except NotFound as exc:
        raise_not_found("Category", cause=exc)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.delete("/menu/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await menu.delete_category(db, category_id)
    except NotFound as exc:
        raise_not_found("Category", cause=exc)
    await db.commit()
    return MessageResponse(message="Category deleted successfully")


@router.get("/items", response_model=list[ItemResponse])
async def list_items(db: DbSession, category_id: int | None = None) -> list[ItemResponse]:
    return [ItemResponse.model_validate(i) for i in await menu.list_items(db, category_id)]


@router.get("/items/basic", response_model=list[ItemBasicResponse])
async def list_items_basic(db: DbSession) -> list[ItemBasicResponse]:
    return [ItemBasicResponse.model_validate(i) for i in await menu.list_items(db)]


@router.get("/items/{item_id}", response_model=ItemResponse)
async def get_item(item_id: int, db: DbSession) -> ItemResponse:
    try:
        item = await menu.get_item(db, item_id)
    except NotFound as exc:
        raise_not_found("Item", cause=exc)
    return ItemResponse.model_validate(item)


@router.post("/items", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(data: ItemCreate, db: DbSession, _: CurrentAdminId) -> ItemResponse:
    try:
        item = await menu.create_item(db, data)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return ItemResponse.model_validate(item)


@router.put("/items/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    data: ItemUpdate,
    db: DbSession,
    _: CurrentAdminId,
) -> ItemResponse:
    try:
        item = await menu.update_item(db, item_id, data)
    except NotFound as exc:
        raise_not_found("Item", cause=exc)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
    await db.commit()
    return ItemResponse.model_validate(item)


@router.delete("/items/{item_id}", response_model=MessageResponse)
async def delete_item(item_id: int, db: DbSession, _: CurrentAdminId) -> MessageResponse:
    try:
        await menu.delete_item(db, item_id)
    except NotFound as exc:
        raise_not_found("Item", cause=exc)
    await db.commit()
    return MessageResponse(message="Item deleted successfully")
