"""Menu categories and items."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.models import Category, Item
from restaurant_api.schemas.menu import CategoryWrite, ItemCreate, ItemUpdate
from restaurant_api.services.errors import InvalidRequest, NotFound


async def list_categories(db: AsyncSession) -> list[Category]:
    result = await db.execute(select(Category).order_by(Category.id))
    return list(result.scalars().all())


async def get_category(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if category is None:
        raise NotFound("Category not found")
    return category


async def create_category(db: AsyncSession, data: CategoryWrite) -> Category:
    name = data.name.strip()
    if not name:
        raise InvalidRequest("Category name is required")
    category = Category(name=name)
    db.add(category)
    await db.flush()
    return category


async def update_category(db: AsyncSession, category_id: int, data: CategoryWrite) -> Category:
    category = await get_category(db, category_id)
    name = data.name.strip()
    if not name:
        raise InvalidRequest("Category name is required")
    category.name = name
    await db.flush()
    return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    category = await get_category(db, category_id)
    await db.delete(category)
    await db.flush()


async def _check_category(db: AsyncSession, category_id: int | None) -> None:
    if category_id is not None and await db.get(Category, category_id) is None:
        raise InvalidRequest("Invalid category_id: Category does not exist")


async def list_items(db: AsyncSession, category_id: int | None = None) -> list[Item]:
    query = select(Item).order_by(Item.id)
    if category_id is not None:
        query = query.where(Item.category_id == category_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_item(db: AsyncSession, item_id: int) -> Item:
    item = await db.get(Item, item_id)
    if item is None:
        raise NotFound("Item not found")
    return item


async def create_item(db: AsyncSession, data: ItemCreate) -> Item:
    await _check_category(db, data.category_id)
    item = Item(**data.model_dump())
    db.add(item)
    await db.flush()
    return item


async def update_item(db: AsyncSession, item_id: int, data: ItemUpdate) -> Item:
    item = await get_item(db, item_id)
    update_data = data.model_dump(exclude_unset=True)
    if "category_id" in update_data:
        await _check_category(db, update_data["category_id"])

    for field, value in update_data.items():
        setattr(item, field, value)
    await db.flush()
    return item


async def delete_item(db: AsyncSession, item_id: int) -> None:
    item = await get_item(db, item_id)
    await db.delete(item)
    await db.flush()
