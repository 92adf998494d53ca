"""Pydantic schemas for menu categories and items."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field

from restaurant_api.schemas.base import BaseResponse


class CategoryWrite(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=100)]


class CategoryResponse(BaseResponse):
    id: int
    name: str


class ItemBase(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=255)]
    category_id: int | None = None
    price: Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]
    # Reference to an already uploaded image; uploads are handled elsewhere
    image: Annotated[str | None, Field(None, max_length=255)] = None


class ItemCreate(ItemBase):
    pass


class ItemUpdate(BaseModel):
    name: Annotated[str | None, Field(None, min_length=1, max_length=255)] = None
    category_id: int | None = None
    price: Annotated[Decimal | None, Field(None, ge=0, max_digits=12, decimal_places=2)] = None
    image: Annotated[str | None, Field(None, max_length=255)] = None


class ItemResponse(ItemBase, BaseResponse):
    id: int


class ItemBasicResponse(BaseResponse):
    """Item without its image, for pickers and order forms."""

    id: int
    name: str
    category_id: int | None
    price: Decimal
