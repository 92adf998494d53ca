"""Menu categories and items."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_api.database import Base
from restaurant_api.models.base import IntIdMixin


class Category(IntIdMixin, Base):
    """Menu category (starters, mains, drinks...)."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    items: Mapped[list[Item]] = relationship("Item", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category {self.name}>"


class Item(IntIdMixin, Base):
    """Sellable menu item."""

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)

    category: Mapped[Category | None] = relationship("Category", back_populates="items")

    def __repr__(self) -> str:
        return f"<Item {self.name} ({self.price})>"
