"""Stock purchases and wastage records."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_api.database import Base
from restaurant_api.models.admin import Admin
from restaurant_api.models.base import CreatedAtMixin, IntIdMixin
from restaurant_api.models.expense import Expense
from restaurant_api.models.menu import Item


class StockEntry(IntIdMixin, CreatedAtMixin, Base):
    """A purchase of stock for a menu item; cost is the total paid."""

    __tablename__ = "stock"

    item_id: Mapped[int] = mapped_column(ForeignKey("items.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    item: Mapped[Item] = relationship("Item")


class Wastage(IntIdMixin, CreatedAtMixin, Base):
    """Spoiled or discarded stock, valued at item price and mirrored as an expense."""

    __tablename__ = "wastage"

    item_id: Mapped[int] = mapped_column(ForeignKey("items.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    )
    expense_id: Mapped[int | None] = mapped_column(
        ForeignKey("expenses.id", ondelete="SET NULL"), nullable=True
    )

    item: Mapped[Item] = relationship("Item")
    creator: Mapped[Admin | None] = relationship("Admin")
    expense: Mapped[Expense | None] = relationship("Expense")
