"""Orders and order lines (written by the ordering flow, read-only here)."""

from __future__ import annotations

import enum
from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_api.database import Base
from restaurant_api.models.base import CreatedAtMixin, IntIdMixin, enum_values
from restaurant_api.models.menu import Item


class OrderStatus(str, enum.Enum):
    """Order lifecycle status. Only PAID orders count toward revenue."""

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class Order(IntIdMixin, CreatedAtMixin, Base):
    __tablename__ = "orders"

    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status_enum", values_callable=enum_values),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    lines: Mapped[list[OrderItem]] = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Order {self.id} {self.status.value} {self.total}>"


class OrderItem(IntIdMixin, Base):
    __tablename__ = "order_items"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Unit price at time of sale
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    order: Mapped[Order] = relationship("Order", back_populates="lines")
    item: Mapped[Item] = relationship("Item")
