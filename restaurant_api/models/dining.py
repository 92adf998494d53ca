"""Dining-room tables and the requests guests send from them."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_api.database import Base
from restaurant_api.models.base import CreatedAtMixin, IntIdMixin


class DiningTable(IntIdMixin, CreatedAtMixin, Base):
    """A numbered table; its QR code opens the public menu for that table."""

    __tablename__ = "tables"

    table_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    # URL encoded in the table's QR code; None until a code is generated
    menu_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<DiningTable {self.table_number}>"


class CallWaiterRequest(IntIdMixin, CreatedAtMixin, Base):
    """A guest asking for service at a table."""

    __tablename__ = "call_waiter_requests"

    table_number: Mapped[int] = mapped_column(
        ForeignKey("tables.table_number", ondelete="CASCADE"), nullable=False, index=True
    )


class Feedback(IntIdMixin, CreatedAtMixin, Base):
    """Anonymous guest feedback, stored as plain text."""

    __tablename__ = "feedback"

    message: Mapped[str] = mapped_column(Text, nullable=False)


class FooterSetting(IntIdMixin, Base):
    """One row of the public site footer (social link, contact, address, feature flag)."""

    __tablename__ = "footer_settings"

    type: Mapped[str] = mapped_column(String(20), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[str] = mapped_column(String(500), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<FooterSetting {self.type}:{self.label}>"
