"""Scheduled report opt-ins."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_api.database import Base
from restaurant_api.models.admin import Admin
from restaurant_api.models.base import IntIdMixin, TimestampMixin


class ReportReceiver(IntIdMixin, TimestampMixin, Base):
    """Which scheduled reports an admin receives by email."""

    __tablename__ = "report_receivers"

    admin_id: Mapped[int] = mapped_column(
        ForeignKey("admins.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    receive_daily: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    receive_monthly: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    receive_yearly: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    admin: Mapped[Admin] = relationship("Admin")
