"""Admin account model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_api.database import Base
from restaurant_api.models.base import CreatedAtMixin, IntIdMixin


class Admin(IntIdMixin, CreatedAtMixin, Base):
    """Back-office user allowed to manage the restaurant and receive reports."""

    __tablename__ = "admins"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Admin {self.username}>"
