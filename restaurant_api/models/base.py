"""Base model mixins for common patterns."""

from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column


def _now() -> datetime:
    # Restaurant-local wall clock; period buckets are computed on stored values
    return datetime.now()


def enum_values(enum_cls: type) -> list[str]:
    """Persist enum values (not member names) in Enum columns."""
    return [member.value for member in enum_cls]


class IntIdMixin:
    """Mixin for integer autoincrement primary key."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    """Mixin for created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at/updated_at timestamps."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=_now,
        onupdate=_now,
    )
