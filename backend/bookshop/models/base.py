"""Column mixins shared by the shop's tables."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(UTC)


class PKMixin:
    """Integer surrogate primary key ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class CreatedAtMixin:
    """Insert-only ``created_at``, set by Python and backed by a server default.

    Ledger rows use it alone: they are written once and never updated.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )


class TimestampMixin(CreatedAtMixin):
    """``created_at`` plus an ``updated_at`` refreshed on every UPDATE."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class ReprMixin:
    """``<Class id=.. attr=..>`` repr listing ``__repr_attrs__``."""

    __repr_attrs__ = ()

    def __repr__(self) -> str:
        fields = ("id", *self.__repr_attrs__)
        shown = " ".join(f"{name}={getattr(self, name, None)!r}" for name in fields)
        return f"<{type(self).__name__} {shown}>"
