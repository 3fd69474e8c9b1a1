"""Declarative base and shared mixins for Trackwell models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


UINT64_MAX = 2**64 - 1
_UINT64_OFFSET = 2**63


class UInt64(TypeDecorator):
    """Unsigned 64-bit integer kept in a signed BIGINT column.

    Values are shifted down by 2**63 when written and back up when read,
    so the whole uint64 range fits and SQL ordering and comparisons on
    the column still match the unsigned order.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(value) - _UINT64_OFFSET

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value + _UINT64_OFFSET


class TimestampMixin:
    """Wall-clock bookkeeping columns, independent of the logical clock."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class SequenceModel(Base):
    """Named monotonic counter, advanced inside the transaction it numbers."""

    __tablename__ = "sequences"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    next_value: Mapped[int] = mapped_column(default=0, nullable=False)
