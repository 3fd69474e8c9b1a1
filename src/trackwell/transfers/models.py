"""SQLAlchemy model for ownership transfers."""

from enum import Enum

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackwell.common.models import Base, TimestampMixin, UInt64


class TransferStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class TransferModel(Base, TimestampMixin):
    __tablename__ = "transfers"

    product_id: Mapped[int] = mapped_column(
        UInt64, ForeignKey("products.product_id"), primary_key=True
    )
    transfer_id: Mapped[int] = mapped_column(
        UInt64, primary_key=True, autoincrement=False
    )
    transferor: Mapped[str] = mapped_column(String(255), nullable=False)
    transferee: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    initiated_at: Mapped[int] = mapped_column(UInt64, nullable=False)
    completed_at: Mapped[int | None] = mapped_column(UInt64, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=TransferStatus.PENDING.value, nullable=False
    )
    # Terms set on initiate; replaced by the reason when rejected.
    conditions: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def is_pending(self) -> bool:
        return self.status == TransferStatus.PENDING.value
