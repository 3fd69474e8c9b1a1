"""SQLAlchemy model for the per-product lifecycle event chain."""

from sqlalchemy import ForeignKey, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from trackwell.common.models import Base, TimestampMixin, UInt64, generate_uuid


class ProductEventModel(Base, TimestampMixin):
    __tablename__ = "product_events"
    __table_args__ = (
        UniqueConstraint("product_id", "sequence", name="uq_event_product_sequence"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    product_id: Mapped[int] = mapped_column(
        UInt64, ForeignKey("products.product_id"), nullable=False, index=True
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    actor: Mapped[str] = mapped_column(String(255), nullable=False)
    logical_time: Mapped[int] = mapped_column(UInt64, nullable=False)
    detail: Mapped[dict] = mapped_column(JSON, default=dict)
    prev_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    event_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    signature: Mapped[str] = mapped_column(String(64), nullable=False)
