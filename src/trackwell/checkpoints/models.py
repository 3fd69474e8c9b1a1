"""SQLAlchemy model for product checkpoints."""

from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackwell.common.digest import DIGEST_HEX_LENGTH
from trackwell.common.models import Base, TimestampMixin, UInt64


class CheckpointModel(Base, TimestampMixin):
    """One handling event. Rows are written once and never updated."""

    __tablename__ = "checkpoints"

    product_id: Mapped[int] = mapped_column(
        UInt64, ForeignKey("products.product_id"), primary_key=True
    )
    checkpoint_id: Mapped[int] = mapped_column(
        UInt64, primary_key=True, autoincrement=False
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    timestamp: Mapped[int] = mapped_column(UInt64, nullable=False)
    operator: Mapped[str] = mapped_column(String(255), nullable=False)
    verified_by: Mapped[str] = mapped_column(String(255), nullable=False)
    checkpoint_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    humidity: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    attestation_hash: Mapped[str] = mapped_column(
        String(DIGEST_HEX_LENGTH), nullable=False
    )
