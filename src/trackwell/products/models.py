"""SQLAlchemy model for products."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackwell.common.models import Base, TimestampMixin, UInt64
from trackwell.products.status import ProductStatus


class ProductModel(Base, TimestampMixin):
    __tablename__ = "products"

    product_id: Mapped[int] = mapped_column(
        UInt64, primary_key=True, autoincrement=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    manufacturer: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    batch_number: Mapped[str] = mapped_column(String(255), nullable=False)
    registered_at: Mapped[int] = mapped_column(UInt64, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=ProductStatus.CREATED.value, nullable=False, index=True
    )
    product_type: Mapped[str] = mapped_column(String(100), default="")
    origin_location: Mapped[str] = mapped_column(String(255), default="")
    current_owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    delivery_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expected_delivery_time: Mapped[int | None] = mapped_column(UInt64, nullable=True)
    product_uri: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Per-product sequences, advanced in the same transaction as the record.
    next_checkpoint_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    next_transfer_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @property
    def is_recalled(self) -> bool:
        return self.status == ProductStatus.RECALLED.value
