"""SQLAlchemy model for product certifications."""

from enum import Enum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from trackwell.common.digest import DIGEST_HEX_LENGTH
from trackwell.common.models import Base, TimestampMixin, UInt64


class CertificationStatus(str, Enum):
    VALID = "valid"
    REVOKED = "revoked"


class CertificationModel(Base, TimestampMixin):
    """At most one live record per (product, certification type)."""

    __tablename__ = "certifications"

    product_id: Mapped[int] = mapped_column(
        UInt64, ForeignKey("products.product_id"), primary_key=True
    )
    cert_type: Mapped[str] = mapped_column(String(100), primary_key=True)
    certifier: Mapped[str] = mapped_column(String(255), nullable=False)
    issued_at: Mapped[int] = mapped_column(UInt64, nullable=False)
    expiration_time: Mapped[int] = mapped_column(UInt64, nullable=False)
    cert_hash: Mapped[str] = mapped_column(String(DIGEST_HEX_LENGTH), nullable=False)
    cert_uri: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    cert_status: Mapped[str] = mapped_column(
        String(20), default=CertificationStatus.VALID.value, nullable=False
    )

    def is_valid_at(self, now: int) -> bool:
        """Valid and unexpired. Expiry is derived, never stored."""
        return (
            self.cert_status == CertificationStatus.VALID.value
            and self.expiration_time > now
        )
