"""SQLAlchemy model for verifier authorizations."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from trackwell.common.models import Base, TimestampMixin, UInt64


class AuthorizationModel(Base, TimestampMixin):
    __tablename__ = "verifier_authorizations"

    organization: Mapped[str] = mapped_column(String(255), primary_key=True)
    verifier: Mapped[str] = mapped_column(String(255), primary_key=True)
    verifier_name: Mapped[str] = mapped_column(String(255), default="")
    role: Mapped[str] = mapped_column(String(100), default="")
    authorized_at: Mapped[int] = mapped_column(UInt64, nullable=False)
    authorized_by: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
