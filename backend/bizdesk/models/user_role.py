"""Role assignment; one row per user (unique user_id makes upserts atomic)."""
from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdesk.db.session import Base
from bizdesk.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class UserRole(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(32), nullable=False)

    profile: Mapped["Profile"] = relationship("Profile", back_populates="roles")
