"""Employee entity: personal, employment and compensation fields."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdesk.db.session import Base
from bizdesk.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class Employee(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "employees"

    # Personal
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str] = mapped_column(String(32), nullable=False, default="prefer_not_to_say")
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    state: Mapped[str | None] = mapped_column(String(128), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    country: Mapped[str | None] = mapped_column(String(128), nullable=True)

    # Employment
    department_id: Mapped[str | None] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    employment_type: Mapped[str] = mapped_column(String(32), nullable=False, default="full_time")
    employment_status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Compensation
    base_salary: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="MRU")
    payment_frequency: Mapped[str] = mapped_column(String(16), nullable=False, default="monthly")

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    department: Mapped["Department | None"] = relationship("Department", back_populates="employees")
