"""Student model."""
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from registrar.config import MINIMUM_STUDENT_AGE
from registrar.db import Base, utcnow
from registrar.errors import ValidationError
from registrar.schemas import EMAIL_PATTERN, latest_birth_date


class Student(Base):
    """A person who registers for course batches."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    enrollment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)

    registrations: Mapped[list["Registration"]] = relationship(
        "Registration",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("email")
    def validate_email(self, key, value):
        if value is not None and not EMAIL_PATTERN.match(value):
            raise ValidationError(f"{value!r} is not a valid email address")
        return value

    @validates("date_of_birth")
    def validate_date_of_birth(self, key, value):
        if value is not None and value > latest_birth_date():
            raise ValidationError(f"student must be at least {MINIMUM_STUDENT_AGE} years old")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Student(id={self.id!r}, email={self.email!r})"
