"""Teacher domain model."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from registrar.db import Base, utcnow
from registrar.errors import ValidationError
from registrar.schemas import EMAIL_PATTERN


class Teacher(Base):
    """Represents an educator assigned to courses."""

    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    hire_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)

    course_assignments: Mapped[list["CourseTeacher"]] = relationship(
        "CourseTeacher",
        back_populates="teacher",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("email")
    def validate_email(self, key, value):
        if value is not None and not EMAIL_PATTERN.match(value):
            raise ValidationError(f"{value!r} is not a valid email address")
        return value

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Teacher(id={self.id!r}, email={self.email!r})"
