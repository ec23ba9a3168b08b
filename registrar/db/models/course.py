"""Course model."""
from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registrar.db import Base


class Course(Base):
    """A subject offered in one or more batches."""

    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("credits > 0 AND credits <= 10", name="ck_courses_credits"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)

    batches: Mapped[list["Batch"]] = relationship(
        "Batch",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Batch.start_date",
    )
    teacher_assignments: Mapped[list["CourseTeacher"]] = relationship(
        "CourseTeacher",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"Course(id={self.id!r}, code={self.code!r})"
