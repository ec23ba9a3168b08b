"""Batch model."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registrar.db import Base


class Batch(Base):
    """A scheduled offering of a course."""

    __tablename__ = "batches"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_batches_dates"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    course: Mapped["Course"] = relationship("Course", back_populates="batches")
    registrations: Mapped[list["Registration"]] = relationship(
        "Registration",
        back_populates="batch",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"Batch(id={self.id!r}, name={self.name!r})"
