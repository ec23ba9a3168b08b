"""Course to teacher assignment model."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registrar.db import Base, utcnow


class CourseTeacher(Base):
    """Links a teacher to a course they teach."""

    __tablename__ = "course_teachers"
    __table_args__ = (
        UniqueConstraint("course_id", "teacher_id", name="uq_course_teachers_course_teacher"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    teacher_id: Mapped[int] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    assignment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    course: Mapped["Course"] = relationship("Course", back_populates="teacher_assignments")
    teacher: Mapped["Teacher"] = relationship("Teacher", back_populates="course_assignments")

    def __repr__(self) -> str:  # pragma: no cover
        return f"CourseTeacher(course_id={self.course_id!r}, teacher_id={self.teacher_id!r})"
