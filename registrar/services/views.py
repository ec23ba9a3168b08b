"""Read-only projections computed on demand."""
from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from registrar.db.models import Batch, Course, Registration, Student
from registrar.schemas import StudentCourseRow


def student_course_query() -> Select:
    """Inner join of students, registrations, batches and courses."""

    return (
        select(
            Student.id.label("student_id"),
            (Student.first_name + " " + Student.last_name).label("student_name"),
            Course.name.label("course_name"),
            Batch.name.label("batch_name"),
            Registration.registration_date.label("registration_date"),
            Registration.status.label("status"),
        )
        .join(Registration, Registration.student_id == Student.id)
        .join(Batch, Registration.batch_id == Batch.id)
        .join(Course, Batch.course_id == Course.id)
        .order_by(Registration.id)
    )


def student_course_view(session: Session) -> list[StudentCourseRow]:
    rows = session.execute(student_course_query()).all()
    return [StudentCourseRow.model_validate(row) for row in rows]


__all__ = ["student_course_query", "student_course_view"]
