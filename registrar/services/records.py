"""Repository and service helpers for the registrar entities.

Every write runs inside a SAVEPOINT so a rejected row leaves the caller's
session and its earlier work intact. Nothing here commits; that is the job of
:func:`registrar.db.get_session` or the caller.
"""
from __future__ import annotations

import contextlib
import logging
from datetime import date, datetime
from typing import Any, Iterator, Sequence, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from registrar.db.models import Batch, Course, CourseTeacher, Registration, Student, Teacher
from registrar.errors import ReferentialViolation, ValidationError, from_pydantic, translate_integrity_error
from registrar.schemas import (
    BatchCreate,
    CourseCreate,
    CourseTeacherCreate,
    RegistrationCreate,
    RegistrationUpdate,
    StudentCreate,
    TeacherCreate,
)
from registrar.status import RegistrationStatus, derive_status

LOGGER = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _parse(schema: type[SchemaT], **values: Any) -> SchemaT:
    try:
        return schema(**values)
    except PydanticValidationError as exc:
        raise from_pydantic(exc) from exc


@contextlib.contextmanager
def write_scope(session: Session) -> Iterator[Session]:
    """Run a write inside a SAVEPOINT, translating integrity errors."""
    try:
        with session.begin_nested():
            yield session
    except IntegrityError as exc:
        raise translate_integrity_error(exc) from exc


def _require(session: Session, model: type, ident: int) -> Any:
    instance = session.get(model, ident)
    if instance is None:
        raise ReferentialViolation(f"{model.__name__} {ident} not found")
    return instance


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------


def create_student(
    session: Session,
    first_name: str,
    last_name: str,
    email: str,
    date_of_birth: date | str | None = None,
    phone_number: str | None = None,
) -> Student:
    data = _parse(
        StudentCreate,
        first_name=first_name,
        last_name=last_name,
        email=email,
        date_of_birth=date_of_birth,
        phone_number=phone_number,
    )
    student = Student(**data.model_dump())
    with write_scope(session):
        session.add(student)
    return student


def get_student(session: Session, student_id: int) -> Student | None:
    return session.get(Student, student_id)


def get_student_by_email(session: Session, email: str) -> Student | None:
    return session.scalar(select(Student).where(Student.email == email))


def list_students(session: Session) -> Sequence[Student]:
    return session.scalars(select(Student).order_by(Student.last_name, Student.first_name)).all()


def delete_student(session: Session, student: Student) -> None:
    """Delete a student together with their registrations."""
    LOGGER.info("Deleting student %s with their registrations", student.id)
    with write_scope(session):
        session.delete(student)
    session.expire_all()


# ---------------------------------------------------------------------------
# Teachers
# ---------------------------------------------------------------------------


def create_teacher(
    session: Session,
    first_name: str,
    last_name: str,
    email: str,
    phone_number: str | None = None,
    department: str | None = None,
) -> Teacher:
    data = _parse(
        TeacherCreate,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        department=department,
    )
    teacher = Teacher(**data.model_dump())
    with write_scope(session):
        session.add(teacher)
    return teacher


def get_teacher(session: Session, teacher_id: int) -> Teacher | None:
    return session.get(Teacher, teacher_id)


def get_teacher_by_email(session: Session, email: str) -> Teacher | None:
    return session.scalar(select(Teacher).where(Teacher.email == email))


def list_teachers(session: Session) -> Sequence[Teacher]:
    return session.scalars(select(Teacher).order_by(Teacher.last_name, Teacher.first_name)).all()


def delete_teacher(session: Session, teacher: Teacher) -> None:
    with write_scope(session):
        session.delete(teacher)
    session.expire_all()


# ---------------------------------------------------------------------------
# Courses and batches
# ---------------------------------------------------------------------------


def create_course(
    session: Session,
    name: str,
    code: str,
    credits: int,
    description: str | None = None,
) -> Course:
    data = _parse(CourseCreate, name=name, code=code, credits=credits, description=description)
    course = Course(**data.model_dump())
    with write_scope(session):
        session.add(course)
    return course


def get_course(session: Session, course_id: int) -> Course | None:
    return session.get(Course, course_id)


def get_course_by_code(session: Session, code: str) -> Course | None:
    return session.scalar(select(Course).where(Course.code == code))


def list_courses(session: Session) -> Sequence[Course]:
    return session.scalars(select(Course).order_by(Course.code)).all()


def delete_course(session: Session, course: Course) -> None:
    """Delete a course; its batches, their registrations and its assignments go with it."""
    LOGGER.info("Deleting course %s and its batches", course.code)
    with write_scope(session):
        session.delete(course)
    session.expire_all()


def create_batch(
    session: Session,
    name: str,
    course_id: int,
    start_date: datetime | str,
    end_date: datetime | str,
) -> Batch:
    data = _parse(BatchCreate, name=name, course_id=course_id, start_date=start_date, end_date=end_date)
    course = _require(session, Course, data.course_id)
    with write_scope(session):
        batch = Batch(name=data.name, start_date=data.start_date, end_date=data.end_date, course=course)
        session.add(batch)
    return batch


def get_batch(session: Session, batch_id: int) -> Batch | None:
    return session.get(Batch, batch_id)


def list_batches_for_course(session: Session, course_id: int) -> Sequence[Batch]:
    stmt = select(Batch).where(Batch.course_id == course_id).order_by(Batch.start_date)
    return session.scalars(stmt).all()


def delete_batch(session: Session, batch: Batch) -> None:
    with write_scope(session):
        session.delete(batch)
    session.expire_all()


# ---------------------------------------------------------------------------
# Course teachers
# ---------------------------------------------------------------------------


def assign_teacher(session: Session, course_id: int, teacher_id: int) -> CourseTeacher:
    data = _parse(CourseTeacherCreate, course_id=course_id, teacher_id=teacher_id)
    course = _require(session, Course, data.course_id)
    teacher = _require(session, Teacher, data.teacher_id)
    with write_scope(session):
        assignment = CourseTeacher(course=course, teacher=teacher)
        session.add(assignment)
    return assignment


def list_teachers_for_course(session: Session, course_id: int) -> Sequence[Teacher]:
    stmt = (
        select(Teacher)
        .join(CourseTeacher, CourseTeacher.teacher_id == Teacher.id)
        .where(CourseTeacher.course_id == course_id)
        .order_by(CourseTeacher.assignment_date, Teacher.id)
    )
    return session.scalars(stmt).all()


def unassign_teacher(session: Session, course_id: int, teacher_id: int) -> bool:
    assignment = session.scalar(
        select(CourseTeacher).where(
            CourseTeacher.course_id == course_id, CourseTeacher.teacher_id == teacher_id
        )
    )
    if assignment is None:
        return False
    with write_scope(session):
        session.delete(assignment)
    return True


# ---------------------------------------------------------------------------
# Registrations
# ---------------------------------------------------------------------------


def create_registration(
    session: Session,
    student_id: int,
    batch_id: int,
    payment: int,
    status: RegistrationStatus | str | None = None,
) -> Registration:
    data = _parse(
        RegistrationCreate, student_id=student_id, batch_id=batch_id, payment=payment, status=status
    )
    student = _require(session, Student, data.student_id)
    batch = _require(session, Batch, data.batch_id)
    with write_scope(session):
        registration = Registration(
            student=student,
            batch=batch,
            payment=data.payment,
            status=derive_status(data.payment, data.status).value,
        )
        session.add(registration)
    return registration


def get_registration(session: Session, registration_id: int) -> Registration | None:
    return session.get(Registration, registration_id)


def list_registrations_for_student(session: Session, student_id: int) -> Sequence[Registration]:
    stmt = (
        select(Registration)
        .where(Registration.student_id == student_id)
        .order_by(Registration.registration_date, Registration.id)
    )
    return session.scalars(stmt).all()


def update_registration(
    session: Session,
    registration: Registration,
    payment: int | None = None,
    status: RegistrationStatus | str | None = None,
) -> Registration:
    """Change payment and/or status; the confirmation rule is re-applied."""
    data = _parse(RegistrationUpdate, payment=payment, status=status)
    try:
        data.ensure_any_field()
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    new_payment = data.payment if data.payment is not None else registration.payment
    requested = data.status if data.status is not None else registration.status
    with write_scope(session):
        registration.payment = new_payment
        registration.status = derive_status(new_payment, requested).value
    return registration


def delete_registration(session: Session, registration: Registration) -> None:
    with write_scope(session):
        session.delete(registration)


__all__ = [
    "assign_teacher",
    "create_batch",
    "create_course",
    "create_registration",
    "create_student",
    "create_teacher",
    "delete_batch",
    "delete_course",
    "delete_registration",
    "delete_student",
    "delete_teacher",
    "get_batch",
    "get_course",
    "get_course_by_code",
    "get_registration",
    "get_student",
    "get_student_by_email",
    "get_teacher",
    "get_teacher_by_email",
    "list_batches_for_course",
    "list_courses",
    "list_registrations_for_student",
    "list_students",
    "list_teachers",
    "list_teachers_for_course",
    "unassign_teacher",
    "update_registration",
    "write_scope",
]
