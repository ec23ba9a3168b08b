"""Integration tests for the composite registration procedure and the view."""
from __future__ import annotations

import logging

import pytest
import sqlalchemy as sa
from sqlalchemy import select, text
from sqlalchemy.orm import Session

from registrar.db import STUDENT_COURSE_VIEW, Base
from registrar.db.fixtures import seed_dev_data
from registrar.db.models import Batch, Course, CourseTeacher, Registration, Student, Teacher
from registrar.errors import ReferentialViolation, UniquenessViolation, ValidationError
from registrar.services import (
    create_registration,
    create_student,
    delete_course,
    get_registration,
    get_student,
    register_student,
    student_course_view,
)


def count_rows(session: Session, model: type[Base]) -> int:
    return session.scalar(select(sa.func.count()).select_from(model)) or 0


@pytest.fixture()
def batch(session: Session) -> Batch:
    return seed_dev_data(session)


def test_seed_data_is_idempotent(session: Session) -> None:
    first = seed_dev_data(session)
    second = seed_dev_data(session)

    assert first.id == second.id == 1
    assert count_rows(session, Course) == 1
    assert count_rows(session, Teacher) == 1
    assert count_rows(session, CourseTeacher) == 1


def test_register_student_creates_confirmed_registration(session: Session, batch: Batch) -> None:
    outcome = register_student(session, "John", "Doe", "john@example.com", "2000-01-01", batch_id=1, payment=600)

    assert outcome.ok
    outcome.raise_for_error()
    student = get_student(session, outcome.student_id)
    registration = get_registration(session, outcome.registration_id)
    assert student.full_name == "John Doe"
    assert registration.student_id == student.id
    assert registration.batch_id == batch.id
    assert registration.status == "Confirmed"
    assert count_rows(session, Student) == 1
    assert count_rows(session, Registration) == 1


def test_small_payment_leaves_registration_pending(session: Session, batch: Batch) -> None:
    outcome = register_student(session, "Mary", "Major", "mary@example.com", "1999-05-04", batch.id, 100)

    assert get_registration(session, outcome.registration_id).status == "Pending"


def test_repeated_email_rolls_back_everything(session: Session, batch: Batch, caplog) -> None:
    register_student(session, "John", "Doe", "john@example.com", "2000-01-01", batch_id=batch.id, payment=600)
    caplog.set_level(logging.WARNING, logger="registrar.services.registration")

    outcome = register_student(session, "Johnny", "Doe", "john@example.com", "2001-02-03", batch_id=batch.id, payment=50)

    assert not outcome.ok
    assert outcome.student_id is None
    assert isinstance(outcome.error, UniquenessViolation)
    assert "Error registering student" in caplog.text
    assert count_rows(session, Student) == 1
    assert count_rows(session, Registration) == 1
    with pytest.raises(UniquenessViolation):
        outcome.raise_for_error()


def test_failed_registration_undoes_student_insert(session: Session, batch: Batch) -> None:
    outcome = register_student(session, "Lost", "Student", "lost@example.com", "1995-07-07", batch_id=999, payment=300)

    assert isinstance(outcome.error, ReferentialViolation)
    assert count_rows(session, Student) == 0
    assert count_rows(session, Registration) == 0


@pytest.mark.parametrize(
    ("email", "date_of_birth", "payment"),
    [
        ("bad-address", "2000-01-01", 100),
        ("kid@example.com", "2020-01-01", 100),
        ("free@example.com", "2000-01-01", 0),
    ],
)
def test_invalid_input_is_reported_not_raised(
    session: Session, batch: Batch, email: str, date_of_birth: str, payment: int
) -> None:
    outcome = register_student(session, "Val", "Idation", email, date_of_birth, batch.id, payment)

    assert isinstance(outcome.error, ValidationError)
    assert count_rows(session, Student) == 0


def test_failure_keeps_earlier_work_in_session(session: Session, batch: Batch) -> None:
    existing = create_student(session, "Early", "Bird", "early@example.com")

    register_student(session, "Late", "Comer", "late@example.com", "2000-01-01", batch_id=404, payment=10)

    assert get_student(session, existing.id) is not None
    assert count_rows(session, Student) == 1


def test_student_course_view_reflects_registrations(session: Session, batch: Batch) -> None:
    outcome = register_student(session, "John", "Doe", "john@example.com", "2000-01-01", batch_id=batch.id, payment=600)
    registration = get_registration(session, outcome.registration_id)

    rows = student_course_view(session)

    assert len(rows) == 1
    row = rows[0]
    assert row.student_id == outcome.student_id
    assert row.student_name == "John Doe"
    assert row.course_name == batch.course.name
    assert row.batch_name == batch.name
    assert row.registration_date.replace(tzinfo=None) == registration.registration_date.replace(tzinfo=None)
    assert row.status == "Confirmed"


def test_database_view_matches_query(session: Session, batch: Batch) -> None:
    register_student(session, "John", "Doe", "john@example.com", "2000-01-01", batch_id=batch.id, payment=600)
    other = create_student(session, "Jane", "Roe", "jane@example.com")
    create_registration(session, other.id, batch.id, 200, status="Cancelled")

    raw = session.execute(
        text(f"SELECT student_name, course_name, batch_name, status FROM {STUDENT_COURSE_VIEW} ORDER BY student_id")
    ).all()

    assert [tuple(row) for row in raw] == [
        ("John Doe", "Introduction to Databases", "DB101 Autumn Cohort", "Confirmed"),
        ("Jane Roe", "Introduction to Databases", "DB101 Autumn Cohort", "Cancelled"),
    ]
    assert [(r.student_name, r.status) for r in student_course_view(session)] == [
        (name, status) for name, _, _, status in raw
    ]


def test_view_drops_rows_when_course_is_deleted(session: Session, batch: Batch) -> None:
    register_student(session, "John", "Doe", "john@example.com", "2000-01-01", batch_id=batch.id, payment=600)

    delete_course(session, batch.course)

    assert student_course_view(session) == []
    assert count_rows(session, Student) == 1
