from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from registrar.schemas import (
    BatchCreate,
    CourseCreate,
    RegistrationCreate,
    StudentCreate,
    TeacherCreate,
    latest_birth_date,
)
from registrar.status import RegistrationStatus


@pytest.mark.parametrize(
    "email",
    [
        "plainaddress",
        "missing-at.example.com",
        "user@domain",
        "user@domain.c",
        "user name@example.com",
        "@example.com",
    ],
)
def test_malformed_emails_are_rejected(email: str) -> None:
    with pytest.raises(ValidationError):
        StudentCreate(first_name="Jo", last_name="Doe", email=email)
    with pytest.raises(ValidationError):
        TeacherCreate(first_name="Jo", last_name="Doe", email=email)


def test_email_pattern_is_case_insensitive() -> None:
    student = StudentCreate(first_name="Grace", last_name="Hopper", email="Grace.Hopper+cs@Example.ORG")
    assert student.email == "Grace.Hopper+cs@Example.ORG"


def test_latest_birth_date_handles_leap_day() -> None:
    assert latest_birth_date(date(2024, 2, 29)) == date(2006, 2, 28)
    assert latest_birth_date(date(2026, 10, 16)) == date(2008, 10, 16)


def test_students_must_be_adults() -> None:
    cutoff = latest_birth_date()

    adult = StudentCreate(first_name="Jo", last_name="Doe", email="jo@example.com", date_of_birth=cutoff)
    assert adult.date_of_birth == cutoff

    with pytest.raises(ValidationError, match="at least 18"):
        StudentCreate(
            first_name="Jo",
            last_name="Doe",
            email="jo@example.com",
            date_of_birth=cutoff + timedelta(days=1),
        )


def test_date_of_birth_accepts_iso_strings() -> None:
    student = StudentCreate(first_name="John", last_name="Doe", email="john@example.com", date_of_birth="2000-01-01")
    assert student.date_of_birth == date(2000, 1, 1)


@pytest.mark.parametrize("credits", [0, -1, 11])
def test_credits_outside_range_are_rejected(credits: int) -> None:
    with pytest.raises(ValidationError):
        CourseCreate(name="Physics", code="PHY100", credits=credits)


@pytest.mark.parametrize("credits", [1, 10])
def test_credit_bounds_are_inclusive(credits: int) -> None:
    assert CourseCreate(name="Physics", code="PHY100", credits=credits).credits == credits


def test_batch_end_must_follow_start() -> None:
    start = datetime(2026, 1, 10, 9, tzinfo=timezone.utc)
    with pytest.raises(ValidationError, match="end_date must be later"):
        BatchCreate(name="Morning", course_id=1, start_date=start, end_date=start)
    with pytest.raises(ValidationError):
        BatchCreate(name="Morning", course_id=1, start_date=start, end_date=start - timedelta(hours=1))


def test_batch_dates_are_normalised_to_utc() -> None:
    batch = BatchCreate(
        name="Evening",
        course_id=1,
        start_date="2026-01-10T18:00:00",
        end_date="2026-01-10T21:00:00+02:00",
    )
    assert batch.start_date.tzinfo == timezone.utc
    assert batch.end_date == datetime(2026, 1, 10, 19, tzinfo=timezone.utc)


def test_registration_requires_positive_payment_and_known_status() -> None:
    with pytest.raises(ValidationError):
        RegistrationCreate(student_id=1, batch_id=1, payment=0)
    with pytest.raises(ValidationError):
        RegistrationCreate(student_id=1, batch_id=1, payment=100, status="Waitlisted")

    registration = RegistrationCreate(student_id=1, batch_id=1, payment=100, status="Cancelled")
    assert registration.status is RegistrationStatus.CANCELLED
