"""Pydantic schemas validating registrar writes before they reach the database."""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from registrar.config import MINIMUM_STUDENT_AGE
from registrar.status import RegistrationStatus

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$", re.IGNORECASE)


def latest_birth_date(today: date | None = None, minimum_age: int = MINIMUM_STUDENT_AGE) -> date:
    """Return the most recent date of birth that still satisfies the minimum age.

    The boundary is inclusive: someone turning ``minimum_age`` today is old
    enough, which a strict ``date_of_birth < today - 18 years`` check would
    reject.
    """

    today = today or date.today()
    try:
        return today.replace(year=today.year - minimum_age)
    except ValueError:
        # 29 February in a non-leap target year.
        return today.replace(year=today.year - minimum_age, day=28)


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError(f"{value!r} is not a valid email address")
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------


class StudentCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255)
    date_of_birth: Optional[date] = None
    phone_number: Optional[str] = Field(default=None, max_length=20)

    validate_email = field_validator("email")(_check_email)

    @field_validator("date_of_birth")
    @classmethod
    def validate_age(cls, value: Optional[date]) -> Optional[date]:
        # Inclusive: an 18th birthday today passes.
        if value is not None and value > latest_birth_date():
            raise ValueError(f"student must be at least {MINIMUM_STUDENT_AGE} years old")
        return value


class TeacherCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    department: Optional[str] = Field(default=None, max_length=100)

    validate_email = field_validator("email")(_check_email)


# ---------------------------------------------------------------------------
# Courses and batches
# ---------------------------------------------------------------------------


class CourseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    credits: int = Field(..., ge=1, le=10)


class BatchCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    course_id: int
    start_date: datetime
    end_date: datetime

    @field_validator("start_date")
    @classmethod
    def normalise_start_date(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = _as_utc(value)
        start = info.data.get("start_date")
        if isinstance(start, datetime) and value <= start:
            raise ValueError("end_date must be later than start_date")
        return value


# ---------------------------------------------------------------------------
# Registrations
# ---------------------------------------------------------------------------


class RegistrationCreate(BaseModel):
    student_id: int
    batch_id: int
    payment: int = Field(..., gt=0)
    status: Optional[RegistrationStatus] = None


class RegistrationUpdate(BaseModel):
    payment: Optional[int] = Field(default=None, gt=0)
    status: Optional[RegistrationStatus] = None

    def ensure_any_field(self) -> None:
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided for update")


class CourseTeacherCreate(BaseModel):
    course_id: int
    teacher_id: int


# ---------------------------------------------------------------------------
# Derived view
# ---------------------------------------------------------------------------


class StudentCourseRow(BaseModel):
    student_id: int
    student_name: str
    course_name: str
    batch_name: str
    registration_date: datetime
    status: RegistrationStatus

    model_config = ConfigDict(from_attributes=True)
