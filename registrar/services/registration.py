"""Composite student registration procedure."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from registrar.errors import ConstraintViolation
from registrar.services.records import create_registration, create_student

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RegistrationOutcome:
    """Result of :func:`register_student`; failures are reported, not raised."""

    student_id: int | None = None
    registration_id: int | None = None
    error: ConstraintViolation | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def register_student(
    session: Session,
    first_name: str,
    last_name: str,
    email: str,
    date_of_birth: date | str | None,
    batch_id: int,
    payment: int,
) -> RegistrationOutcome:
    """Create a student and register them in ``batch_id`` as one unit.

    Both rows are written inside a single SAVEPOINT. If either insert is
    rejected the SAVEPOINT is rolled back, so neither row survives, and the
    failure is logged and returned on the outcome instead of being raised.
    The registration status is left to the payment confirmation rule.
    """

    try:
        with session.begin_nested():
            student = create_student(
                session,
                first_name=first_name,
                last_name=last_name,
                email=email,
                date_of_birth=date_of_birth,
            )
            registration = create_registration(
                session, student_id=student.id, batch_id=batch_id, payment=payment
            )
    except ConstraintViolation as exc:
        LOGGER.warning("Error registering student: %s", exc)
        return RegistrationOutcome(error=exc)

    LOGGER.info(
        "Registered student %s in batch %s with status %s",
        student.id,
        batch_id,
        registration.status,
    )
    return RegistrationOutcome(student_id=student.id, registration_id=registration.id)


__all__ = ["RegistrationOutcome", "register_student"]
