"""Development fixture helpers."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from registrar.db.models import Batch
from registrar.services.records import (
    assign_teacher,
    create_batch,
    create_course,
    create_teacher,
    get_course_by_code,
    get_teacher_by_email,
    list_batches_for_course,
)

LOGGER = logging.getLogger(__name__)

DEMO_COURSE_CODE = "DB101"
DEMO_TEACHER_EMAIL = "demo.teacher@example.com"


def seed_dev_data(session: Session) -> Batch:
    """Populate the database with a demo course, batch and teacher.

    Safe to call repeatedly; existing demo rows are reused.
    """
    course = get_course_by_code(session, DEMO_COURSE_CODE)
    if course is None:
        LOGGER.info("Seeding demo course %s", DEMO_COURSE_CODE)
        course = create_course(
            session,
            name="Introduction to Databases",
            code=DEMO_COURSE_CODE,
            credits=4,
            description="Relational modelling, SQL and transactions.",
        )

    teacher = get_teacher_by_email(session, DEMO_TEACHER_EMAIL)
    if teacher is None:
        teacher = create_teacher(
            session,
            first_name="Demo",
            last_name="Teacher",
            email=DEMO_TEACHER_EMAIL,
            department="Computer Science",
        )
        assign_teacher(session, course_id=course.id, teacher_id=teacher.id)

    batches = list_batches_for_course(session, course.id)
    if batches:
        return batches[0]
    return create_batch(
        session,
        name="DB101 Autumn Cohort",
        course_id=course.id,
        start_date=datetime(2026, 9, 1, tzinfo=timezone.utc),
        end_date=datetime(2026, 12, 18, tzinfo=timezone.utc),
    )
