"""Convenient re-exports for the registrar service layer."""
from __future__ import annotations

from .records import (
    assign_teacher,
    create_batch,
    create_course,
    create_registration,
    create_student,
    create_teacher,
    delete_batch,
    delete_course,
    delete_registration,
    delete_student,
    delete_teacher,
    get_batch,
    get_course,
    get_course_by_code,
    get_registration,
    get_student,
    get_student_by_email,
    get_teacher,
    get_teacher_by_email,
    list_batches_for_course,
    list_courses,
    list_registrations_for_student,
    list_students,
    list_teachers,
    list_teachers_for_course,
    unassign_teacher,
    update_registration,
)
from .registration import RegistrationOutcome, register_student
from .views import student_course_query, student_course_view

__all__ = [
    "RegistrationOutcome",
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
    "register_student",
    "student_course_query",
    "student_course_view",
    "unassign_teacher",
    "update_registration",
]
