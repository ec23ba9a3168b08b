"""SQLAlchemy model package."""
from registrar.db.models.batch import Batch
from registrar.db.models.course import Course
from registrar.db.models.course_teacher import CourseTeacher
from registrar.db.models.registration import Registration
from registrar.db.models.student import Student
from registrar.db.models.teacher import Teacher

__all__ = [
    "Batch",
    "Course",
    "CourseTeacher",
    "Registration",
    "Student",
    "Teacher",
]
