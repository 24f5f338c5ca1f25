# models/__init__.py
from .user import User
from .institution import Institution
from .term import TermYear, Term
from .program import Program
from .outcome import InstitutionalOutcome, ProgramOutcome, StudentLearningOutcome
from .course import Course, CourseSection
from .student import Student, Enrollment, ENROLLMENT_STATUSES
from .assessment import Assessment, ACHIEVEMENT_LEVELS

__all__ = [
    "User",
    "Institution",
    "TermYear",
    "Term",
    "Program",
    "InstitutionalOutcome",
    "ProgramOutcome",
    "StudentLearningOutcome",
    "Course",
    "CourseSection",
    "Student",
    "Enrollment",
    "ENROLLMENT_STATUSES",
    "Assessment",
    "ACHIEVEMENT_LEVELS",
]
