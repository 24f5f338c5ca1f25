"""Shared fixtures: app on in-memory SQLite, logged-in admin client and a small data factory."""

from datetime import date
from decimal import Decimal

import pytest

from app import create_app
from config import TestingConfig
from extensions import db
from models import (
    Assessment,
    Course,
    CourseSection,
    Enrollment,
    Institution,
    Student,
    StudentLearningOutcome,
    Term,
    User,
)
from services.request_context import AdminContext

ADMIN_EMAIL = "admin@test.com"
ADMIN_PASSWORD = "secret-pass"


@pytest.fixture
def app():
    """Flask app with a fresh schema for every test."""
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def admin_user(app) -> User:
    user = User(full_name="Admin Test", email=ADMIN_EMAIL, is_active=True)
    user.set_password(ADMIN_PASSWORD)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def client(app, admin_user):
    """Test client already logged in as the admin user."""
    client = app.test_client()
    response = client.post("/auth/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def ctx(admin_user) -> AdminContext:
    return AdminContext(user_id=admin_user.id, user_name=admin_user.full_name)


class Factory:
    """Creates committed rows with sensible defaults."""

    def __init__(self) -> None:
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def _save(self, instance):
        db.session.add(instance)
        db.session.commit()
        return instance

    def institution(self, **kwargs) -> Institution:
        n = self._next()
        values = {"institution_code": f"INST{n}", "institution_name": f"Institution {n}"}
        values.update(kwargs)
        return self._save(Institution(**values))

    def term(self, **kwargs) -> Term:
        n = self._next()
        values = {"term_code": f"T{n:03d}", "term_name": f"Term {n}", "start_date": date(2025, 1, n % 28 + 1)}
        values.update(kwargs)
        return self._save(Term(**values))

    def course(self, term=None, **kwargs) -> Course:
        n = self._next()
        term = term or self.term()
        values = {"term_fk": term.id, "course_number": f"C{n:03d}", "course_name": f"Course {n}"}
        values.update(kwargs)
        return self._save(Course(**values))

    def section(self, course=None, **kwargs) -> CourseSection:
        n = self._next()
        course = course or self.course()
        values = {"course_fk": course.id, "term_fk": course.term_fk, "crn": f"{10000 + n}"}
        values.update(kwargs)
        return self._save(CourseSection(**values))

    def slo(self, course=None, **kwargs) -> StudentLearningOutcome:
        n = self._next()
        course = course or self.course()
        values = {"course_fk": course.id, "slo_code": f"SLO{n}", "slo_description": f"Outcome {n}"}
        values.update(kwargs)
        return self._save(StudentLearningOutcome(**values))

    def student(self, **kwargs) -> Student:
        n = self._next()
        values = {
            "student_id": f"S{n:04d}",
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "email": f"student{n}@test.com",
        }
        values.update(kwargs)
        return self._save(Student(**values))

    def enrollment(self, student=None, section=None, **kwargs) -> Enrollment:
        student = student or self.student()
        section = section or self.section()
        values = {"student_fk": student.id, "course_section_fk": section.id}
        values.update(kwargs)
        return self._save(Enrollment(**values))

    def assessment(self, enrollment=None, slo=None, **kwargs) -> Assessment:
        enrollment = enrollment or self.enrollment()
        slo = slo or self.slo()
        values = {
            "enrollment_fk": enrollment.id,
            "student_learning_outcome_fk": slo.id,
            "score_value": Decimal("80.50"),
            "achievement_level": "met",
            "assessed_date": date(2025, 10, 1),
        }
        values.update(kwargs)
        return self._save(Assessment(**values))


@pytest.fixture
def make(app) -> Factory:
    return Factory()
