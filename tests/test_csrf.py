"""CSRF protection on state-changing requests."""

import re

import pytest

from app import create_app
from config import TestingConfig
from extensions import db
from models import Student, User

TOKEN_RE = re.compile(r'name="csrf_token" value="([^"]+)"')


class CsrfConfig(TestingConfig):
    WTF_CSRF_ENABLED = True


@pytest.fixture
def csrf_app():
    app = create_app(CsrfConfig)
    with app.app_context():
        db.create_all()
        user = User(full_name="Admin", email="admin@test.com", is_active=True)
        user.set_password("secret-pass")
        db.session.add(user)
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


class TestCsrf:
    """POSTs without a valid token are rejected with 403."""

    def test_post_without_token(self, csrf_app) -> None:
        client = csrf_app.test_client()
        response = client.post("/auth/login", data={"email": "admin@test.com", "password": "secret-pass"})
        assert response.status_code == 403

    def test_post_with_token_from_form(self, csrf_app) -> None:
        client = csrf_app.test_client()
        page = client.get("/auth/login").get_data(as_text=True)
        token = TOKEN_RE.search(page).group(1)

        response = client.post(
            "/auth/login",
            data={"email": "admin@test.com", "password": "secret-pass", "csrf_token": token},
        )
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/admin/")

    def test_get_needs_no_token(self, csrf_app) -> None:
        """GET endpoints are not subject to the token check."""
        client = csrf_app.test_client()
        assert client.get("/auth/login").status_code == 200


class TestCsrfOnAdminPages:
    """Record mutations on the admin pages need the token too."""

    def login(self, client) -> str:
        page = client.get("/auth/login").get_data(as_text=True)
        token = TOKEN_RE.search(page).group(1)
        response = client.post(
            "/auth/login",
            data={"email": "admin@test.com", "password": "secret-pass", "csrf_token": token},
        )
        assert response.status_code == 302
        return token

    def test_add_without_token_is_rejected(self, csrf_app) -> None:
        """A logged-in add without csrf_token is a 403 and writes nothing."""
        client = csrf_app.test_client()
        self.login(client)

        response = client.post(
            "/admin/students",
            data={"action": "add", "student_id": "C1", "first_name": "Ana", "last_name": "Paz"},
        )
        assert response.status_code == 403
        assert Student.query.count() == 0

    def test_delete_with_wrong_token_is_rejected(self, csrf_app) -> None:
        client = csrf_app.test_client()
        self.login(client)
        student = Student(student_id="C2", first_name="Leo", last_name="Sosa")
        db.session.add(student)
        db.session.commit()

        response = client.post(
            "/admin/students",
            data={"action": "delete", "id": str(student.id), "csrf_token": "not-the-token"},
        )
        assert response.status_code == 403
        assert Student.query.count() == 1

    def test_add_with_token_is_saved(self, csrf_app) -> None:
        client = csrf_app.test_client()
        token = self.login(client)

        response = client.post(
            "/admin/students",
            data={
                "action": "add",
                "student_id": "C3",
                "first_name": "Eva",
                "last_name": "Luna",
                "csrf_token": token,
            },
        )
        assert response.status_code == 302
        assert Student.query.filter_by(student_id="C3").count() == 1
