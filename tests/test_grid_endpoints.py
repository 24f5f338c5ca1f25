"""Integration tests for the JSON grid endpoints against an in-memory database."""

from datetime import date
from decimal import Decimal

import pytest

from extensions import db
from models import Program, TermYear


@pytest.fixture
def students(make):
    """Twelve students, S0001..S0012; every fourth one inactive."""
    rows = []
    for n in range(1, 13):
        rows.append(
            make.student(
                student_id=f"S{n:04d}",
                first_name=f"Name{n}",
                last_name=f"Family{n}",
                is_active=(n % 4 != 0),
            )
        )
    return rows


class TestStudentsEndpoint:
    """Envelope, paging, ordering and searching on /api/students/data."""

    def test_example_request(self, client, students) -> None:
        """start=0&length=10 ordered by the second column desc, draw echoed."""
        response = client.get(
            "/api/students/data?draw=5&start=0&length=10&order[0][column]=1&order[0][dir]=desc"
        )
        body = response.get_json()

        assert response.status_code == 200
        assert body["draw"] == 5
        assert body["recordsTotal"] == 12
        assert body["recordsFiltered"] == 12
        assert len(body["data"]) == 10
        ids = [row[1] for row in body["data"]]
        assert ids == sorted(ids, reverse=True)
        assert ids[0] == "S0012"
        assert len(body["data"][0]) == 7

    def test_second_page(self, client, students) -> None:
        """Offsets page through the default order (id asc)."""
        body = client.get("/api/students/data?start=10&length=10").get_json()
        assert [row[1] for row in body["data"]] == ["S0011", "S0012"]

    def test_out_of_range_order_falls_back(self, client, students) -> None:
        """An unknown column index sorts by the default column without error."""
        response = client.get("/api/students/data?order[0][column]=42&order[0][dir]=desc&length=3")
        body = response.get_json()
        assert response.status_code == 200
        assert [row[1] for row in body["data"]] == ["S0001", "S0002", "S0003"]

    def test_actions_column_order_falls_back(self, client, students) -> None:
        """Ordering by the actions column is ignored."""
        body = client.get("/api/students/data?order[0][column]=6&order[0][dir]=desc&length=1").get_json()
        assert body["data"][0][1] == "S0001"

    def test_boolean_search_inactive(self, client, students) -> None:
        """'inactive' returns only rows with the flag off."""
        body = client.get("/api/students/data?columns[5][search][value]=Inactive").get_json()
        assert body["recordsTotal"] == 12
        assert body["recordsFiltered"] == 3
        assert all("Inactive" in row[5] for row in body["data"])

    def test_boolean_search_other_value(self, client, students) -> None:
        """Any other non-empty value returns only active rows."""
        body = client.get("/api/students/data?columns[5][search][value]=yes&length=50").get_json()
        assert body["recordsFiltered"] == 9
        assert all('bg-success">Active' in row[5] for row in body["data"])

    def test_global_search(self, client, students) -> None:
        """Global search matches any searchable column, case-insensitively."""
        body = client.get("/api/students/data?search[value]=family1").get_json()
        # Family1, Family10, Family11, Family12
        assert body["recordsFiltered"] == 4
        assert body["recordsFiltered"] <= body["recordsTotal"]

    def test_column_text_search(self, client, students) -> None:
        """Per-column text searches are substring matches."""
        body = client.get("/api/students/data?columns[2][search][value]=name7").get_json()
        assert body["recordsFiltered"] == 1
        assert body["data"][0][2] == "Name7"

    def test_length_is_clamped(self, client, app, students) -> None:
        """length=-1 returns up to the configured maximum."""
        app.config["GRID_MAX_LENGTH"] = 5
        body = client.get("/api/students/data?length=-1").get_json()
        assert len(body["data"]) == 5
        assert body["recordsFiltered"] == 12

    def test_huge_start_returns_empty_page(self, client, students) -> None:
        """An offset past any row is an empty page, not an error."""
        body = client.get("/api/students/data?draw=2&start=99999999999999999999").get_json()
        assert "error" not in body
        assert body["draw"] == 2
        assert body["recordsTotal"] == 12
        assert body["data"] == []


class TestPresentation:
    """Row presenters escape text and embed safe action handlers."""

    def test_text_is_escaped(self, client, make) -> None:
        """HTML in names is escaped in cells."""
        make.student(student_id="X1", first_name="<b>Bob</b>", last_name="O'Neil")
        row = client.get("/api/students/data").get_json()["data"][0]
        assert row[2] == "&lt;b&gt;Bob&lt;/b&gt;"
        assert row[3] == "O&#39;Neil"

    def test_actions_embed_escaped_json(self, client, make) -> None:
        """Edit handlers carry the row as attribute-escaped JSON."""
        make.student(student_id="Q\"1", first_name="Ann", last_name="Lee")
        actions = client.get("/api/students/data").get_json()["data"][0][6]
        assert "editRecord(" in actions
        assert "toggleStatus(" in actions
        assert "deleteRecord(" in actions
        assert '"student_id"' not in actions
        assert "&#34;student_id&#34;" in actions
        assert 'fa-ban' in actions

    def test_description_preview_is_truncated(self, client, make) -> None:
        """Long SLO descriptions are cut at 60 characters plus an ellipsis."""
        make.slo(slo_description="a" * 80)
        row = client.get("/api/student_learning_outcomes/data").get_json()["data"][0]
        assert row[4] == "a" * 60 + "..."

    def test_enrollment_status_badge(self, client, make) -> None:
        """Enrollment status renders as a colored badge."""
        make.enrollment(enrollment_status="dropped")
        row = client.get("/api/enrollments/data").get_json()["data"][0]
        assert row[4] == '<span class="badge bg-warning">dropped</span>'


class TestEntityFilters:
    """Entity-specific filters narrow the filtered count only."""

    def test_terms_status_filter(self, client, make) -> None:
        """status=inactive keeps only inactive terms."""
        make.term(term_code="FA25")
        make.term(term_code="SP26", is_active=False)
        body = client.get("/api/terms/data?status=inactive").get_json()
        assert body["recordsTotal"] == 2
        assert body["recordsFiltered"] == 1
        assert body["data"][0][0] == "SP26"

    def test_terms_year_filter(self, client, make) -> None:
        """term_year_fk filters terms by academic year."""
        year = TermYear(term_name="2025-2026")
        db.session.add(year)
        db.session.commit()
        make.term(term_code="FA25", term_year_fk=year.id)
        make.term(term_code="XX99")
        body = client.get(f"/api/terms/data?term_year_fk={year.id}").get_json()
        assert [row[0] for row in body["data"]] == ["FA25"]

    def test_out_of_range_filter_is_ignored(self, client, make) -> None:
        """An id filter too large for the database is dropped."""
        make.term(term_code="FA25")
        body = client.get("/api/terms/data?term_year_fk=99999999999999999999").get_json()
        assert "error" not in body
        assert body["recordsTotal"] == 1
        assert body["recordsFiltered"] == 1

    def test_enrollment_status_filter(self, client, make) -> None:
        """status on enrollments is an exact enrollment status match."""
        section = make.section()
        make.enrollment(section=section, enrollment_status="enrolled")
        make.enrollment(section=section, enrollment_status="withdrawn")
        body = client.get("/api/enrollments/data?status=withdrawn").get_json()
        assert body["recordsFiltered"] == 1

    def test_course_sections_course_filter(self, client, make) -> None:
        """course_fk narrows sections to a course."""
        course = make.course()
        make.section(course=course)
        make.section()
        body = client.get(f"/api/course_sections/data?course_fk={course.id}").get_json()
        assert body["recordsTotal"] == 2
        assert body["recordsFiltered"] == 1


class TestOtherGrids:
    """Spot checks on the remaining grids."""

    def test_assessments_default_order_and_format(self, client, make) -> None:
        """Assessments sort by assessed date desc and show two-decimal scores."""
        student = make.student(first_name="Ana", last_name="Garcia")
        enrollment = make.enrollment(student=student)
        make.assessment(enrollment=enrollment, assessed_date=date(2025, 1, 1), score_value=Decimal("7"))
        make.assessment(enrollment=enrollment, assessed_date=date(2025, 6, 1), is_finalized=True)

        body = client.get("/api/assessments/data").get_json()
        first, second = body["data"]
        assert first[6] == "2025-06-01"
        assert "Finalized" in first[7]
        assert second[4] == "7.00"
        assert "Draft" in second[7]
        assert second[2] == "Garcia, Ana"

    def test_assessments_draft_search(self, client, make) -> None:
        """'draft' on the finalized column returns only unfinalized rows."""
        enrollment = make.enrollment()
        make.assessment(enrollment=enrollment)
        make.assessment(enrollment=enrollment, is_finalized=True)
        body = client.get("/api/assessments/data?columns[7][search][value]=draft").get_json()
        assert body["recordsFiltered"] == 1

    def test_term_years_program_count(self, client, make) -> None:
        """Term years report how many programs reference them."""
        year = TermYear(term_name="2025-2026", start_date=date(2025, 8, 1), is_current=True)
        db.session.add(year)
        db.session.commit()
        institution = make.institution()
        for code in ("P1", "P2"):
            db.session.add(
                Program(institution_fk=institution.id, term_year_fk=year.id, program_code=code, program_name=code)
            )
        db.session.commit()

        row = client.get("/api/term_years/data").get_json()["data"][0]
        assert row[4] == '<span class="badge bg-info">2</span>'
        assert "Yes" in row[6]

    @pytest.mark.parametrize(
        "endpoint",
        [
            "institutions",
            "institutional_outcomes",
            "term_years",
            "terms",
            "programs",
            "program_outcomes",
            "courses",
            "course_sections",
            "student_learning_outcomes",
            "students",
            "enrollments",
            "assessments",
            "users",
        ],
    )
    def test_every_grid_answers_with_envelope(self, client, endpoint) -> None:
        """Every grid endpoint answers with the DataTables envelope, even when searched."""
        response = client.get(
            f"/api/{endpoint}/data?draw=3&search[value]=zz&order[0][column]=1&order[0][dir]=desc"
        )
        body = response.get_json()
        assert response.status_code == 200
        assert set(body) == {"draw", "recordsTotal", "recordsFiltered", "data"}
        assert body["draw"] == 3
        assert body["recordsFiltered"] <= body["recordsTotal"]

    def test_requires_login(self, app) -> None:
        """Anonymous requests are redirected to the login page."""
        response = app.test_client().get("/api/students/data")
        assert response.status_code == 302
        assert "/auth/login" in response.headers["Location"]


def test_users_grid_lists_admin(client, admin_user) -> None:
    """The logged-in admin appears in the users grid."""
    body = client.get("/api/users/data").get_json()
    assert body["recordsTotal"] == 1
    assert body["data"][0][2] == admin_user.email
