"""Mutation rules of the record services and the admin POST dispatcher."""

import pytest

from extensions import db
from models import Enrollment, Program, Student, TermYear, User
from services import (
    AssessmentRecords,
    InstitutionRecords,
    StudentRecords,
    TermYearRecords,
    UserRecords,
)
from services.errors import RecordError, RecordNotFound


def flashes(client) -> list:
    with client.session_transaction() as session:
        return list(session.get("_flashes", []))


class TestStudentRecords:
    """Create, duplicate keys and delete rules for students."""

    def test_create_stamps_audit_columns(self, app, ctx) -> None:
        """A new student carries creator and timestamps."""
        student = StudentRecords.create(
            ctx,
            {"student_id": "A100", "first_name": "Ana", "last_name": "Paz", "email": "ANA@Test.com"},
        )
        assert student.id is not None
        assert student.email == "ana@test.com"
        assert student.is_active is True
        assert student.created_by_fk == ctx.user_id
        assert student.created_at is not None

    def test_duplicate_student_id_is_rejected(self, app, ctx, make) -> None:
        """A repeated student_id raises and writes nothing."""
        make.student(student_id="A100")
        with pytest.raises(RecordError) as excinfo:
            StudentRecords.create(ctx, {"student_id": "A100", "first_name": "Otro", "last_name": "Más"})
        assert excinfo.value.messages == ["Ya existe un estudiante con el ID A100."]
        db.session.rollback()
        assert Student.query.filter_by(student_id="A100").count() == 1

    def test_validation_errors_are_combined(self, app, ctx) -> None:
        """Every field error is reported at once."""
        with pytest.raises(RecordError) as excinfo:
            StudentRecords.create(ctx, {"student_id": "", "first_name": "", "last_name": "X", "email": "nope"})
        assert len(excinfo.value.messages) == 3

    def test_edit_keeps_own_student_id(self, app, ctx, make) -> None:
        """Updating a row does not collide with itself."""
        student = make.student(student_id="A100")
        StudentRecords.update(
            ctx, student.id, {"student_id": "A100", "first_name": "Nuevo", "last_name": "Nombre"}
        )
        assert db.session.get(Student, student.id).first_name == "Nuevo"

    def test_delete_blocked_by_assessments(self, app, ctx, make) -> None:
        """A student with assessments cannot be deleted."""
        enrollment = make.enrollment()
        make.assessment(enrollment=enrollment)
        student_id = enrollment.student_fk

        with pytest.raises(RecordError) as excinfo:
            StudentRecords.delete(ctx, student_id)
        assert "evaluación" in excinfo.value.messages[0]
        assert db.session.get(Student, student_id) is not None

    def test_delete_cascades_enrollments(self, app, ctx, make) -> None:
        """Without assessments the student's enrollments go with it."""
        enrollment = make.enrollment()
        student_id = enrollment.student_fk

        StudentRecords.delete(ctx, student_id)
        assert db.session.get(Student, student_id) is None
        assert Enrollment.query.filter_by(student_fk=student_id).count() == 0

    def test_unknown_id(self, app, ctx) -> None:
        """Missing ids raise the not-found error."""
        with pytest.raises(RecordNotFound):
            StudentRecords.toggle(ctx, 999)
        with pytest.raises(RecordNotFound):
            StudentRecords.delete(ctx, None)


class TestToggle:
    """Status toggles flip the flag and stamp the editor."""

    def test_toggle_flips_is_active(self, app, ctx, make) -> None:
        """Toggling twice restores the original state."""
        institution = make.institution()
        assert InstitutionRecords.toggle(ctx, institution.id).is_active is False
        assert institution.updated_by_fk == ctx.user_id
        assert InstitutionRecords.toggle(ctx, institution.id).is_active is True

    def test_assessment_toggle_finalizes(self, app, ctx, make) -> None:
        """On assessments the toggle drives is_finalized."""
        assessment = make.assessment()
        assert AssessmentRecords.toggle(ctx, assessment.id).is_finalized is True


class TestDependencies:
    """Parents with children are protected."""

    def test_institution_with_programs(self, app, ctx, make) -> None:
        """An institution referenced by programs is kept."""
        institution = make.institution()
        db.session.add(Program(institution_fk=institution.id, program_code="P1", program_name="Prog"))
        db.session.commit()

        with pytest.raises(RecordError) as excinfo:
            InstitutionRecords.delete(ctx, institution.id)
        assert excinfo.value.messages == ["La institución tiene 1 programa(s) asociado(s)."]

    def test_childless_institution_is_deleted(self, app, ctx, make) -> None:
        institution = make.institution()
        InstitutionRecords.delete(ctx, institution.id)
        assert InstitutionRecords.model.query.count() == 0


class TestTermYears:
    """Only one academic year is current at a time."""

    def test_current_is_exclusive(self, app, ctx) -> None:
        """Marking a year current clears the flag on the others."""
        first = TermYearRecords.create(ctx, {"term_name": "2024-2025", "is_current": "1"})
        second = TermYearRecords.create(ctx, {"term_name": "2025-2026", "is_current": "1"})

        current = TermYear.query.filter_by(is_current=True).all()
        assert [year.id for year in current] == [second.id]
        assert db.session.get(TermYear, first.id).is_current is False

    def test_end_before_start(self, app, ctx) -> None:
        with pytest.raises(RecordError) as excinfo:
            TermYearRecords.create(
                ctx, {"term_name": "X", "start_date": "2025-08-01", "end_date": "2025-01-01"}
            )
        assert "anterior" in excinfo.value.messages[0]

    def test_unchecked_box_with_marker_clears_flag(self, app, ctx) -> None:
        """A missing checkbox with its *_present marker means false."""
        year = TermYearRecords.create(ctx, {"term_name": "2025-2026", "is_current": "1"})
        TermYearRecords.update(ctx, year.id, {"term_name": "2025-2026", "is_current_present": "1"})
        assert db.session.get(TermYear, year.id).is_current is False


class TestUserRecords:
    """Users cannot lock themselves out."""

    def test_password_required_on_create(self, app, ctx) -> None:
        with pytest.raises(RecordError) as excinfo:
            UserRecords.create(ctx, {"full_name": "Nuevo", "email": "new@test.com"})
        assert excinfo.value.messages == ["La contraseña es obligatoria."]

    def test_blank_password_keeps_current(self, app, ctx, admin_user) -> None:
        """Editing without a password leaves the hash untouched."""
        before = admin_user.password_hash
        UserRecords.update(ctx, admin_user.id, {"full_name": "Renamed", "email": admin_user.email})
        assert admin_user.password_hash == before
        assert admin_user.full_name == "Renamed"

    def test_cannot_deactivate_self(self, app, ctx, admin_user) -> None:
        with pytest.raises(RecordError):
            UserRecords.toggle(ctx, admin_user.id)
        with pytest.raises(RecordError):
            UserRecords.update(
                ctx,
                admin_user.id,
                {"full_name": "Admin", "email": admin_user.email, "is_active_present": "1"},
            )
        assert db.session.get(User, admin_user.id).is_active is True

    def test_cannot_delete_self(self, app, ctx, admin_user) -> None:
        with pytest.raises(RecordError) as excinfo:
            UserRecords.delete(ctx, admin_user.id)
        assert excinfo.value.messages == ["No podés eliminar tu propio usuario."]

    def test_other_user_can_be_deleted(self, app, ctx) -> None:
        other = UserRecords.create(
            ctx, {"full_name": "Otro", "email": "other@test.com", "password": "long-enough"}
        )
        assert other.check_password("long-enough")
        UserRecords.delete(ctx, other.id)
        assert db.session.get(User, other.id) is None


class TestAdminActions:
    """POST dispatch on the admin pages: flash and redirect back."""

    def test_add_redirects_with_success(self, client) -> None:
        response = client.post(
            "/admin/students",
            data={"action": "add", "student_id": "B200", "first_name": "Leo", "last_name": "Sosa"},
        )
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/admin/students")
        assert flashes(client) == [("success", "Estudiante creado correctamente.")]
        assert Student.query.filter_by(student_id="B200").count() == 1

    def test_duplicate_via_post(self, client, make) -> None:
        """The duplicate error is flashed and no second row appears."""
        make.student(student_id="B200")
        client.post(
            "/admin/students",
            data={"action": "add", "student_id": "B200", "first_name": "Leo", "last_name": "Sosa"},
        )
        category, message = flashes(client)[0]
        assert category == "error"
        assert "B200" in message
        assert Student.query.filter_by(student_id="B200").count() == 1

    def test_combined_messages_are_joined(self, client) -> None:
        client.post("/admin/students", data={"action": "add", "student_id": "", "first_name": ""})
        category, message = flashes(client)[0]
        assert category == "error"
        assert message.count("<br>") == 2

    def test_invalid_action(self, client) -> None:
        response = client.post("/admin/institutions", data={"action": "explode"})
        assert response.status_code == 302
        assert flashes(client) == [("error", "Acción inválida.")]

    def test_import_not_offered_on_plain_pages(self, client) -> None:
        """Pages without an importer reject the import action."""
        client.post("/admin/courses", data={"action": "import"})
        assert flashes(client) == [("error", "Acción inválida.")]

    def test_toggle_and_delete(self, client, make) -> None:
        student = make.student()
        student_pk = student.id

        client.post("/admin/students", data={"action": "toggle_status", "id": str(student_pk)})
        assert db.session.get(Student, student_pk).is_active is False

        client.post("/admin/students", data={"action": "delete", "id": str(student_pk)})
        assert db.session.get(Student, student_pk) is None

    def test_pages_render(self, client) -> None:
        """Every admin page answers a GET with its grid."""
        for endpoint in ("institutions", "terms", "students", "assessments", "users"):
            response = client.get(f"/admin/{endpoint}")
            assert response.status_code == 200
            assert f"/api/{endpoint}/data".encode() in response.data
