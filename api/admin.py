# api/admin.py

import traceback
from collections import namedtuple
from dataclasses import dataclass

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required
from markupsafe import Markup
from sqlalchemy.exc import SQLAlchemyError

from api.utils.permissions import get_admin_context, require_active_user
from extensions import db
from models import ACHIEVEMENT_LEVELS, ENROLLMENT_STATUSES
from services import (
    AssessmentRecords,
    CourseRecords,
    CourseSectionRecords,
    CsvImportService,
    EnrollmentRecords,
    InstitutionalOutcomeRecords,
    InstitutionRecords,
    LearningOutcomeRecords,
    ProgramOutcomeRecords,
    ProgramRecords,
    RecordError,
    StudentRecords,
    TermRecords,
    TermYearRecords,
    UserRecords,
    ViewDataService,
)

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

# kind: text | textarea | number | decimal | date | email | password | select | checkbox
# source: clave de ViewDataService.options() o lista fija de (valor, etiqueta)
Field = namedtuple("Field", "name label kind source required", defaults=("text", None, False))
Filter = namedtuple("Filter", "param label source")

STATUS_CHOICES = [("1", "Activos"), ("0", "Inactivos")]
ENROLLMENT_STATUS_CHOICES = [(s, s) for s in ENROLLMENT_STATUSES]
ACHIEVEMENT_CHOICES = [(level, level.replace("_", " ")) for level in ACHIEVEMENT_LEVELS]


@dataclass(frozen=True)
class AdminPage:
    """Describe una pantalla de administración: grilla + formulario + acciones."""

    endpoint: str
    title: str
    service: type
    data_endpoint: str
    columns: tuple
    fields: tuple
    filters: tuple = ()
    importer: object = None
    import_columns: str = ""
    toggle_labels: tuple = ("Activar", "Desactivar")

    @property
    def option_keys(self) -> tuple:
        keys = []
        for item in self.fields + self.filters:
            if isinstance(item.source, str) and item.source not in keys:
                keys.append(item.source)
        return tuple(keys)


PAGES = {
    page.endpoint: page
    for page in (
        AdminPage(
            endpoint="institutions",
            title="Instituciones",
            service=InstitutionRecords,
            data_endpoint="api.institutions_data",
            columns=("ID", "Código", "Nombre", "Estado", "Creada", "Acciones"),
            fields=(
                Field("institution_code", "Código", required=True),
                Field("institution_name", "Nombre", required=True),
                Field("is_active", "Activa", "checkbox"),
            ),
        ),
        AdminPage(
            endpoint="institutional_outcomes",
            title="Resultados institucionales",
            service=InstitutionalOutcomeRecords,
            data_endpoint="api.institutional_outcomes_data",
            columns=("ID", "Institución", "Código", "Descripción", "Orden", "Estado", "Acciones"),
            fields=(
                Field("institution_fk", "Institución", "select", "institutions", True),
                Field("code", "Código", required=True),
                Field("description", "Descripción", "textarea", required=True),
                Field("sequence_num", "Orden", "number"),
                Field("is_active", "Activo", "checkbox"),
            ),
            filters=(Filter("institution_fk", "Institución", "institutions"),),
        ),
        AdminPage(
            endpoint="term_years",
            title="Años académicos",
            service=TermYearRecords,
            data_endpoint="api.term_years_data",
            columns=("ID", "Nombre", "Inicio", "Fin", "Programas", "Estado", "Vigente", "Creado", "Acciones"),
            fields=(
                Field("term_name", "Nombre", required=True),
                Field("start_date", "Inicio", "date"),
                Field("end_date", "Fin", "date"),
                Field("is_current", "Vigente", "checkbox"),
                Field("is_active", "Activo", "checkbox"),
            ),
        ),
        AdminPage(
            endpoint="terms",
            title="Períodos",
            service=TermRecords,
            data_endpoint="api.terms_data",
            columns=("Código", "Nombre", "Ciclo", "Inicio", "Fin", "Estado", "Acciones"),
            fields=(
                Field("term_year_fk", "Año académico", "select", "term_years"),
                Field("term_code", "Código", required=True),
                Field("term_name", "Nombre", required=True),
                Field("academic_year", "Ciclo lectivo"),
                Field("start_date", "Inicio", "date"),
                Field("end_date", "Fin", "date"),
                Field("is_active", "Activo", "checkbox"),
            ),
            filters=(
                Filter("term_year_fk", "Año académico", "term_years"),
                Filter("status", "Estado", STATUS_CHOICES),
            ),
            importer=CsvImportService.import_terms,
            import_columns="term_code,term_name,start_date,end_date,is_active",
        ),
        AdminPage(
            endpoint="programs",
            title="Programas",
            service=ProgramRecords,
            data_endpoint="api.programs_data",
            columns=("ID", "Código", "Nombre", "Institución", "Título", "Estado", "Creado", "Acciones"),
            fields=(
                Field("institution_fk", "Institución", "select", "institutions", True),
                Field("term_year_fk", "Año académico", "select", "term_years"),
                Field("program_code", "Código", required=True),
                Field("program_name", "Nombre", required=True),
                Field("degree_type", "Tipo de título"),
                Field("is_active", "Activo", "checkbox"),
            ),
            filters=(
                Filter("institution_fk", "Institución", "institutions"),
                Filter("status", "Estado", STATUS_CHOICES),
            ),
        ),
        AdminPage(
            endpoint="program_outcomes",
            title="Resultados de programa",
            service=ProgramOutcomeRecords,
            data_endpoint="api.program_outcomes_data",
            columns=("ID", "Programa", "Código", "Descripción", "Resultado inst.", "Orden", "Estado", "Acciones"),
            fields=(
                Field("program_fk", "Programa", "select", "programs", True),
                Field("institutional_outcome_fk", "Resultado institucional", "select", "institutional_outcomes"),
                Field("code", "Código", required=True),
                Field("description", "Descripción", "textarea", required=True),
                Field("sequence_num", "Orden", "number"),
                Field("is_active", "Activo", "checkbox"),
            ),
            filters=(Filter("program_fk", "Programa", "programs"),),
        ),
        AdminPage(
            endpoint="courses",
            title="Cursos",
            service=CourseRecords,
            data_endpoint="api.courses_data",
            columns=("Número", "Nombre", "Período", "Estado", "Acciones"),
            fields=(
                Field("term_fk", "Período", "select", "terms", True),
                Field("course_number", "Número", required=True),
                Field("course_name", "Nombre", required=True),
                Field("is_active", "Activo", "checkbox"),
            ),
            filters=(
                Filter("term_fk", "Período", "terms"),
                Filter("status", "Estado", STATUS_CHOICES),
            ),
        ),
        AdminPage(
            endpoint="course_sections",
            title="Secciones",
            service=CourseSectionRecords,
            data_endpoint="api.course_sections_data",
            columns=("ID", "CRN", "Curso", "Período", "Sección", "Docente", "Estado", "Acciones"),
            fields=(
                Field("course_fk", "Curso", "select", "courses", True),
                Field("term_fk", "Período", "select", "terms", True),
                Field("instructor_fk", "Docente", "select", "instructors"),
                Field("crn", "CRN", required=True),
                Field("section_number", "Sección"),
                Field("max_enrollment", "Cupo", "number"),
                Field("is_active", "Activa", "checkbox"),
            ),
            filters=(
                Filter("term_fk", "Período", "terms"),
                Filter("course_fk", "Curso", "courses"),
            ),
        ),
        AdminPage(
            endpoint="student_learning_outcomes",
            title="Resultados de aprendizaje (SLO)",
            service=LearningOutcomeRecords,
            data_endpoint="api.student_learning_outcomes_data",
            columns=("ID", "Curso", "Resultado prog.", "Código", "Descripción", "Orden", "Estado", "Acciones"),
            fields=(
                Field("course_fk", "Curso", "select", "courses", True),
                Field("program_outcome_fk", "Resultado de programa", "select", "program_outcomes"),
                Field("slo_code", "Código", required=True),
                Field("slo_description", "Descripción", "textarea", required=True),
                Field("sequence_num", "Orden", "number"),
                Field("is_active", "Activo", "checkbox"),
            ),
            filters=(
                Filter("course_fk", "Curso", "courses"),
                Filter("program_outcome_fk", "Resultado de programa", "program_outcomes"),
            ),
        ),
        AdminPage(
            endpoint="students",
            title="Estudiantes",
            service=StudentRecords,
            data_endpoint="api.students_data",
            columns=("ID", "ID estudiante", "Nombre", "Apellido", "Email", "Estado", "Acciones"),
            fields=(
                Field("student_id", "ID de estudiante", required=True),
                Field("first_name", "Nombre", required=True),
                Field("last_name", "Apellido", required=True),
                Field("email", "Email", "email"),
                Field("is_active", "Activo", "checkbox"),
            ),
            importer=CsvImportService.import_students,
            import_columns="student_id,first_name,last_name,email,is_active",
        ),
        AdminPage(
            endpoint="enrollments",
            title="Inscripciones",
            service=EnrollmentRecords,
            data_endpoint="api.enrollments_data",
            columns=("ID", "Período", "CRN", "Estudiante", "Estado", "Fecha", "Actualizada", "Acciones"),
            fields=(
                Field("student_fk", "Estudiante", "select", "students", True),
                Field("course_section_fk", "Sección", "select", "course_sections", True),
                Field("enrollment_status", "Estado", "select", ENROLLMENT_STATUS_CHOICES, True),
                Field("enrollment_date", "Fecha de inscripción", "date"),
                Field("is_active", "Activa", "checkbox"),
            ),
            filters=(
                Filter("term_fk", "Período", "terms"),
                Filter("course_section_fk", "Sección", "course_sections"),
                Filter("status", "Estado", ENROLLMENT_STATUS_CHOICES),
            ),
        ),
        AdminPage(
            endpoint="assessments",
            title="Evaluaciones",
            service=AssessmentRecords,
            data_endpoint="api.assessments_data",
            columns=("ID", "CRN", "Estudiante", "SLO", "Puntaje", "Nivel", "Fecha", "Estado", "Acciones"),
            fields=(
                Field("enrollment_fk", "Inscripción", "select", "enrollments", True),
                Field("student_learning_outcome_fk", "SLO", "select", "learning_outcomes", True),
                Field("score_value", "Puntaje", "decimal", required=True),
                Field("achievement_level", "Nivel de logro", "select", ACHIEVEMENT_CHOICES),
                Field("assessment_method", "Método"),
                Field("assessed_date", "Fecha", "date"),
                Field("notes", "Notas", "textarea"),
                Field("is_finalized", "Finalizada", "checkbox"),
            ),
            filters=(
                Filter("course_section_fk", "Sección", "course_sections"),
                Filter("student_learning_outcome_fk", "SLO", "learning_outcomes"),
            ),
            toggle_labels=("Finalizar", "Reabrir"),
        ),
        AdminPage(
            endpoint="users",
            title="Usuarios",
            service=UserRecords,
            data_endpoint="api.users_data",
            columns=("ID", "Nombre", "Email", "Estado", "Acciones"),
            fields=(
                Field("full_name", "Nombre completo", required=True),
                Field("email", "Email", "email", required=True),
                Field("password", "Contraseña (vacía = sin cambios)", "password"),
                Field("is_active", "Activo", "checkbox"),
            ),
        ),
    )
}


def _record_id():
    try:
        return int(request.form.get("id") or 0) or None
    except ValueError:
        return None


def _flash_messages(messages, category):
    flash(Markup("<br>").join(messages), category)


def _handle_action(page: AdminPage):
    """
    Despacha el POST según `action` (add | edit | toggle_status | delete | import).
    El CSRF ya lo validó CSRFProtect antes de llegar acá.
    """
    ctx = get_admin_context()
    action = (request.form.get("action") or "").strip()
    service = page.service

    try:
        if action == "add":
            service.create(ctx, request.form)
            flash(service.created_message, "success")
        elif action == "edit":
            service.update(ctx, _record_id(), request.form)
            flash(service.updated_message, "success")
        elif action == "toggle_status":
            service.toggle(ctx, _record_id())
            flash(service.toggled_message, "success")
        elif action == "delete":
            service.delete(ctx, _record_id())
            flash(service.deleted_message, "success")
        elif action == "import" and page.importer is not None:
            result = page.importer(ctx, request.files.get("csv_file"))
            _flash_messages(result.messages(), "success")
        else:
            flash("Acción inválida.", "error")
    except RecordError as exc:
        db.session.rollback()
        _flash_messages(exc.messages, "error")
    except Exception as exc:
        db.session.rollback()
        current_app.logger.exception("Error en admin.%s (action=%s)", page.endpoint, action)
        if isinstance(exc, SQLAlchemyError):
            message = Markup("Error de base de datos. No se guardaron los cambios.")
        else:
            message = Markup("Ocurrió un error inesperado. No se guardaron los cambios.")
        if ctx.debug_mode:
            message += Markup("<pre class=\"mt-2 mb-0 small\">{}</pre>").format(traceback.format_exc())
        flash(message, "error")

    return redirect(url_for(f"admin.{page.endpoint}"))


def _records_page(endpoint: str):
    page = PAGES[endpoint]
    if request.method == "POST":
        return _handle_action(page)

    return render_template(
        "admin/records.html",
        page=page,
        options=ViewDataService.options(*page.option_keys),
        pages=PAGES,
    )


@admin_bp.get("/")
@login_required
@require_active_user
def dashboard():
    """
    Tablero del panel: totales de las entidades principales.
    """
    return render_template(
        "admin/dashboard.html",
        stats=ViewDataService.admin_dashboard(),
        pages=PAGES,
    )


@admin_bp.route("/institutions", methods=["GET", "POST"])
@login_required
@require_active_user
def institutions():
    return _records_page("institutions")


@admin_bp.route("/institutional_outcomes", methods=["GET", "POST"])
@login_required
@require_active_user
def institutional_outcomes():
    return _records_page("institutional_outcomes")


@admin_bp.route("/term_years", methods=["GET", "POST"])
@login_required
@require_active_user
def term_years():
    return _records_page("term_years")


@admin_bp.route("/terms", methods=["GET", "POST"])
@login_required
@require_active_user
def terms():
    return _records_page("terms")


@admin_bp.route("/programs", methods=["GET", "POST"])
@login_required
@require_active_user
def programs():
    return _records_page("programs")


@admin_bp.route("/program_outcomes", methods=["GET", "POST"])
@login_required
@require_active_user
def program_outcomes():
    return _records_page("program_outcomes")


@admin_bp.route("/courses", methods=["GET", "POST"])
@login_required
@require_active_user
def courses():
    return _records_page("courses")


@admin_bp.route("/course_sections", methods=["GET", "POST"])
@login_required
@require_active_user
def course_sections():
    return _records_page("course_sections")


@admin_bp.route("/student_learning_outcomes", methods=["GET", "POST"])
@login_required
@require_active_user
def student_learning_outcomes():
    return _records_page("student_learning_outcomes")


@admin_bp.route("/students", methods=["GET", "POST"])
@login_required
@require_active_user
def students():
    return _records_page("students")


@admin_bp.route("/enrollments", methods=["GET", "POST"])
@login_required
@require_active_user
def enrollments():
    return _records_page("enrollments")


@admin_bp.route("/assessments", methods=["GET", "POST"])
@login_required
@require_active_user
def assessments():
    return _records_page("assessments")


@admin_bp.route("/users", methods=["GET", "POST"])
@login_required
@require_active_user
def users():
    return _records_page("users")
