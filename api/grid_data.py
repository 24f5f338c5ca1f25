# api/grid_data.py
"""
Endpoints JSON de las grillas (DataTables server-side).
Cada endpoint: parámetros -> predicados -> queries -> presenter -> {draw, recordsTotal, recordsFiltered, data}.
"""

from flask import current_app, jsonify, request
from flask_login import login_required

from api import api_bp
from api.utils import grid_presenters as presenters
from api.utils.permissions import get_admin_context, require_active_user
from extensions import db
from services import grid_definitions as grids
from services.grid_service import GridPage, GridRequest, GridService


def _grid_response(definition, presenter):
    ctx = get_admin_context()
    grid_request = GridRequest.from_args(
        request.args,
        default_length=ctx.grid_default_length,
        max_length=ctx.grid_max_length,
        filter_names=definition.filter_names,
    )

    try:
        page = GridService.fetch(definition, grid_request)
        data = [presenter(row, ctx) for row in page.rows]
    except Exception as exc:
        db.session.rollback()
        current_app.logger.exception("Error armando la grilla %s", definition.name)
        body = GridPage(draw=grid_request.draw, records_total=0, records_filtered=0).envelope([])
        body["error"] = "No se pudieron cargar los datos."
        if ctx.debug_mode:
            body["error"] += f" {exc.__class__.__name__}: {exc}"
        return jsonify(body)

    return jsonify(page.envelope(data))


@api_bp.get("/institutions/data")
@login_required
@require_active_user
def institutions_data():
    return _grid_response(grids.INSTITUTIONS, presenters.institution_row)


@api_bp.get("/institutional_outcomes/data")
@login_required
@require_active_user
def institutional_outcomes_data():
    return _grid_response(grids.INSTITUTIONAL_OUTCOMES, presenters.institutional_outcome_row)


@api_bp.get("/term_years/data")
@login_required
@require_active_user
def term_years_data():
    return _grid_response(grids.TERM_YEARS, presenters.term_year_row)


@api_bp.get("/terms/data")
@login_required
@require_active_user
def terms_data():
    return _grid_response(grids.TERMS, presenters.term_row)


@api_bp.get("/programs/data")
@login_required
@require_active_user
def programs_data():
    return _grid_response(grids.PROGRAMS, presenters.program_row)


@api_bp.get("/program_outcomes/data")
@login_required
@require_active_user
def program_outcomes_data():
    return _grid_response(grids.PROGRAM_OUTCOMES, presenters.program_outcome_row)


@api_bp.get("/courses/data")
@login_required
@require_active_user
def courses_data():
    return _grid_response(grids.COURSES, presenters.course_row)


@api_bp.get("/course_sections/data")
@login_required
@require_active_user
def course_sections_data():
    return _grid_response(grids.COURSE_SECTIONS, presenters.course_section_row)


@api_bp.get("/student_learning_outcomes/data")
@login_required
@require_active_user
def student_learning_outcomes_data():
    return _grid_response(grids.LEARNING_OUTCOMES, presenters.learning_outcome_row)


@api_bp.get("/students/data")
@login_required
@require_active_user
def students_data():
    return _grid_response(grids.STUDENTS, presenters.student_row)


@api_bp.get("/enrollments/data")
@login_required
@require_active_user
def enrollments_data():
    return _grid_response(grids.ENROLLMENTS, presenters.enrollment_row)


@api_bp.get("/assessments/data")
@login_required
@require_active_user
def assessments_data():
    return _grid_response(grids.ASSESSMENTS, presenters.assessment_row)


@api_bp.get("/users/data")
@login_required
@require_active_user
def users_data():
    return _grid_response(grids.USERS, presenters.user_row)
