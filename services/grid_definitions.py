# services/grid_definitions.py
"""
Mapa columna -> expresión de cada grilla de administración.
El índice de cada GridColumn es el índice de la celda en la respuesta JSON,
y es lo único que el navegador puede elegir para ordenar o buscar.
"""

from sqlalchemy import func, select

from models import (
    Assessment,
    Course,
    CourseSection,
    Enrollment,
    Institution,
    InstitutionalOutcome,
    Program,
    ProgramOutcome,
    Student,
    StudentLearningOutcome,
    Term,
    TermYear,
    User,
)
from services.grid_service import ACTIONS, GridColumn, GridDefinition, GridFilter, boolean_column


# ---------------------------------------------------------------------------
# Institución y resultados institucionales
# ---------------------------------------------------------------------------
def _institutions_query():
    return select(
        Institution.id,
        Institution.institution_code,
        Institution.institution_name,
        Institution.is_active,
        Institution.created_at,
    )


INSTITUTIONS = GridDefinition(
    name="institutions",
    key=Institution.id,
    query=_institutions_query,
    columns=(
        GridColumn("id", Institution.id),
        GridColumn("institution_code", Institution.institution_code),
        GridColumn("institution_name", Institution.institution_name),
        boolean_column("is_active", Institution.is_active),
        GridColumn("created_at", Institution.created_at),
        ACTIONS,
    ),
    global_search=(Institution.institution_code, Institution.institution_name),
    default_sort="institution_name",
)


def _institutional_outcomes_query():
    return select(
        InstitutionalOutcome.id,
        InstitutionalOutcome.institution_fk,
        InstitutionalOutcome.code,
        InstitutionalOutcome.description,
        InstitutionalOutcome.sequence_num,
        InstitutionalOutcome.is_active,
        Institution.institution_code,
        Institution.institution_name,
    ).outerjoin(Institution, InstitutionalOutcome.institution_fk == Institution.id)


INSTITUTIONAL_OUTCOMES = GridDefinition(
    name="institutional_outcomes",
    key=InstitutionalOutcome.id,
    query=_institutional_outcomes_query,
    columns=(
        GridColumn("id", InstitutionalOutcome.id),
        GridColumn("institution", Institution.institution_name),
        GridColumn("code", InstitutionalOutcome.code),
        GridColumn("description", InstitutionalOutcome.description),
        GridColumn("sequence_num", InstitutionalOutcome.sequence_num),
        boolean_column("is_active", InstitutionalOutcome.is_active),
        ACTIONS,
    ),
    global_search=(
        InstitutionalOutcome.code,
        InstitutionalOutcome.description,
        Institution.institution_name,
        Institution.institution_code,
    ),
    default_sort="sequence_num",
    filters=(GridFilter("institution_fk", InstitutionalOutcome.institution_fk),),
)


# ---------------------------------------------------------------------------
# Calendario
# ---------------------------------------------------------------------------
_PROGRAM_COUNT = (
    select(func.count(Program.id))
    .where(Program.term_year_fk == TermYear.id)
    .correlate(TermYear)
    .scalar_subquery()
)


def _term_years_query():
    return select(
        TermYear.id,
        TermYear.term_name,
        TermYear.start_date,
        TermYear.end_date,
        _PROGRAM_COUNT.label("program_count"),
        TermYear.is_active,
        TermYear.is_current,
        TermYear.created_at,
    )


TERM_YEARS = GridDefinition(
    name="term_years",
    key=TermYear.id,
    query=_term_years_query,
    columns=(
        GridColumn("id", TermYear.id),
        GridColumn("term_name", TermYear.term_name),
        GridColumn("start_date", TermYear.start_date),
        GridColumn("end_date", TermYear.end_date),
        GridColumn("program_count", _PROGRAM_COUNT),
        boolean_column("is_active", TermYear.is_active),
        boolean_column("is_current", TermYear.is_current, false_keyword="no"),
        GridColumn("created_at", TermYear.created_at),
        ACTIONS,
    ),
    global_search=(TermYear.term_name, TermYear.start_date, TermYear.end_date),
    default_sort="start_date",
)


def _terms_query():
    return select(
        Term.id,
        Term.term_year_fk,
        Term.term_code,
        Term.term_name,
        Term.academic_year,
        Term.start_date,
        Term.end_date,
        Term.is_active,
    )


TERMS = GridDefinition(
    name="terms",
    key=Term.id,
    query=_terms_query,
    columns=(
        GridColumn("term_code", Term.term_code),
        GridColumn("term_name", Term.term_name),
        GridColumn("academic_year", Term.academic_year),
        GridColumn("start_date", Term.start_date),
        GridColumn("end_date", Term.end_date),
        boolean_column("is_active", Term.is_active),
        ACTIONS,
    ),
    global_search=(Term.term_code, Term.term_name, Term.academic_year),
    default_sort="term_code",
    filters=(
        GridFilter("term_year_fk", Term.term_year_fk),
        GridFilter("status", Term.is_active, kind="status"),
    ),
)


# ---------------------------------------------------------------------------
# Programas
# ---------------------------------------------------------------------------
def _programs_query():
    return select(
        Program.id,
        Program.institution_fk,
        Program.term_year_fk,
        Program.program_code,
        Program.program_name,
        Program.degree_type,
        Program.is_active,
        Program.created_at,
        Institution.institution_name,
    ).outerjoin(Institution, Program.institution_fk == Institution.id)


PROGRAMS = GridDefinition(
    name="programs",
    key=Program.id,
    query=_programs_query,
    columns=(
        GridColumn("id", Program.id),
        GridColumn("program_code", Program.program_code),
        GridColumn("program_name", Program.program_name),
        GridColumn("institution", Institution.institution_name),
        GridColumn("degree_type", Program.degree_type),
        boolean_column("is_active", Program.is_active),
        GridColumn("created_at", Program.created_at),
        ACTIONS,
    ),
    global_search=(
        Program.program_code,
        Program.program_name,
        Institution.institution_name,
        Program.degree_type,
    ),
    default_sort="program_name",
    filters=(
        GridFilter("institution_fk", Program.institution_fk),
        GridFilter("status", Program.is_active, kind="status"),
    ),
)


def _program_outcomes_query():
    return (
        select(
            ProgramOutcome.id,
            ProgramOutcome.program_fk,
            ProgramOutcome.institutional_outcome_fk,
            ProgramOutcome.code,
            ProgramOutcome.description,
            ProgramOutcome.sequence_num,
            ProgramOutcome.is_active,
            Program.program_name,
            InstitutionalOutcome.code.label("institutional_outcome_code"),
        )
        .outerjoin(Program, ProgramOutcome.program_fk == Program.id)
        .outerjoin(
            InstitutionalOutcome,
            ProgramOutcome.institutional_outcome_fk == InstitutionalOutcome.id,
        )
    )


PROGRAM_OUTCOMES = GridDefinition(
    name="program_outcomes",
    key=ProgramOutcome.id,
    query=_program_outcomes_query,
    columns=(
        GridColumn("id", ProgramOutcome.id),
        GridColumn("program", Program.program_name),
        GridColumn("code", ProgramOutcome.code),
        GridColumn("description", ProgramOutcome.description),
        GridColumn("institutional_outcome_code", InstitutionalOutcome.code),
        GridColumn("sequence_num", ProgramOutcome.sequence_num),
        boolean_column("is_active", ProgramOutcome.is_active),
        ACTIONS,
    ),
    global_search=(
        ProgramOutcome.code,
        ProgramOutcome.description,
        Program.program_name,
        InstitutionalOutcome.code,
    ),
    default_sort="sequence_num",
    filters=(GridFilter("program_fk", ProgramOutcome.program_fk),),
)


# ---------------------------------------------------------------------------
# Cursos, secciones y SLOs
# ---------------------------------------------------------------------------
def _courses_query():
    return select(
        Course.id,
        Course.term_fk,
        Course.course_number,
        Course.course_name,
        Course.is_active,
        Term.term_code,
    ).outerjoin(Term, Course.term_fk == Term.id)


COURSES = GridDefinition(
    name="courses",
    key=Course.id,
    query=_courses_query,
    columns=(
        GridColumn("course_number", Course.course_number),
        GridColumn("course_name", Course.course_name),
        GridColumn("term_code", Term.term_code),
        boolean_column("is_active", Course.is_active),
        ACTIONS,
    ),
    global_search=(Course.course_name, Course.course_number),
    default_sort="course_number",
    filters=(
        GridFilter("term_fk", Course.term_fk),
        GridFilter("status", Course.is_active, kind="status"),
    ),
)


def _course_sections_query():
    return (
        select(
            CourseSection.id,
            CourseSection.course_fk,
            CourseSection.term_fk,
            CourseSection.instructor_fk,
            CourseSection.crn,
            CourseSection.section_number,
            CourseSection.max_enrollment,
            CourseSection.is_active,
            Course.course_number,
            Course.course_name,
            Term.term_code,
            User.full_name.label("instructor_name"),
        )
        .outerjoin(Course, CourseSection.course_fk == Course.id)
        .outerjoin(Term, CourseSection.term_fk == Term.id)
        .outerjoin(User, CourseSection.instructor_fk == User.id)
    )


COURSE_SECTIONS = GridDefinition(
    name="course_sections",
    key=CourseSection.id,
    query=_course_sections_query,
    columns=(
        GridColumn("id", CourseSection.id),
        GridColumn("crn", CourseSection.crn),
        GridColumn(
            "course",
            Course.course_number,
            search_expressions=(Course.course_number, Course.course_name),
        ),
        GridColumn("term_code", Term.term_code),
        GridColumn("section_number", CourseSection.section_number),
        GridColumn("instructor", User.full_name),
        boolean_column("is_active", CourseSection.is_active),
        ACTIONS,
    ),
    global_search=(
        CourseSection.crn,
        CourseSection.section_number,
        Course.course_number,
        Course.course_name,
        Term.term_code,
        User.full_name,
    ),
    default_sort="crn",
    filters=(
        GridFilter("term_fk", CourseSection.term_fk),
        GridFilter("course_fk", CourseSection.course_fk),
    ),
)


def _learning_outcomes_query():
    return (
        select(
            StudentLearningOutcome.id,
            StudentLearningOutcome.course_fk,
            StudentLearningOutcome.program_outcome_fk,
            StudentLearningOutcome.slo_code,
            StudentLearningOutcome.slo_description,
            StudentLearningOutcome.sequence_num,
            StudentLearningOutcome.is_active,
            Course.course_number,
            ProgramOutcome.code.label("program_outcome_code"),
        )
        .outerjoin(Course, StudentLearningOutcome.course_fk == Course.id)
        .outerjoin(ProgramOutcome, StudentLearningOutcome.program_outcome_fk == ProgramOutcome.id)
    )


LEARNING_OUTCOMES = GridDefinition(
    name="student_learning_outcomes",
    key=StudentLearningOutcome.id,
    query=_learning_outcomes_query,
    columns=(
        GridColumn("id", StudentLearningOutcome.id),
        GridColumn("course", Course.course_number),
        GridColumn("program_outcome_code", ProgramOutcome.code),
        GridColumn("slo_code", StudentLearningOutcome.slo_code),
        GridColumn("slo_description", StudentLearningOutcome.slo_description),
        GridColumn("sequence_num", StudentLearningOutcome.sequence_num),
        boolean_column("is_active", StudentLearningOutcome.is_active),
        ACTIONS,
    ),
    global_search=(
        StudentLearningOutcome.slo_code,
        StudentLearningOutcome.slo_description,
        Course.course_number,
        ProgramOutcome.code,
    ),
    default_sort="slo_code",
    filters=(
        GridFilter("course_fk", StudentLearningOutcome.course_fk),
        GridFilter("program_outcome_fk", StudentLearningOutcome.program_outcome_fk),
    ),
)


# ---------------------------------------------------------------------------
# Estudiantes, inscripciones y evaluaciones
# ---------------------------------------------------------------------------
def _students_query():
    return select(
        Student.id,
        Student.student_id,
        Student.first_name,
        Student.last_name,
        Student.email,
        Student.is_active,
    )


STUDENTS = GridDefinition(
    name="students",
    key=Student.id,
    query=_students_query,
    columns=(
        GridColumn("id", Student.id),
        GridColumn("student_id", Student.student_id),
        GridColumn("first_name", Student.first_name),
        GridColumn("last_name", Student.last_name),
        GridColumn("email", Student.email),
        boolean_column("is_active", Student.is_active),
        ACTIONS,
    ),
    global_search=(Student.student_id, Student.first_name, Student.last_name, Student.email),
    default_sort="id",
)


def _enrollments_query():
    return (
        select(
            Enrollment.id,
            Enrollment.student_fk,
            Enrollment.course_section_fk,
            Enrollment.enrollment_status,
            Enrollment.enrollment_date,
            Enrollment.is_active,
            Enrollment.updated_at,
            CourseSection.crn,
            Term.term_code,
            Student.student_id,
        )
        .outerjoin(CourseSection, Enrollment.course_section_fk == CourseSection.id)
        .outerjoin(Term, CourseSection.term_fk == Term.id)
        .outerjoin(Student, Enrollment.student_fk == Student.id)
    )


ENROLLMENTS = GridDefinition(
    name="enrollments",
    key=Enrollment.id,
    query=_enrollments_query,
    columns=(
        GridColumn("id", Enrollment.id),
        GridColumn("term_code", Term.term_code),
        GridColumn("crn", CourseSection.crn),
        GridColumn("student_id", Student.student_id),
        GridColumn("enrollment_status", Enrollment.enrollment_status),
        GridColumn("enrollment_date", Enrollment.enrollment_date),
        GridColumn("updated_at", Enrollment.updated_at),
        ACTIONS,
    ),
    global_search=(
        Term.term_code,
        CourseSection.crn,
        Student.student_id,
        Enrollment.enrollment_status,
    ),
    default_sort="updated_at",
    filters=(
        GridFilter("term_fk", CourseSection.term_fk),
        GridFilter("course_section_fk", Enrollment.course_section_fk),
        GridFilter("status", Enrollment.enrollment_status, kind="exact"),
    ),
)


_STUDENT_NAME = Student.last_name + ", " + Student.first_name


def _assessments_query():
    return (
        select(
            Assessment.id,
            Assessment.enrollment_fk,
            Assessment.student_learning_outcome_fk,
            Assessment.score_value,
            Assessment.achievement_level,
            Assessment.assessment_method,
            Assessment.notes,
            Assessment.assessed_date,
            Assessment.is_finalized,
            CourseSection.crn,
            Student.student_id,
            Student.first_name,
            Student.last_name,
            StudentLearningOutcome.slo_code,
        )
        .outerjoin(Enrollment, Assessment.enrollment_fk == Enrollment.id)
        .outerjoin(CourseSection, Enrollment.course_section_fk == CourseSection.id)
        .outerjoin(Student, Enrollment.student_fk == Student.id)
        .outerjoin(
            StudentLearningOutcome,
            Assessment.student_learning_outcome_fk == StudentLearningOutcome.id,
        )
    )


ASSESSMENTS = GridDefinition(
    name="assessments",
    key=Assessment.id,
    query=_assessments_query,
    columns=(
        GridColumn("id", Assessment.id),
        GridColumn("crn", CourseSection.crn),
        GridColumn(
            "student_name",
            _STUDENT_NAME,
            search_expressions=(Student.first_name, Student.last_name),
        ),
        GridColumn("slo_code", StudentLearningOutcome.slo_code),
        GridColumn("score_value", Assessment.score_value),
        GridColumn("achievement_level", Assessment.achievement_level),
        GridColumn("assessed_date", Assessment.assessed_date),
        boolean_column("is_finalized", Assessment.is_finalized, false_keyword="draft"),
        ACTIONS,
    ),
    global_search=(
        CourseSection.crn,
        Student.student_id,
        Student.first_name,
        Student.last_name,
        StudentLearningOutcome.slo_code,
        Assessment.achievement_level,
    ),
    default_sort="assessed_date",
    default_dir="desc",
    filters=(
        GridFilter("course_section_fk", Enrollment.course_section_fk),
        GridFilter("student_learning_outcome_fk", Assessment.student_learning_outcome_fk),
    ),
)


# ---------------------------------------------------------------------------
# Usuarios
# ---------------------------------------------------------------------------
def _users_query():
    return select(User.id, User.full_name, User.email, User.is_active)


USERS = GridDefinition(
    name="users",
    key=User.id,
    query=_users_query,
    columns=(
        GridColumn("id", User.id),
        GridColumn("full_name", User.full_name),
        GridColumn("email", User.email),
        boolean_column("is_active", User.is_active),
        ACTIONS,
    ),
    global_search=(User.full_name, User.email),
    default_sort="id",
)
