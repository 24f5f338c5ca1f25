from __future__ import annotations

from sqlalchemy import asc, func

from extensions import db
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


class ViewDataService:
    """
    Servicios de consulta para las vistas HTML.
    Centraliza queries y evita repetir lógica en las vistas de admin.
    """

    @staticmethod
    def admin_dashboard() -> dict:
        return {
            "institutions_active": Institution.query.filter_by(is_active=True).count(),
            "programs_active": Program.query.filter_by(is_active=True).count(),
            "slos_active": StudentLearningOutcome.query.filter_by(is_active=True).count(),
            "assessments_total": Assessment.query.count(),
            "assessments_finalized": Assessment.query.filter_by(is_finalized=True).count(),
            "students_total": Student.query.count(),
            "enrollments_total": Enrollment.query.count(),
            "current_term_year": TermYear.query.filter_by(is_current=True).first(),
        }

    # ------------------------------------------------------------------
    # Opciones para los <select> de los formularios
    # ------------------------------------------------------------------
    @staticmethod
    def options(*names: str) -> dict[str, list[tuple[int, str]]]:
        loaders = {
            "institutions": ViewDataService._institutions,
            "institutional_outcomes": ViewDataService._institutional_outcomes,
            "term_years": ViewDataService._term_years,
            "terms": ViewDataService._terms,
            "programs": ViewDataService._programs,
            "program_outcomes": ViewDataService._program_outcomes,
            "courses": ViewDataService._courses,
            "course_sections": ViewDataService._course_sections,
            "learning_outcomes": ViewDataService._learning_outcomes,
            "students": ViewDataService._students,
            "enrollments": ViewDataService._enrollments,
            "instructors": ViewDataService._instructors,
        }
        return {name: loaders[name]() for name in names}

    @staticmethod
    def _institutions():
        rows = Institution.query.order_by(asc(Institution.institution_name)).all()
        return [(i.id, f"{i.institution_code} - {i.institution_name}") for i in rows]

    @staticmethod
    def _institutional_outcomes():
        rows = InstitutionalOutcome.query.order_by(
            asc(InstitutionalOutcome.sequence_num), asc(InstitutionalOutcome.code)
        ).all()
        return [(o.id, o.code) for o in rows]

    @staticmethod
    def _term_years():
        rows = TermYear.query.order_by(asc(TermYear.start_date)).all()
        return [(t.id, t.term_name) for t in rows]

    @staticmethod
    def _terms():
        rows = Term.query.order_by(asc(Term.term_code)).all()
        return [(t.id, f"{t.term_code} - {t.term_name}") for t in rows]

    @staticmethod
    def _programs():
        rows = Program.query.order_by(asc(Program.program_name)).all()
        return [(p.id, f"{p.program_code} - {p.program_name}") for p in rows]

    @staticmethod
    def _program_outcomes():
        rows = (
            db.session.query(ProgramOutcome.id, ProgramOutcome.code, Program.program_code)
            .join(Program, ProgramOutcome.program_fk == Program.id)
            .order_by(asc(Program.program_code), asc(ProgramOutcome.sequence_num))
            .all()
        )
        return [(row.id, f"{row.program_code} / {row.code}") for row in rows]

    @staticmethod
    def _courses():
        rows = Course.query.order_by(asc(Course.course_number)).all()
        return [(c.id, f"{c.course_number} - {c.course_name}") for c in rows]

    @staticmethod
    def _course_sections():
        rows = (
            db.session.query(CourseSection.id, CourseSection.crn, Course.course_number, Term.term_code)
            .join(Course, CourseSection.course_fk == Course.id)
            .join(Term, CourseSection.term_fk == Term.id)
            .order_by(asc(Term.term_code), asc(CourseSection.crn))
            .all()
        )
        return [(row.id, f"{row.term_code} / {row.crn} ({row.course_number})") for row in rows]

    @staticmethod
    def _learning_outcomes():
        rows = (
            db.session.query(
                StudentLearningOutcome.id, StudentLearningOutcome.slo_code, Course.course_number
            )
            .join(Course, StudentLearningOutcome.course_fk == Course.id)
            .order_by(asc(Course.course_number), asc(StudentLearningOutcome.sequence_num))
            .all()
        )
        return [(row.id, f"{row.course_number} / {row.slo_code}") for row in rows]

    @staticmethod
    def _students():
        rows = Student.query.order_by(asc(Student.last_name), asc(Student.first_name)).all()
        return [(s.id, f"{s.student_id} - {s.last_name}, {s.first_name}") for s in rows]

    @staticmethod
    def _enrollments():
        rows = (
            db.session.query(Enrollment.id, Student.student_id, CourseSection.crn)
            .join(Student, Enrollment.student_fk == Student.id)
            .join(CourseSection, Enrollment.course_section_fk == CourseSection.id)
            .order_by(asc(CourseSection.crn), asc(Student.student_id))
            .all()
        )
        return [(row.id, f"{row.crn} / {row.student_id}") for row in rows]

    @staticmethod
    def _instructors():
        rows = User.query.filter_by(is_active=True).order_by(asc(func.lower(User.full_name))).all()
        return [(u.id, u.full_name) for u in rows]
