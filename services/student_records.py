# services/student_records.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select

from extensions import db
from models import (
    ACHIEVEMENT_LEVELS,
    ENROLLMENT_STATUSES,
    Assessment,
    CourseSection,
    Enrollment,
    Student,
    StudentLearningOutcome,
)
from services.form_reader import FormReader
from services.record_service import RecordService


@dataclass
class StudentPayload:
    student_id: str
    first_name: str
    last_name: str
    email: str | None
    is_active: bool


@dataclass
class EnrollmentPayload:
    student_fk: int | None
    course_section_fk: int | None
    enrollment_status: str | None
    enrollment_date: date | None
    is_active: bool


@dataclass
class AssessmentPayload:
    enrollment_fk: int | None
    student_learning_outcome_fk: int | None
    score_value: Decimal | None
    achievement_level: str | None
    assessment_method: str | None
    notes: str | None
    assessed_date: date | None
    is_finalized: bool


class StudentRecords(RecordService):
    """
    Las inscripciones del estudiante se borran con él (cascade del modelo),
    salvo que alguna ya tenga evaluaciones.
    """

    model = Student
    label = "Estudiante"

    created_message = "Estudiante creado correctamente."
    updated_message = "Estudiante actualizado correctamente."
    deleted_message = "Estudiante eliminado."
    not_found_message = "No se encontró el estudiante."

    @classmethod
    def read_form(cls, reader: FormReader) -> StudentPayload:
        return StudentPayload(
            student_id=reader.text("student_id", "El ID de estudiante"),
            first_name=reader.text("first_name", "El nombre"),
            last_name=reader.text("last_name", "El apellido"),
            email=reader.email("email", "El email"),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: StudentPayload, record=None) -> list[str]:
        errors = []
        if cls.exists(Student, record, student_id=payload.student_id):
            errors.append(f"Ya existe un estudiante con el ID {payload.student_id}.")
        return errors

    @classmethod
    def find_blockers(cls, ctx, record) -> list[str]:
        count = db.session.scalar(
            select(func.count(Assessment.id))
            .join(Enrollment, Assessment.enrollment_fk == Enrollment.id)
            .where(Enrollment.student_fk == record.id)
        )
        if count:
            return [f"El estudiante tiene {count} evaluación(es) registrada(s)."]
        return []


class EnrollmentRecords(RecordService):
    model = Enrollment
    label = "Inscripción"
    dependents = (
        (Assessment.enrollment_fk, "La inscripción tiene {count} evaluación(es) registrada(s)."),
    )

    created_message = "Inscripción creada correctamente."
    updated_message = "Inscripción actualizada correctamente."
    deleted_message = "Inscripción eliminada."
    not_found_message = "No se encontró la inscripción."

    @classmethod
    def read_form(cls, reader: FormReader) -> EnrollmentPayload:
        return EnrollmentPayload(
            student_fk=reader.reference("student_fk", "El estudiante"),
            course_section_fk=reader.reference("course_section_fk", "La sección"),
            enrollment_status=reader.choice(
                "enrollment_status", "Estado de inscripción", ENROLLMENT_STATUSES, default="enrolled"
            ),
            enrollment_date=reader.date("enrollment_date", "La fecha de inscripción"),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: EnrollmentPayload, record=None) -> list[str]:
        errors = []
        if cls.missing(Student, payload.student_fk):
            errors.append("El estudiante seleccionado no existe.")
        if cls.missing(CourseSection, payload.course_section_fk):
            errors.append("La sección seleccionada no existe.")
        if not errors and cls.exists(
            Enrollment,
            record,
            student_fk=payload.student_fk,
            course_section_fk=payload.course_section_fk,
        ):
            errors.append("El estudiante ya está inscripto en esa sección.")
        return errors


class AssessmentRecords(RecordService):
    """Evaluación de un SLO para una inscripción. El toggle finaliza / reabre."""

    model = Assessment
    label = "Evaluación"
    toggle_field = "is_finalized"

    created_message = "Evaluación registrada correctamente."
    updated_message = "Evaluación actualizada correctamente."
    toggled_message = "Estado de la evaluación actualizado."
    deleted_message = "Evaluación eliminada."
    not_found_message = "No se encontró la evaluación."

    @classmethod
    def read_form(cls, reader: FormReader) -> AssessmentPayload:
        return AssessmentPayload(
            enrollment_fk=reader.reference("enrollment_fk", "La inscripción"),
            student_learning_outcome_fk=reader.reference("student_learning_outcome_fk", "El SLO"),
            score_value=reader.decimal("score_value", "El puntaje", required=True, minimum=Decimal("0")),
            achievement_level=reader.choice("achievement_level", "Nivel de logro", ACHIEVEMENT_LEVELS),
            assessment_method=reader.optional("assessment_method"),
            notes=reader.optional("notes"),
            assessed_date=reader.date("assessed_date", "La fecha de evaluación"),
            is_finalized=reader.flag("is_finalized", default=False),
        )

    @classmethod
    def validate(cls, payload: AssessmentPayload, record=None) -> list[str]:
        errors = []
        if cls.missing(Enrollment, payload.enrollment_fk):
            errors.append("La inscripción seleccionada no existe.")
        if cls.missing(StudentLearningOutcome, payload.student_learning_outcome_fk):
            errors.append("El SLO seleccionado no existe.")
        if not errors and cls.exists(
            Assessment,
            record,
            enrollment_fk=payload.enrollment_fk,
            student_learning_outcome_fk=payload.student_learning_outcome_fk,
        ):
            errors.append("Esa inscripción ya tiene una evaluación para el SLO seleccionado.")
        return errors
