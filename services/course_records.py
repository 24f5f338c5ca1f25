# services/course_records.py

from __future__ import annotations

from dataclasses import dataclass

from models import (
    Assessment,
    Course,
    CourseSection,
    Enrollment,
    ProgramOutcome,
    StudentLearningOutcome,
    Term,
    User,
)
from services.form_reader import FormReader
from services.record_service import RecordService


@dataclass
class CoursePayload:
    term_fk: int | None
    course_number: str
    course_name: str
    is_active: bool


@dataclass
class CourseSectionPayload:
    course_fk: int | None
    term_fk: int | None
    instructor_fk: int | None
    crn: str
    section_number: str | None
    max_enrollment: int | None
    is_active: bool


@dataclass
class LearningOutcomePayload:
    course_fk: int | None
    program_outcome_fk: int | None
    slo_code: str
    slo_description: str
    sequence_num: int
    is_active: bool


class CourseRecords(RecordService):
    model = Course
    label = "Curso"
    dependents = (
        (StudentLearningOutcome.course_fk, "El curso tiene {count} SLO(s) asociado(s)."),
        (CourseSection.course_fk, "El curso tiene {count} sección(es) asociada(s)."),
    )

    created_message = "Curso creado correctamente."
    updated_message = "Curso actualizado correctamente."
    deleted_message = "Curso eliminado."
    not_found_message = "No se encontró el curso."

    @classmethod
    def read_form(cls, reader: FormReader) -> CoursePayload:
        return CoursePayload(
            term_fk=reader.reference("term_fk", "El período"),
            course_number=reader.text("course_number", "El número de curso", upper=True),
            course_name=reader.text("course_name", "El nombre"),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: CoursePayload, record=None) -> list[str]:
        errors = []
        if cls.missing(Term, payload.term_fk):
            errors.append("El período seleccionado no existe.")
        if cls.exists(Course, record, course_number=payload.course_number):
            errors.append(f"Ya existe un curso con el número {payload.course_number}.")
        return errors


class CourseSectionRecords(RecordService):
    model = CourseSection
    label = "Sección"
    dependents = (
        (Enrollment.course_section_fk, "La sección tiene {count} inscripción(es)."),
    )

    created_message = "Sección creada correctamente."
    updated_message = "Sección actualizada correctamente."
    deleted_message = "Sección eliminada."
    not_found_message = "No se encontró la sección."

    @classmethod
    def read_form(cls, reader: FormReader) -> CourseSectionPayload:
        return CourseSectionPayload(
            course_fk=reader.reference("course_fk", "El curso"),
            term_fk=reader.reference("term_fk", "El período"),
            instructor_fk=reader.reference("instructor_fk", "El docente", required=False),
            crn=reader.text("crn", "El CRN"),
            section_number=reader.optional("section_number"),
            max_enrollment=reader.integer("max_enrollment", "El cupo", minimum=0),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: CourseSectionPayload, record=None) -> list[str]:
        errors = []
        if cls.missing(Course, payload.course_fk):
            errors.append("El curso seleccionado no existe.")
        if cls.missing(User, payload.instructor_fk):
            errors.append("El docente seleccionado no existe.")
        if cls.missing(Term, payload.term_fk):
            errors.append("El período seleccionado no existe.")
        elif cls.exists(CourseSection, record, term_fk=payload.term_fk, crn=payload.crn):
            errors.append(f"Ya existe una sección con CRN {payload.crn} en ese período.")
        return errors


class LearningOutcomeRecords(RecordService):
    model = StudentLearningOutcome
    label = "SLO"
    dependents = (
        (Assessment.student_learning_outcome_fk, "El SLO tiene {count} evaluación(es) registrada(s)."),
    )

    created_message = "SLO creado correctamente."
    updated_message = "SLO actualizado correctamente."
    deleted_message = "SLO eliminado."
    not_found_message = "No se encontró el SLO."

    @classmethod
    def read_form(cls, reader: FormReader) -> LearningOutcomePayload:
        return LearningOutcomePayload(
            course_fk=reader.reference("course_fk", "El curso"),
            program_outcome_fk=reader.reference(
                "program_outcome_fk", "El resultado de programa", required=False
            ),
            slo_code=reader.text("slo_code", "El código", upper=True),
            slo_description=reader.text("slo_description", "La descripción"),
            sequence_num=reader.integer("sequence_num", "El orden", minimum=0) or 0,
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: LearningOutcomePayload, record=None) -> list[str]:
        errors = []
        if cls.missing(ProgramOutcome, payload.program_outcome_fk):
            errors.append("El resultado de programa seleccionado no existe.")
        if cls.missing(Course, payload.course_fk):
            errors.append("El curso seleccionado no existe.")
        elif cls.exists(
            StudentLearningOutcome,
            record,
            course_fk=payload.course_fk,
            slo_code=payload.slo_code,
        ):
            errors.append(f"Ya existe el SLO {payload.slo_code} en ese curso.")
        return errors
