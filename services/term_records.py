# services/term_records.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from extensions import db
from models import Course, CourseSection, Program, Term, TermYear
from services.form_reader import FormReader
from services.record_service import RecordService


@dataclass
class TermYearPayload:
    term_name: str
    start_date: date | None
    end_date: date | None
    is_current: bool
    is_active: bool


@dataclass
class TermPayload:
    term_year_fk: int | None
    term_code: str
    term_name: str
    academic_year: str | None
    start_date: date | None
    end_date: date | None
    is_active: bool


def _date_range_errors(start: date | None, end: date | None) -> list[str]:
    if start and end and end < start:
        return ["La fecha de fin no puede ser anterior a la fecha de inicio."]
    return []


class TermYearRecords(RecordService):
    model = TermYear
    label = "Año académico"
    dependents = (
        (Term.term_year_fk, "El año académico tiene {count} período(s) asociado(s)."),
        (Program.term_year_fk, "El año académico tiene {count} programa(s) asociado(s)."),
    )

    created_message = "Año académico creado correctamente."
    updated_message = "Año académico actualizado correctamente."
    deleted_message = "Año académico eliminado."
    not_found_message = "No se encontró el año académico."

    @classmethod
    def read_form(cls, reader: FormReader) -> TermYearPayload:
        return TermYearPayload(
            term_name=reader.text("term_name", "El nombre"),
            start_date=reader.date("start_date", "La fecha de inicio"),
            end_date=reader.date("end_date", "La fecha de fin"),
            is_current=reader.flag("is_current", default=False),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: TermYearPayload, record=None) -> list[str]:
        errors = _date_range_errors(payload.start_date, payload.end_date)
        if cls.exists(TermYear, record, term_name=payload.term_name):
            errors.append(f"Ya existe un año académico llamado {payload.term_name}.")
        return errors

    @classmethod
    def after_save(cls, record, payload) -> None:
        # Un único año vigente
        if record.is_current:
            TermYear.query.filter(TermYear.id != record.id, TermYear.is_current.is_(True)).update(
                {"is_current": False}, synchronize_session="fetch"
            )
            db.session.flush()


class TermRecords(RecordService):
    model = Term
    label = "Período"
    dependents = (
        (Course.term_fk, "El período tiene {count} curso(s) asociado(s)."),
        (CourseSection.term_fk, "El período tiene {count} sección(es) asociada(s)."),
    )

    created_message = "Período creado correctamente."
    updated_message = "Período actualizado correctamente."
    deleted_message = "Período eliminado."
    not_found_message = "No se encontró el período."

    @classmethod
    def read_form(cls, reader: FormReader) -> TermPayload:
        return TermPayload(
            term_year_fk=reader.reference("term_year_fk", "El año académico", required=False),
            term_code=reader.text("term_code", "El código", upper=True),
            term_name=reader.text("term_name", "El nombre"),
            academic_year=reader.optional("academic_year"),
            start_date=reader.date("start_date", "La fecha de inicio"),
            end_date=reader.date("end_date", "La fecha de fin"),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: TermPayload, record=None) -> list[str]:
        errors = _date_range_errors(payload.start_date, payload.end_date)
        if cls.missing(TermYear, payload.term_year_fk):
            errors.append("El año académico seleccionado no existe.")
        if cls.exists(Term, record, term_code=payload.term_code):
            errors.append(f"Ya existe un período con el código {payload.term_code}.")
        return errors
