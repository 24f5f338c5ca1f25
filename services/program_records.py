# services/program_records.py

from __future__ import annotations

from dataclasses import dataclass

from models import (
    Institution,
    InstitutionalOutcome,
    Program,
    ProgramOutcome,
    StudentLearningOutcome,
    TermYear,
)
from services.form_reader import FormReader
from services.record_service import RecordService


@dataclass
class ProgramPayload:
    institution_fk: int | None
    term_year_fk: int | None
    program_code: str
    program_name: str
    degree_type: str | None
    is_active: bool


@dataclass
class ProgramOutcomePayload:
    program_fk: int | None
    institutional_outcome_fk: int | None
    code: str
    description: str
    sequence_num: int
    is_active: bool


class ProgramRecords(RecordService):
    model = Program
    label = "Programa"
    dependents = (
        (ProgramOutcome.program_fk, "El programa tiene {count} resultado(s) de programa asociado(s)."),
    )

    created_message = "Programa creado correctamente."
    updated_message = "Programa actualizado correctamente."
    deleted_message = "Programa eliminado."
    not_found_message = "No se encontró el programa."

    @classmethod
    def read_form(cls, reader: FormReader) -> ProgramPayload:
        return ProgramPayload(
            institution_fk=reader.reference("institution_fk", "La institución"),
            term_year_fk=reader.reference("term_year_fk", "El año académico", required=False),
            program_code=reader.text("program_code", "El código", upper=True),
            program_name=reader.text("program_name", "El nombre"),
            degree_type=reader.optional("degree_type"),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: ProgramPayload, record=None) -> list[str]:
        errors = []
        if cls.missing(Institution, payload.institution_fk):
            errors.append("La institución seleccionada no existe.")
        if cls.missing(TermYear, payload.term_year_fk):
            errors.append("El año académico seleccionado no existe.")
        if cls.exists(Program, record, program_code=payload.program_code):
            errors.append(f"Ya existe un programa con el código {payload.program_code}.")
        return errors


class ProgramOutcomeRecords(RecordService):
    model = ProgramOutcome
    label = "Resultado de programa"
    dependents = (
        (StudentLearningOutcome.program_outcome_fk, "El resultado está vinculado a {count} SLO(s)."),
    )

    created_message = "Resultado de programa creado correctamente."
    updated_message = "Resultado de programa actualizado correctamente."
    deleted_message = "Resultado de programa eliminado."
    not_found_message = "No se encontró el resultado de programa."

    @classmethod
    def read_form(cls, reader: FormReader) -> ProgramOutcomePayload:
        return ProgramOutcomePayload(
            program_fk=reader.reference("program_fk", "El programa"),
            institutional_outcome_fk=reader.reference(
                "institutional_outcome_fk", "El resultado institucional", required=False
            ),
            code=reader.text("code", "El código", upper=True),
            description=reader.text("description", "La descripción"),
            sequence_num=reader.integer("sequence_num", "El orden", minimum=0) or 0,
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: ProgramOutcomePayload, record=None) -> list[str]:
        errors = []
        if cls.missing(InstitutionalOutcome, payload.institutional_outcome_fk):
            errors.append("El resultado institucional seleccionado no existe.")
        if cls.missing(Program, payload.program_fk):
            errors.append("El programa seleccionado no existe.")
        elif cls.exists(ProgramOutcome, record, program_fk=payload.program_fk, code=payload.code):
            errors.append(f"Ya existe el resultado {payload.code} en ese programa.")
        return errors
