# services/institution_records.py

from __future__ import annotations

from dataclasses import dataclass

from models import Institution, InstitutionalOutcome, Program, ProgramOutcome
from services.form_reader import FormReader
from services.record_service import RecordService


@dataclass
class InstitutionPayload:
    institution_code: str
    institution_name: str
    is_active: bool


@dataclass
class InstitutionalOutcomePayload:
    institution_fk: int | None
    code: str
    description: str
    sequence_num: int
    is_active: bool


class InstitutionRecords(RecordService):
    model = Institution
    label = "Institución"
    dependents = (
        (InstitutionalOutcome.institution_fk, "La institución tiene {count} resultado(s) institucional(es) asociado(s)."),
        (Program.institution_fk, "La institución tiene {count} programa(s) asociado(s)."),
    )

    created_message = "Institución creada correctamente."
    updated_message = "Institución actualizada correctamente."
    toggled_message = "Estado de la institución actualizado."
    deleted_message = "Institución eliminada."
    not_found_message = "No se encontró la institución."

    @classmethod
    def read_form(cls, reader: FormReader) -> InstitutionPayload:
        return InstitutionPayload(
            institution_code=reader.text("institution_code", "El código", upper=True),
            institution_name=reader.text("institution_name", "El nombre"),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: InstitutionPayload, record=None) -> list[str]:
        errors = []
        if cls.exists(Institution, record, institution_code=payload.institution_code):
            errors.append(f"Ya existe una institución con el código {payload.institution_code}.")
        return errors


class InstitutionalOutcomeRecords(RecordService):
    model = InstitutionalOutcome
    label = "Resultado institucional"
    dependents = (
        (ProgramOutcome.institutional_outcome_fk, "El resultado está vinculado a {count} resultado(s) de programa."),
    )

    created_message = "Resultado institucional creado correctamente."
    updated_message = "Resultado institucional actualizado correctamente."
    deleted_message = "Resultado institucional eliminado."
    not_found_message = "No se encontró el resultado institucional."

    @classmethod
    def read_form(cls, reader: FormReader) -> InstitutionalOutcomePayload:
        return InstitutionalOutcomePayload(
            institution_fk=reader.reference("institution_fk", "La institución"),
            code=reader.text("code", "El código", upper=True),
            description=reader.text("description", "La descripción"),
            sequence_num=reader.integer("sequence_num", "El orden", minimum=0) or 0,
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: InstitutionalOutcomePayload, record=None) -> list[str]:
        errors = []
        if cls.missing(Institution, payload.institution_fk):
            errors.append("La institución seleccionada no existe.")
        elif cls.exists(
            InstitutionalOutcome,
            record,
            institution_fk=payload.institution_fk,
            code=payload.code,
        ):
            errors.append(f"Ya existe el resultado {payload.code} en esa institución.")
        return errors
