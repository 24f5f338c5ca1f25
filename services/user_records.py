# services/user_records.py

from __future__ import annotations

from dataclasses import dataclass

from models import CourseSection, User
from services.errors import RecordError
from services.form_reader import FormReader
from services.record_service import RecordService

MIN_PASSWORD_LENGTH = 8


@dataclass
class UserPayload:
    full_name: str
    email: str | None
    password: str
    is_active: bool


class UserRecords(RecordService):
    """
    Usuarios del panel. La contraseña es obligatoria al crear y opcional al editar
    (vacía = se mantiene la actual). Nadie puede desactivarse ni borrarse a sí mismo.
    """

    model = User
    label = "Usuario"
    dependents = (
        (CourseSection.instructor_fk, "El usuario es docente de {count} sección(es)."),
    )

    created_message = "Usuario creado correctamente."
    updated_message = "Usuario actualizado correctamente."
    deleted_message = "Usuario eliminado."
    not_found_message = "Usuario no encontrado."

    @classmethod
    def read_form(cls, reader: FormReader) -> UserPayload:
        return UserPayload(
            full_name=reader.text("full_name", "El nombre"),
            email=reader.email("email", "El email", required=True),
            password=(reader.form.get("password") or "").strip(),
            is_active=reader.flag("is_active", default=True),
        )

    @classmethod
    def validate(cls, payload: UserPayload, record=None) -> list[str]:
        errors = []
        if record is None and not payload.password:
            errors.append("La contraseña es obligatoria.")
        elif payload.password and len(payload.password) < MIN_PASSWORD_LENGTH:
            errors.append(f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres.")
        if cls.exists(User, record, email=payload.email):
            errors.append("Ya existe un usuario con ese email.")
        return errors

    @classmethod
    def apply(cls, record, payload: UserPayload) -> None:
        record.full_name = payload.full_name
        record.email = payload.email
        record.is_active = payload.is_active
        if payload.password:
            record.set_password(payload.password)

    @classmethod
    def update(cls, ctx, record_id, form):
        record = cls.get(record_id)
        if record.id == ctx.user_id and not FormReader(form).flag("is_active", default=True):
            raise RecordError("No podés desactivar tu propio usuario.")
        return super().update(ctx, record_id, form)

    @classmethod
    def check_toggle(cls, ctx, record) -> list[str]:
        if record.id == ctx.user_id:
            return ["No podés desactivar tu propio usuario."]
        return []

    @classmethod
    def find_blockers(cls, ctx, record) -> list[str]:
        if record.id == ctx.user_id:
            return ["No podés eliminar tu propio usuario."]
        return super().find_blockers(ctx, record)
