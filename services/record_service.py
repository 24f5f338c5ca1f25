# services/record_service.py

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping

from flask import current_app
from sqlalchemy import func, select

from extensions import db
from services.errors import RecordError, RecordNotFound
from services.form_reader import FormReader
from services.request_context import AdminContext


class RecordService:
    """
    Flujo común de las pantallas de administración:
    alta (add), edición (edit), activar/desactivar (toggle_status) y borrado (delete).

    Cada entidad define:
      - model / label
      - read_form(): form HTML -> dataclass tipada
      - validate(): unicidad de claves naturales y referencias válidas
      - dependents: tablas hijas que impiden el borrado
    Los errores recuperables se acumulan y se levantan juntos como RecordError.
    """

    model: Any = None
    label = "registro"
    toggle_field = "is_active"
    # ((columna FK de la tabla hija, mensaje con {count}), ...)
    dependents: tuple = ()

    created_message = "Registro creado correctamente."
    updated_message = "Registro actualizado correctamente."
    toggled_message = "Estado actualizado."
    deleted_message = "Registro eliminado."
    not_found_message = "No se encontró el registro."

    # ------------------------------------------------------------------
    # Hooks por entidad
    # ------------------------------------------------------------------
    @classmethod
    def read_form(cls, reader: FormReader):
        raise NotImplementedError

    @classmethod
    def validate(cls, payload, record=None) -> list[str]:
        return []

    @classmethod
    def apply(cls, record, payload) -> None:
        for key, value in asdict(payload).items():
            setattr(record, key, value)

    @classmethod
    def after_save(cls, record, payload) -> None:
        pass

    @classmethod
    def check_toggle(cls, ctx: AdminContext, record) -> list[str]:
        return []

    @classmethod
    def find_blockers(cls, ctx: AdminContext, record) -> list[str]:
        blockers = []
        for column, message in cls.dependents:
            count = db.session.scalar(
                select(func.count()).select_from(column.class_).where(column == record.id)
            )
            if count:
                blockers.append(message.format(count=count))
        return blockers

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------
    @classmethod
    def get(cls, record_id: int | None):
        record = db.session.get(cls.model, record_id) if record_id else None
        if record is None:
            raise RecordNotFound(cls.not_found_message)
        return record

    @classmethod
    def parse(cls, form: Mapping, record=None):
        reader = FormReader(form)
        payload = cls.read_form(reader)
        errors = list(reader.errors)
        errors.extend(cls.validate(payload, record))
        if errors:
            raise RecordError(errors)
        return payload

    @classmethod
    def create(cls, ctx: AdminContext, form: Mapping):
        payload = cls.parse(form)

        record = cls.model()
        cls.apply(record, payload)
        record.stamp(ctx.user_id, created=True)
        db.session.add(record)
        db.session.flush()
        cls.after_save(record, payload)
        db.session.commit()

        current_app.logger.info("%s creado: id=%s user=%s", cls.label, record.id, ctx.user_id)
        return record

    @classmethod
    def update(cls, ctx: AdminContext, record_id: int | None, form: Mapping):
        record = cls.get(record_id)
        payload = cls.parse(form, record)

        cls.apply(record, payload)
        record.stamp(ctx.user_id)
        cls.after_save(record, payload)
        db.session.commit()

        current_app.logger.info("%s actualizado: id=%s user=%s", cls.label, record.id, ctx.user_id)
        return record

    @classmethod
    def toggle(cls, ctx: AdminContext, record_id: int | None):
        record = cls.get(record_id)
        errors = cls.check_toggle(ctx, record)
        if errors:
            raise RecordError(errors)

        setattr(record, cls.toggle_field, not getattr(record, cls.toggle_field))
        record.stamp(ctx.user_id)
        db.session.commit()

        current_app.logger.info(
            "%s %s=%s: id=%s user=%s",
            cls.label,
            cls.toggle_field,
            getattr(record, cls.toggle_field),
            record.id,
            ctx.user_id,
        )
        return record

    @classmethod
    def delete(cls, ctx: AdminContext, record_id: int | None) -> None:
        record = cls.get(record_id)
        blockers = cls.find_blockers(ctx, record)
        if blockers:
            raise RecordError(blockers)

        deleted_id = record.id
        db.session.delete(record)
        db.session.commit()

        current_app.logger.info("%s eliminado: id=%s user=%s", cls.label, deleted_id, ctx.user_id)

    # ------------------------------------------------------------------
    # Helpers para validate()
    # ------------------------------------------------------------------
    @staticmethod
    def exists(model, record=None, **criteria) -> bool:
        """True si otra fila (distinta de `record`) ya tiene esos valores."""
        if any(value in (None, "") for value in criteria.values()):
            return False
        query = model.query.filter_by(**criteria)
        if record is not None and record.id is not None:
            query = query.filter(model.id != record.id)
        return db.session.query(query.exists()).scalar()

    @staticmethod
    def missing(model, record_id: int | None) -> bool:
        return record_id is not None and db.session.get(model, record_id) is None
