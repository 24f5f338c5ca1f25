# services/form_reader.py

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Mapping

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TRUTHY = ("1", "true", "on", "sí", "si", "yes")


class FormReader:
    """
    Convierte un form HTML (MultiDict o dict) en valores tipados.
    Los errores de formato y de campos obligatorios se acumulan en `errors`
    para reportarlos todos juntos.
    """

    def __init__(self, form: Mapping):
        self.form = form
        self.errors: list[str] = []

    def raw(self, name: str) -> str:
        return (self.form.get(name) or "").strip()

    def text(self, name: str, label: str | None = None, *, upper: bool = False, lower: bool = False) -> str:
        value = self.raw(name)
        if upper:
            value = value.upper()
        if lower:
            value = value.lower()
        if label and not value:
            self.errors.append(f"{label} es obligatorio.")
        return value

    def optional(self, name: str) -> str | None:
        return self.raw(name) or None

    def integer(self, name: str, label: str, *, required: bool = False, minimum: int | None = None) -> int | None:
        raw = self.raw(name)
        if not raw:
            if required:
                self.errors.append(f"{label} es obligatorio.")
            return None
        try:
            value = int(raw)
        except ValueError:
            self.errors.append(f"{label} debe ser numérico.")
            return None
        if minimum is not None and value < minimum:
            self.errors.append(f"{label} debe ser >= {minimum}.")
            return None
        return value

    def reference(self, name: str, label: str, *, required: bool = True) -> int | None:
        """Lee el id de otra entidad (select del form). Vacío, 0 o basura cuentan como ausente."""
        raw = self.raw(name)
        try:
            value = int(raw) if raw else 0
        except ValueError:
            value = 0
        if value <= 0:
            if required:
                self.errors.append(f"{label} es obligatorio.")
            return None
        return value

    def decimal(self, name: str, label: str, *, required: bool = False, minimum: Decimal | None = None) -> Decimal | None:
        raw = self.raw(name)
        if not raw:
            if required:
                self.errors.append(f"{label} es obligatorio.")
            return None
        try:
            value = Decimal(raw)
        except InvalidOperation:
            self.errors.append(f"{label} debe ser numérico.")
            return None
        if not value.is_finite():
            self.errors.append(f"{label} debe ser numérico.")
            return None
        if minimum is not None and value < minimum:
            self.errors.append(f"{label} debe ser >= {minimum}.")
            return None
        return value

    def date(self, name: str, label: str, *, required: bool = False) -> date | None:
        raw = self.raw(name)
        if not raw:
            if required:
                self.errors.append(f"{label} es obligatorio.")
            return None
        try:
            return parse_date(raw)
        except ValueError:
            self.errors.append(f"{label} debe tener formato YYYY-MM-DD.")
            return None

    def flag(self, name: str, default: bool = False) -> bool:
        """
        Lee un checkbox.
        Si existe un campo auxiliar <name>_present entendemos que el usuario pudo editarlo.
        """
        present_flag = self.form.get(f"{name}_present")
        raw = self.form.get(name)

        if present_flag is None and raw is None:
            return default
        if raw is None:
            return False
        return str(raw).strip().lower() in TRUTHY

    def choice(self, name: str, label: str, choices: Iterable[str], default: str | None = None) -> str | None:
        value = self.raw(name).lower() or default
        if value is None:
            return None
        if value not in choices:
            self.errors.append(f"{label} inválido.")
            return None
        return value

    def email(self, name: str, label: str, *, required: bool = False) -> str | None:
        value = self.raw(name).lower()
        if not value:
            if required:
                self.errors.append(f"{label} es obligatorio.")
            return None
        if not EMAIL_RE.match(value):
            self.errors.append(f"{label} no tiene un formato válido.")
        return value


def parse_date(raw: str) -> date:
    return datetime.strptime(raw.strip(), "%Y-%m-%d").date()


def parse_bool(raw, default: bool = True) -> bool:
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if not value:
        return default
    return value in TRUTHY
