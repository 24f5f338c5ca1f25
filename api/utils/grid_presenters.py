# api/utils/grid_presenters.py
"""
Convierte las filas de las grillas en celdas HTML listas para DataTables.
La capa de datos (services/grid_service.py) no genera HTML; todo el escape pasa por acá.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal

from markupsafe import Markup, escape

ENROLLMENT_STATUS_CLASSES = {
    "enrolled": "success",
    "completed": "primary",
    "dropped": "warning",
    "withdrawn": "danger",
}


def _json_default(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"{type(value).__name__} no es serializable")


def js_arg(value) -> str:
    """JSON listo para ir como argumento dentro de un atributo onclick="..."."""
    return str(escape(json.dumps(value, default=_json_default)))


def text(value) -> str:
    if value is None:
        return ""
    return str(escape(value))


def fmt_date(value) -> str:
    if not value:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return value.isoformat() if isinstance(value, date) else text(value)


def fmt_score(value) -> str:
    if value is None:
        return ""
    return f"{Decimal(value):.2f}"


def truncate(value, limit: int) -> str:
    value = value or ""
    if len(value) > limit:
        value = value[:limit] + "..."
    return text(value)


def badge(label, css_class: str) -> str:
    return f'<span class="badge bg-{css_class}">{text(label)}</span>'


def status_badge(flag, true_label: str = "Active", false_label: str = "Inactive") -> str:
    return badge(true_label, "success") if flag else badge(false_label, "secondary")


def enrollment_badge(status) -> str:
    css_class = ENROLLMENT_STATUS_CLASSES.get((status or "").lower(), "secondary")
    return badge(status or "", css_class)


def action_buttons(row: dict, label, *, active: bool = True, toggle: bool = True) -> str:
    """
    Botones editar / activar-desactivar / eliminar.
    Los handlers JS (static/js/records.js) reciben la fila completa o (id, etiqueta).
    """
    record_id = int(row["id"])
    label_arg = js_arg(str(label or ""))
    buttons = [
        f'<button type="button" class="btn btn-sm btn-primary" title="Editar" '
        f'onclick="editRecord({js_arg(row)})"><i class="fas fa-edit"></i></button>'
    ]
    if toggle:
        icon, css_class = ("ban", "warning") if active else ("check", "success")
        buttons.append(
            f'<button type="button" class="btn btn-sm btn-{css_class}" title="Cambiar estado" '
            f'onclick="toggleStatus({record_id}, {label_arg})"><i class="fas fa-{icon}"></i></button>'
        )
    buttons.append(
        f'<button type="button" class="btn btn-sm btn-danger" title="Eliminar" '
        f'onclick="deleteRecord({record_id}, {label_arg})"><i class="fas fa-trash"></i></button>'
    )
    return Markup(" ".join(buttons))


# ---------------------------------------------------------------------------
# Una función por grilla: fila (dict) -> lista de celdas, mismo orden que las columnas
# ---------------------------------------------------------------------------
def institution_row(row, ctx):
    return [
        row["id"],
        text(row["institution_code"]),
        text(row["institution_name"]),
        status_badge(row["is_active"]),
        fmt_date(row["created_at"]),
        action_buttons(row, row["institution_code"], active=row["is_active"]),
    ]


def institutional_outcome_row(row, ctx):
    return [
        row["id"],
        text(row["institution_name"]),
        text(row["code"]),
        truncate(row["description"], ctx.preview_length),
        row["sequence_num"],
        status_badge(row["is_active"]),
        action_buttons(row, row["code"], active=row["is_active"]),
    ]


def term_year_row(row, ctx):
    return [
        row["id"],
        f"<strong>{text(row['term_name'])}</strong>",
        fmt_date(row["start_date"]) or "N/A",
        fmt_date(row["end_date"]) or "N/A",
        badge(row["program_count"], "info"),
        status_badge(row["is_active"]),
        badge("Yes", "primary") if row["is_current"] else badge("No", "secondary"),
        fmt_date(row["created_at"]),
        action_buttons(row, row["term_name"], active=row["is_active"]),
    ]


def term_row(row, ctx):
    return [
        text(row["term_code"]),
        text(row["term_name"]),
        text(row["academic_year"]),
        fmt_date(row["start_date"]),
        fmt_date(row["end_date"]),
        status_badge(row["is_active"]),
        action_buttons(row, row["term_code"], active=row["is_active"]),
    ]


def program_row(row, ctx):
    return [
        row["id"],
        text(row["program_code"]),
        text(row["program_name"]),
        text(row["institution_name"]),
        text(row["degree_type"]),
        status_badge(row["is_active"]),
        fmt_date(row["created_at"]),
        action_buttons(row, row["program_code"], active=row["is_active"]),
    ]


def program_outcome_row(row, ctx):
    return [
        row["id"],
        text(row["program_name"]),
        text(row["code"]),
        truncate(row["description"], ctx.preview_length),
        text(row["institutional_outcome_code"]),
        row["sequence_num"],
        status_badge(row["is_active"]),
        action_buttons(row, row["code"], active=row["is_active"]),
    ]


def course_row(row, ctx):
    return [
        text(row["course_number"]),
        text(row["course_name"]),
        text(row["term_code"]),
        status_badge(row["is_active"]),
        action_buttons(row, row["course_number"], active=row["is_active"]),
    ]


def course_section_row(row, ctx):
    return [
        row["id"],
        badge(row["crn"], "primary"),
        text(row["course_number"]),
        text(row["term_code"]),
        text(row["section_number"]),
        text(row["instructor_name"]),
        status_badge(row["is_active"]),
        action_buttons(row, row["crn"], active=row["is_active"]),
    ]


def learning_outcome_row(row, ctx):
    return [
        row["id"],
        text(row["course_number"]),
        text(row["program_outcome_code"]),
        text(row["slo_code"]),
        truncate(row["slo_description"], ctx.preview_length),
        row["sequence_num"],
        status_badge(row["is_active"]),
        action_buttons(row, row["slo_code"], active=row["is_active"]),
    ]


def student_row(row, ctx):
    return [
        row["id"],
        text(row["student_id"]),
        text(row["first_name"]),
        text(row["last_name"]),
        text(row["email"]),
        status_badge(row["is_active"]),
        action_buttons(row, row["student_id"], active=row["is_active"]),
    ]


def enrollment_row(row, ctx):
    return [
        row["id"],
        badge(row["term_code"] or "", "info"),
        badge(row["crn"] or "", "primary"),
        text(row["student_id"]),
        enrollment_badge(row["enrollment_status"]),
        fmt_date(row["enrollment_date"]),
        fmt_date(row["updated_at"]),
        action_buttons(row, f"{row['student_id']} / {row['crn']}", active=row["is_active"]),
    ]


def assessment_row(row, ctx):
    student_name = ", ".join(part for part in (row["last_name"], row["first_name"]) if part)
    return [
        row["id"],
        text(row["crn"]),
        text(student_name),
        text(row["slo_code"]),
        fmt_score(row["score_value"]),
        text(row["achievement_level"]),
        fmt_date(row["assessed_date"]),
        status_badge(row["is_finalized"], "Finalized", "Draft"),
        action_buttons(row, f"{row['student_id']} / {row['slo_code']}", active=row["is_finalized"]),
    ]


def user_row(row, ctx):
    return [
        row["id"],
        text(row["full_name"]),
        text(row["email"]),
        status_badge(row["is_active"]),
        action_buttons(row, row["email"], active=row["is_active"]),
    ]
