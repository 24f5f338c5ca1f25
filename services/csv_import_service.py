# services/csv_import_service.py

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field

from flask import current_app

from extensions import db
from models import Student, Term
from services.errors import RecordError
from services.form_reader import EMAIL_RE, parse_bool, parse_date
from services.request_context import AdminContext

TERM_COLUMNS = ("term_code", "term_name", "start_date", "end_date", "is_active")
STUDENT_COLUMNS = ("student_id", "first_name", "last_name", "email", "is_active")

MAX_REPORTED_WARNINGS = 5


@dataclass
class ImportResult:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    warnings: list[str] = field(default_factory=list)

    def skip(self, message: str) -> None:
        self.skipped += 1
        self.warnings.append(message)

    def messages(self) -> list[str]:
        lines = [
            f"Importación completa: {self.inserted} nuevo(s), {self.updated} actualizado(s), "
            f"{self.skipped} omitido(s)."
        ]
        lines.extend(self.warnings[:MAX_REPORTED_WARNINGS])
        if len(self.warnings) > MAX_REPORTED_WARNINGS:
            lines.append(f"... y {len(self.warnings) - MAX_REPORTED_WARNINGS} advertencia(s) más.")
        return lines


def _read_rows(file_storage, required_columns):
    """
    Devuelve (nro_de_línea, fila) de un CSV subido.
    El BOM UTF-8 (Excel) se descarta con utf-8-sig.
    """
    if file_storage is None or not getattr(file_storage, "filename", ""):
        raise RecordError("Seleccioná un archivo CSV válido.")

    try:
        content = file_storage.read().decode("utf-8-sig")
    except UnicodeDecodeError:
        raise RecordError("El archivo debe estar codificado en UTF-8.")

    reader = csv.DictReader(io.StringIO(content))
    headers = [(h or "").strip().lower() for h in (reader.fieldnames or [])]
    missing = [c for c in required_columns if c not in headers]
    if missing:
        raise RecordError(f"Faltan columnas en el CSV: {', '.join(missing)}.")
    reader.fieldnames = headers

    for line_number, row in enumerate(reader, start=2):
        yield line_number, {k: (v or "").strip() for k, v in row.items() if k}


class CsvImportService:
    """
    Altas/actualizaciones masivas por CSV (upsert por clave natural).
    Las filas inválidas se omiten y se informan; el resto se guarda en una sola transacción.
    """

    @staticmethod
    def import_terms(ctx: AdminContext, file_storage) -> ImportResult:
        result = ImportResult()

        for line, row in _read_rows(file_storage, TERM_COLUMNS[:2]):
            code = row.get("term_code", "").upper()
            name = row.get("term_name", "")
            if not code or not name:
                result.skip(f"Fila {line}: faltan term_code o term_name.")
                continue

            try:
                start_date = parse_date(row["start_date"]) if row.get("start_date") else None
                end_date = parse_date(row["end_date"]) if row.get("end_date") else None
            except ValueError:
                result.skip(f"Fila {line}: fecha inválida (usar YYYY-MM-DD).")
                continue

            term = Term.query.filter_by(term_code=code).first()
            created = term is None
            if created:
                term = Term(term_code=code)
                db.session.add(term)

            term.term_name = name
            term.start_date = start_date
            term.end_date = end_date
            term.is_active = parse_bool(row.get("is_active"), default=True)
            term.stamp(ctx.user_id, created=created)

            if created:
                result.inserted += 1
            else:
                result.updated += 1

        return CsvImportService._finish("Período", result, ctx)

    @staticmethod
    def import_students(ctx: AdminContext, file_storage) -> ImportResult:
        result = ImportResult()

        for line, row in _read_rows(file_storage, STUDENT_COLUMNS[:3]):
            student_id = row.get("student_id", "")
            first_name = row.get("first_name", "")
            last_name = row.get("last_name", "")
            if not student_id or not first_name or not last_name:
                result.skip(f"Fila {line}: faltan student_id, first_name o last_name.")
                continue

            email = row.get("email", "").lower() or None
            if email and not EMAIL_RE.match(email):
                result.skip(f"Fila {line}: email inválido ({email}).")
                continue

            student = Student.query.filter_by(student_id=student_id).first()
            created = student is None
            if created:
                student = Student(student_id=student_id)
                db.session.add(student)

            student.first_name = first_name
            student.last_name = last_name
            student.email = email
            student.is_active = parse_bool(row.get("is_active"), default=True)
            student.stamp(ctx.user_id, created=created)

            if created:
                result.inserted += 1
            else:
                result.updated += 1

        return CsvImportService._finish("Estudiante", result, ctx)

    @staticmethod
    def _finish(label: str, result: ImportResult, ctx: AdminContext) -> ImportResult:
        if not result.inserted and not result.updated:
            db.session.rollback()
            raise RecordError(["No se importó ningún registro."] + result.warnings[:MAX_REPORTED_WARNINGS])

        db.session.commit()
        current_app.logger.info(
            "Import CSV %s: nuevos=%s actualizados=%s omitidos=%s user=%s",
            label,
            result.inserted,
            result.updated,
            result.skipped,
            ctx.user_id,
        )
        return result
