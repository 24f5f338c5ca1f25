"""CSV bulk imports for terms and students."""

from datetime import date
from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from models import Student, Term
from services import CsvImportService
from services.errors import RecordError


def upload(content: str, filename: str = "data.csv", bom: bool = False) -> FileStorage:
    raw = content.encode("utf-8")
    if bom:
        raw = b"\xef\xbb\xbf" + raw
    return FileStorage(stream=BytesIO(raw), filename=filename)


class TestTermImport:
    """Terms are upserted by term_code."""

    def test_bom_and_upsert(self, app, ctx, make) -> None:
        """A BOM-prefixed file inserts new codes and updates existing ones."""
        make.term(term_code="FA25", term_name="Old name")
        csv_text = (
            "Term_Code,term_name,start_date,end_date,is_active\n"
            "fa25,Fall 2025,2025-08-20,2025-12-15,1\n"
            "SP26,Spring 2026,2026-01-10,2026-05-10,0\n"
        )

        result = CsvImportService.import_terms(ctx, upload(csv_text, bom=True))

        assert (result.inserted, result.updated, result.skipped) == (1, 1, 0)
        fall = Term.query.filter_by(term_code="FA25").one()
        assert fall.term_name == "Fall 2025"
        assert fall.start_date == date(2025, 8, 20)
        spring = Term.query.filter_by(term_code="SP26").one()
        assert spring.is_active is False
        assert spring.created_by_fk == ctx.user_id

    def test_invalid_rows_are_skipped(self, app, ctx) -> None:
        """Rows with missing keys or bad dates are reported, the rest saved."""
        csv_text = (
            "term_code,term_name,start_date\n"
            "SU25,Summer,2025-06-01\n"
            ",No code,\n"
            "WI25,Winter,01/12/2025\n"
        )
        result = CsvImportService.import_terms(ctx, upload(csv_text))

        assert (result.inserted, result.skipped) == (1, 2)
        assert result.warnings[0].startswith("Fila 3:")
        assert "fecha inválida" in result.warnings[1]
        assert Term.query.count() == 1

    def test_missing_columns(self, app, ctx) -> None:
        with pytest.raises(RecordError) as excinfo:
            CsvImportService.import_terms(ctx, upload("code,name\nX,Y\n"))
        assert "term_code" in excinfo.value.messages[0]

    def test_nothing_imported(self, app, ctx) -> None:
        """A file where every row fails raises and leaves the table empty."""
        with pytest.raises(RecordError) as excinfo:
            CsvImportService.import_terms(ctx, upload("term_code,term_name\n,\n"))
        assert excinfo.value.messages[0] == "No se importó ningún registro."
        assert Term.query.count() == 0

    def test_no_file(self, app, ctx) -> None:
        with pytest.raises(RecordError):
            CsvImportService.import_terms(ctx, FileStorage(stream=BytesIO(b""), filename=""))


class TestStudentImport:
    """Students are upserted by student_id."""

    def test_upsert_and_email_check(self, app, ctx, make) -> None:
        make.student(student_id="S1", first_name="Old")
        csv_text = (
            "student_id,first_name,last_name,email,is_active\n"
            "S1,Ana,Paz,ANA@TEST.COM,yes\n"
            "S2,Leo,Sosa,,no\n"
            "S3,Bad,Mail,not-an-email,1\n"
        )
        result = CsvImportService.import_students(ctx, upload(csv_text))

        assert (result.inserted, result.updated, result.skipped) == (1, 1, 1)
        assert Student.query.filter_by(student_id="S1").one().email == "ana@test.com"
        assert Student.query.filter_by(student_id="S2").one().is_active is False
        assert Student.query.filter_by(student_id="S3").first() is None

    def test_warning_report_is_capped(self, app, ctx) -> None:
        """At most five warnings are listed after the summary line."""
        rows = "".join(f"X{n},,\n" for n in range(8))
        result = CsvImportService.import_students(
            ctx, upload("student_id,first_name,last_name\nOK1,Ana,Paz\n" + rows)
        )
        messages = result.messages()
        assert messages[0].startswith("Importación completa: 1 nuevo(s)")
        assert len(messages) == 1 + 5 + 1
        assert messages[-1] == "... y 3 advertencia(s) más."


class TestImportAction:
    """The import action on the admin pages."""

    def test_students_page_import(self, client) -> None:
        data = {
            "action": "import",
            "csv_file": (BytesIO(b"student_id,first_name,last_name\nS9,Eva,Luna\n"), "students.csv"),
        }
        response = client.post("/admin/students", data=data, content_type="multipart/form-data")

        assert response.status_code == 302
        assert Student.query.filter_by(student_id="S9").count() == 1
        with client.session_transaction() as session:
            category, message = session["_flashes"][0]
        assert category == "success"
        assert "1 nuevo(s)" in message
