"""
Test Suite for Exporters

Tests SQL, CSV, TXT, fixed-width, XLSX and PDF rendering plus file writing.
"""

import io

import pandas as pd
import pytest

from dummyforge.errors import DummyForgeError, ErrorKind
from dummyforge.exporters import (
    Exporter,
    export_csv,
    export_fixed,
    export_pdf,
    export_sql,
    export_txt,
    export_xlsx,
    readable_label,
    validate_filename,
    write_exports,
)


@pytest.fixture
def records():
    return [
        {"id": 1, "name": "Ann", "active": True, "score": 9.5},
        {"id": 2, "name": "O'Brien", "active": False, "score": 7.0},
    ]


class TestSqlExport:
    """Test SQL rendering"""

    def test_exact_script(self, records):
        assert export_sql(records, "People") == (
            "CREATE TABLE People (\n"
            "    id INT,\n"
            "    name VARCHAR(255),\n"
            "    active BOOLEAN,\n"
            "    score FLOAT\n"
            ");\n"
            "\n"
            "INSERT INTO People (id, name, active, score) VALUES\n"
            "(1, 'Ann', 1, 9.5),\n"
            "(2, 'O''Brien', 0, 7.0);\n"
        )

    def test_single_record(self):
        sql = export_sql([{"code": "X"}])

        assert sql.startswith("CREATE TABLE GeneratedData (\n    code VARCHAR(255)\n);")
        assert sql.endswith("('X');\n")

    def test_none_is_null(self):
        assert "(NULL);" in export_sql([{"note": None}])

    @pytest.mark.parametrize("table_name", ["x; DROP TABLE y", "1st", "my table", "People\n", ""])
    def test_rejects_unsafe_table_name(self, records, table_name):
        with pytest.raises(DummyForgeError) as excinfo:
            export_sql(records, table_name)

        assert excinfo.value.kind == ErrorKind.INVALID_FIELD_NAME
        assert excinfo.value.context == {"role": "table", "name": table_name}

    def test_rejects_unsafe_column_name(self):
        with pytest.raises(DummyForgeError) as excinfo:
            export_sql([{"id": 1, "name) VALUES (1); --": "x"}])

        assert excinfo.value.kind == ErrorKind.INVALID_FIELD_NAME
        assert excinfo.value.context["role"] == "column"

    def test_other_formats_keep_free_form_headers(self):
        assert export_txt([{"first name": "Ann"}]) == "first name\nAnn"


class TestTextExports:
    """Test CSV, TXT and fixed-width rendering"""

    def test_csv(self, records):
        frame = pd.read_csv(io.StringIO(export_csv(records)))

        assert list(frame.columns) == ["id", "name", "active", "score"]
        assert frame["name"].tolist() == ["Ann", "O'Brien"]

    def test_txt(self, records):
        assert export_txt(records) == (
            "id\tname\tactive\tscore\n"
            "1\tAnn\tTrue\t9.5\n"
            "2\tO'Brien\tFalse\t7.0"
        )

    def test_fixed_width(self, records):
        assert export_fixed(records) == (
            "id | name    | active | score\n"
            + "-" * 29 + "\n"
            + "1  | Ann     | True   | 9.5  \n"
            + "2  | O'Brien | False  | 7.0  \n"
        )

    def test_fixed_width_caps_and_nulls(self):
        lines = export_fixed([{"note": "x" * 80, "gap": None}]).splitlines()

        assert lines[2] == "x" * 50 + " | NULL"


class TestBinaryExports:
    """Test XLSX and PDF rendering"""

    def test_xlsx_sheet(self, records):
        frame = pd.read_excel(io.BytesIO(export_xlsx(records)), sheet_name="Data")

        assert list(frame.columns) == ["id", "name", "active", "score"]
        assert frame["id"].tolist() == [1, 2]

    def test_pdf(self, records):
        assert export_pdf(records).startswith(b"%PDF")

    def test_pdf_many_rows_and_non_latin_text(self):
        rows = [{"name": f"名前 {i}", "city": "Zürich" * 10} for i in range(120)]

        assert export_pdf(rows).startswith(b"%PDF")

    @pytest.mark.parametrize("name,label", [
        ("firstName", "First Name"),
        ("student_id", "Student id"),
        ("dateOfBirth", "Date Of Birth"),
        ("x", "X"),
    ])
    def test_readable_label(self, name, label):
        assert readable_label(name) == label


class TestExporter:
    """Test format dispatch and file writing"""

    @pytest.mark.parametrize("fmt", ["sql", "csv", "txt", "fixed", "xlsx", "pdf"])
    def test_empty_records(self, fmt):
        with pytest.raises(DummyForgeError) as excinfo:
            Exporter().export([], fmt)

        assert excinfo.value.kind == ErrorKind.NO_DATA_TO_EXPORT

    def test_unsupported_format(self, records):
        with pytest.raises(DummyForgeError) as excinfo:
            Exporter().export(records, "docx")

        assert excinfo.value.kind == ErrorKind.UNSUPPORTED_EXPORT_FORMAT

    def test_format_is_case_insensitive(self, records):
        assert Exporter("T").export(records, "SQL").startswith("CREATE TABLE T (")

    def test_write_creates_parents(self, records, tmp_path):
        path = Exporter().write(records, "csv", tmp_path / "nested" / "out.csv")

        assert path.read_text().startswith("id,name")

    def test_write_failure(self, records, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(DummyForgeError) as excinfo:
            Exporter().write(records, "txt", blocker / "out.txt")

        assert excinfo.value.kind == ErrorKind.EXPORT_FAILED

    def test_write_exports(self, records, tmp_path):
        paths = write_exports(records, ["sql", "xlsx"], tmp_path, "people", "People")

        assert [p.name for p in paths] == ["people.sql", "people.xlsx"]
        assert "INSERT INTO People" in paths[0].read_text()

    def test_write_exports_invalid_filename(self, records, tmp_path):
        with pytest.raises(DummyForgeError) as excinfo:
            write_exports(records, ["csv"], tmp_path, "../escape")

        assert excinfo.value.kind == ErrorKind.EXPORT_FAILED
        assert not list(tmp_path.iterdir())

    def test_write_exports_unknown_format(self, records, tmp_path):
        with pytest.raises(DummyForgeError) as excinfo:
            write_exports(records, ["docx"], tmp_path)

        assert excinfo.value.kind == ErrorKind.UNSUPPORTED_EXPORT_FORMAT

    @pytest.mark.parametrize("filename,valid", [
        ("data", True),
        ("my-file_2", True),
        ("", False),
        ("with space", False),
        ("a.b", False),
    ])
    def test_validate_filename(self, filename, valid):
        assert validate_filename(filename) is valid
