"""
Export Renderers

Serializes generated records to:
- SQL (CREATE TABLE + one multi-row INSERT)
- CSV (pandas)
- TXT (tab separated)
- Fixed-width text table
- XLSX (pandas + openpyxl, sheet "Data")
- PDF (fpdf2, landscape A4 table)
"""

import io
import re
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union
import logging

import pandas as pd
from fpdf import FPDF

from .errors import ErrorKind, create_error, log_error

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

FILENAME_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')
SQL_IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

EXTENSIONS = {
    'sql': '.sql',
    'csv': '.csv',
    'txt': '.txt',
    'xlsx': '.xlsx',
    'pdf': '.pdf',
    'fixed': '.fixed.txt',
}

MEDIA_TYPES = {
    'sql': 'application/sql',
    'csv': 'text/csv',
    'txt': 'text/plain',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'pdf': 'application/pdf',
    'fixed': 'text/plain',
}

# Fixed-width columns are sized from a sample of rows and capped
FIXED_SAMPLE_ROWS = 100
FIXED_MAX_WIDTH = 50

# PDF table styling
PDF_MARGIN = 10
PDF_FONT_SIZE = 7
PDF_ROW_HEIGHT = 6
PDF_HEADER_FILL = (66, 139, 202)
PDF_ALT_ROW_FILL = (245, 248, 252)


def _require_records(records: Sequence[Record]):
    if not records:
        raise create_error(ErrorKind.NO_DATA_TO_EXPORT)


def _columns(records: Sequence[Record]) -> List[str]:
    return list(records[0].keys())


def _sql_type(value: Any) -> str:
    """Column type inferred from a sample value"""
    if isinstance(value, bool):
        return 'BOOLEAN'
    if isinstance(value, int):
        return 'INT'
    if isinstance(value, float):
        return 'FLOAT'
    return 'VARCHAR(255)'


def _require_identifier(name: Any, role: str):
    """Table and column names go into the script unquoted"""
    if not isinstance(name, str) or not SQL_IDENTIFIER_PATTERN.fullmatch(name):
        raise create_error(
            ErrorKind.INVALID_FIELD_NAME,
            f"SQL {role} name '{name}'",
            {'role': role, 'name': name},
        )


def _sql_literal(value: Any) -> str:
    if value is None:
        return 'NULL'
    if isinstance(value, bool):
        return '1' if value else '0'
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def export_sql(records: Sequence[Record], table_name: str = "GeneratedData") -> str:
    """
    Render records as a CREATE TABLE statement and one INSERT

    Args:
        records: Non-empty list of records
        table_name: Target table name

    Returns:
        SQL script text
    """
    _require_records(records)
    columns = _columns(records)
    _require_identifier(table_name, 'table')
    for col in columns:
        _require_identifier(col, 'column')
    sample = records[0]

    lines = [f"CREATE TABLE {table_name} ("]
    for idx, col in enumerate(columns):
        comma = ',' if idx < len(columns) - 1 else ''
        lines.append(f"    {col} {_sql_type(sample[col])}{comma}")
    lines.append(");")
    lines.append("")
    lines.append(f"INSERT INTO {table_name} ({', '.join(columns)}) VALUES")

    for idx, record in enumerate(records):
        values = ', '.join(_sql_literal(record.get(col)) for col in columns)
        terminator = ',' if idx < len(records) - 1 else ';'
        lines.append(f"({values}){terminator}")

    return '\n'.join(lines) + '\n'


def export_csv(records: Sequence[Record]) -> str:
    _require_records(records)
    buffer = io.StringIO()
    pd.DataFrame(list(records), columns=_columns(records)).to_csv(buffer, index=False)
    return buffer.getvalue()


def export_txt(records: Sequence[Record]) -> str:
    """Tab-separated header line followed by one line per record"""
    _require_records(records)
    columns = _columns(records)
    lines = ['\t'.join(columns)]
    lines.extend('\t'.join(str(record.get(col, '')) for col in columns) for record in records)
    return '\n'.join(lines)


def _fixed_text(value: Any) -> str:
    return 'NULL' if value is None else str(value)


def export_fixed(records: Sequence[Record]) -> str:
    """
    Render records as a padded text table

    Columns are separated by " | " and sized to the widest of the header
    and the first rows, never wider than FIXED_MAX_WIDTH. Longer values
    are cut to the column width.
    """
    _require_records(records)
    columns = _columns(records)
    sample = records[:FIXED_SAMPLE_ROWS]

    widths = []
    for col in columns:
        width = max([len(col)] + [len(_fixed_text(record.get(col))) for record in sample])
        widths.append(min(width, FIXED_MAX_WIDTH))

    def row(values):
        return ' | '.join(text[:width].ljust(width) for text, width in zip(values, widths))

    header = row(columns)
    lines = [header, '-' * len(header)]
    lines.extend(row([_fixed_text(record.get(col)) for col in columns]) for record in records)
    return '\n'.join(lines) + '\n'


def export_xlsx(records: Sequence[Record]) -> bytes:
    _require_records(records)
    buffer = io.BytesIO()
    frame = pd.DataFrame(list(records), columns=_columns(records))
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        frame.to_excel(writer, index=False, sheet_name='Data')
    return buffer.getvalue()


def readable_label(name: str) -> str:
    """firstName -> First Name, student_id -> Student id"""
    label = re.sub(r'([a-z])([A-Z])', r'\1 \2', name)
    label = re.sub(r'[_-]+', ' ', label)
    label = re.sub(r'\s+', ' ', label).strip()
    return label[:1].upper() + label[1:]


def _pdf_text(value: Any) -> str:
    # Core fonts only cover latin-1
    return str(value).encode('latin-1', 'replace').decode('latin-1')


def _fit(pdf: FPDF, text: str, width: float) -> str:
    """Truncate text with an ellipsis so it fits a cell"""
    limit = width - 2
    if pdf.get_string_width(text) <= limit:
        return text
    while text and pdf.get_string_width(text + '...') > limit:
        text = text[:-1]
    return text + '...'


def export_pdf(records: Sequence[Record], title: str = "Generated Data") -> bytes:
    """
    Render records as a landscape A4 table

    Args:
        records: Non-empty list of records
        title: Heading printed above the table

    Returns:
        PDF document bytes
    """
    _require_records(records)
    columns = _columns(records)

    if len(columns) >= 10:
        logger.warning(f"PDF export with {len(columns)} columns, cells will be truncated")

    pdf = FPDF(orientation='L', unit='mm', format='A4')
    pdf.set_margins(PDF_MARGIN, PDF_MARGIN, PDF_MARGIN)
    pdf.set_auto_page_break(auto=True, margin=PDF_MARGIN)
    pdf.add_page()

    pdf.set_font('Helvetica', 'B', 12)
    pdf.cell(0, 10, _pdf_text(title))
    pdf.ln(12)

    col_width = (pdf.w - 2 * PDF_MARGIN) / len(columns)

    def header():
        pdf.set_font('Helvetica', 'B', PDF_FONT_SIZE)
        pdf.set_fill_color(*PDF_HEADER_FILL)
        pdf.set_text_color(255, 255, 255)
        for col in columns:
            pdf.cell(col_width, PDF_ROW_HEIGHT, _fit(pdf, _pdf_text(readable_label(col)), col_width),
                     border=1, align='C', fill=True)
        pdf.ln(PDF_ROW_HEIGHT)
        pdf.set_font('Helvetica', '', PDF_FONT_SIZE)
        pdf.set_text_color(0, 0, 0)

    header()
    pdf.set_fill_color(*PDF_ALT_ROW_FILL)

    for idx, record in enumerate(records):
        if pdf.get_y() + PDF_ROW_HEIGHT > pdf.h - PDF_MARGIN:
            pdf.add_page()
            header()
            pdf.set_fill_color(*PDF_ALT_ROW_FILL)
        for col in columns:
            text = _fit(pdf, _pdf_text(record.get(col, '')), col_width)
            pdf.cell(col_width, PDF_ROW_HEIGHT, text, border=1, fill=idx % 2 == 1)
        pdf.ln(PDF_ROW_HEIGHT)

    return bytes(pdf.output())


def validate_filename(filename: str) -> bool:
    """Only letters, digits, underscores and hyphens are allowed"""
    return bool(filename) and bool(FILENAME_PATTERN.match(filename))


class Exporter:
    """
    Dispatches records to a renderer by format name

    Supported formats: sql, csv, txt, xlsx, pdf, fixed
    """

    FORMATS = tuple(EXTENSIONS.keys())

    def __init__(self, table_name: str = "GeneratedData"):
        self.table_name = table_name

    def export(self, records: Sequence[Record], fmt: str) -> Union[str, bytes]:
        """
        Render records in a format

        Args:
            records: Records to export
            fmt: Format name (case-insensitive)

        Returns:
            Text for sql/csv/txt/fixed, bytes for xlsx/pdf
        """
        fmt = (fmt or '').lower()
        if fmt == 'sql':
            return export_sql(records, self.table_name)
        if fmt == 'csv':
            return export_csv(records)
        if fmt == 'txt':
            return export_txt(records)
        if fmt == 'xlsx':
            return export_xlsx(records)
        if fmt == 'pdf':
            return export_pdf(records)
        if fmt == 'fixed':
            return export_fixed(records)
        raise create_error(
            ErrorKind.UNSUPPORTED_EXPORT_FORMAT,
            f"'{fmt}'",
            {'format': fmt, 'supported': ', '.join(self.FORMATS)},
        )

    def write(self, records: Sequence[Record], fmt: str, filepath: Union[str, Path]) -> Path:
        """
        Render records and write them to a file

        Args:
            records: Records to export
            fmt: Format name
            filepath: Destination path (parent directories are created)

        Returns:
            Path written
        """
        content = self.export(records, fmt)
        filepath = Path(filepath)

        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                filepath.write_bytes(content)
            else:
                filepath.write_text(content, encoding='utf-8')
        except OSError as e:
            error = create_error(ErrorKind.EXPORT_FAILED, str(e), {'path': str(filepath), 'format': fmt})
            log_error(error, logger)
            raise error from e

        logger.info(f"File written successfully: {filepath}")
        return filepath


def write_exports(
    records: Sequence[Record],
    formats: Sequence[str],
    output_dir: Union[str, Path] = "output",
    filename: str = "data",
    table_name: str = "GeneratedData",
) -> List[Path]:
    """
    Write records in every requested format

    Args:
        records: Records to export
        formats: Format names
        output_dir: Directory for the files
        filename: Base filename without extension
        table_name: Table name for SQL output

    Returns:
        Paths of the written files, in format order
    """
    if not validate_filename(filename):
        raise create_error(
            ErrorKind.EXPORT_FAILED,
            f"Invalid filename '{filename}': use letters, numbers, underscores and hyphens",
            {'filename': filename},
        )

    exporter = Exporter(table_name)
    output_dir = Path(output_dir)
    paths = []

    for fmt in formats:
        fmt = fmt.lower()
        extension = EXTENSIONS.get(fmt)
        if extension is None:
            raise create_error(
                ErrorKind.UNSUPPORTED_EXPORT_FORMAT,
                f"'{fmt}'",
                {'format': fmt, 'supported': ', '.join(Exporter.FORMATS)},
            )
        paths.append(exporter.write(records, fmt, output_dir / f"{filename}{extension}"))

    return paths
