"""Read uploaded CSV and XLSX payloads into header-keyed rows."""

import csv
import io
import logging
import zipfile
from typing import Any, Iterable, Iterator, Optional

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from budgetline.domain.errors import CorruptFile, FileTooLarge, UnsupportedFileType

log = logging.getLogger(__name__)

XLSX = "xlsx"
CSV = "csv"

CSV_DELIMITERS = ",;\t|"
_SNIFF_SAMPLE_SIZE = 4096

RawRow = dict[str, Any]


def detect_file_kind(filename: str) -> str:
    """Return ``"xlsx"`` or ``"csv"`` from a filename (case-insensitive).

    Raises:
        UnsupportedFileType: For any other extension
    """
    lowered = (filename or "").strip().lower()
    if lowered.endswith(".xlsx"):
        return XLSX
    if lowered.endswith(".csv"):
        return CSV
    raise UnsupportedFileType(
        "Invalid file type. Please upload an Excel (.xlsx) or CSV (.csv) file."
    )


def _rows_from_records(
    records: Iterable[Iterable[Any]], max_rows: Optional[int]
) -> list[RawRow]:
    """Pair every record after the header with the header cells.

    Columns with a blank header are dropped. Blank records are kept so the
    position of each row still matches its line in the file.
    """
    iterator: Iterator[Iterable[Any]] = iter(records)
    header = next(iterator, None)
    if header is None:
        return []

    columns = [
        (index, str(cell).strip())
        for index, cell in enumerate(header)
        if cell is not None and str(cell).strip()
    ]

    rows: list[RawRow] = []
    for record in iterator:
        if max_rows is not None and len(rows) >= max_rows:
            raise FileTooLarge(
                f"File has more than {max_rows} data rows. Split it into smaller files."
            )
        values = list(record)
        rows.append(
            {name: values[index] if index < len(values) else None for index, name in columns}
        )
    return rows


def _read_csv(content: bytes, max_rows: Optional[int]) -> list[RawRow]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CorruptFile(
            "Failed to process CSV file: the file is not valid UTF-8 text."
        ) from e

    try:
        delimiter = csv.Sniffer().sniff(text[:_SNIFF_SAMPLE_SIZE], delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        delimiter = ","
    log.debug("Reading CSV with delimiter %r", delimiter)

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    try:
        return _rows_from_records(reader, max_rows)
    except csv.Error as e:
        raise CorruptFile(f"Failed to process CSV file. Reason: {e}.") from e


def _read_xlsx(content: bytes, max_rows: Optional[int]) -> list[RawRow]:
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as e:
        raise CorruptFile(
            "Failed to process spreadsheet: The file is corrupted or not a valid XLSX format."
        ) from e

    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        log.debug("Reading worksheet %r", sheet.title)
        return _rows_from_records(sheet.iter_rows(values_only=True), max_rows)
    finally:
        workbook.close()


def read_table(content: bytes, filename: str, max_rows: Optional[int] = None) -> list[RawRow]:
    """Parse an uploaded file into rows keyed by the header cells.

    Args:
        content: Raw file bytes
        filename: Client-supplied filename, used only for its extension
        max_rows: Optional bound on data rows (header excluded)

    Returns:
        One mapping per data row, in file order; empty if the file has no rows

    Raises:
        UnsupportedFileType: If the extension is not .xlsx or .csv
        CorruptFile: If the bytes cannot be parsed as the declared type
        FileTooLarge: If there are more than max_rows data rows
    """
    kind = detect_file_kind(filename)
    if kind == XLSX:
        return _read_xlsx(content, max_rows)
    return _read_csv(content, max_rows)
