"""
Workbook codec built on openpyxl.

Decodes XLSX bytes into sheet names plus ragged grids of cell values, and
encodes plain rows back into XLSX bytes or CSV text.
"""
import csv
import io
import logging
import zipfile
from typing import List, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from sheet_flattener.core.errors import WorkbookDecodeError
from sheet_flattener.core.models import CellValue, DecodedWorkbook, Grid, Row

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIME = "text/csv"

# Errors openpyxl and the zip layer raise for corrupt or non-workbook content.
# SyntaxError covers the XML parse errors of both ElementTree and lxml.
DECODE_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    SyntaxError,
    KeyError,
    ValueError,
    TypeError,
    OSError,
)


# ============================================================================
# Decoding
# ============================================================================

def decode_workbook(content: bytes, file_name: str = "<memory>") -> DecodedWorkbook:
    """
    Decode workbook bytes into sheet names and grids.

    Cached values are read for formula cells (no evaluation). Each grid starts
    at the sheet's used-range origin and trailing empty cells are trimmed from
    every row, so rows may have different lengths.

    Args:
        content: Raw XLSX bytes
        file_name: Name used in error messages and logs

    Returns:
        DecodedWorkbook with sheet names in workbook order

    Raises:
        WorkbookDecodeError: If the content is not a readable workbook
    """
    logger.debug(f"Decoding workbook: {file_name} ({len(content)} bytes)")

    try:
        wb = load_workbook(io.BytesIO(content), data_only=True)
    except DECODE_ERRORS as e:
        logger.warning(f"Failed to decode {file_name}: {e}")
        raise WorkbookDecodeError(file_name, str(e) or type(e).__name__) from e

    try:
        sheet_names = list(wb.sheetnames)
        grids = {}
        for sheet_name in sheet_names:
            sheet = wb[sheet_name]
            if isinstance(sheet, Worksheet):
                grids[sheet_name] = sheet_to_grid(sheet)
            else:
                # Chartsheets hold no cells
                grids[sheet_name] = []
    except DECODE_ERRORS as e:
        logger.warning(f"Failed to read sheets of {file_name}: {e}")
        raise WorkbookDecodeError(file_name, str(e) or type(e).__name__) from e
    finally:
        wb.close()

    logger.info(f"Decoded {file_name}: {len(sheet_names)} sheet(s)")
    return DecodedWorkbook(sheet_names=sheet_names, grids=grids)


def sheet_to_grid(sheet: Worksheet) -> Grid:
    """
    Read a worksheet's used range as a list of rows.

    Returns an empty list when the sheet holds no values at all.
    """
    rows: Grid = []
    has_values = False

    for values in sheet.iter_rows(
        min_row=sheet.min_row,
        max_row=sheet.max_row,
        min_col=sheet.min_column,
        max_col=sheet.max_column,
        values_only=True,
    ):
        row = _trim_row(values)
        if row:
            has_values = True
        rows.append(row)

    if not has_values:
        return []
    return rows


def _trim_row(values: Sequence[CellValue]) -> Row:
    """Drop trailing empty cells."""
    end = len(values)
    while end > 0 and values[end - 1] is None:
        end -= 1
    return list(values[:end])


# ============================================================================
# Encoding
# ============================================================================

def encode_workbook(rows: List[Row], sheet_title: str = "Sheet1") -> bytes:
    """
    Encode rows into a single-sheet XLSX workbook.

    Empty strings are written as blank cells, and a row of blanks still
    counts towards the sheet's rows. Strings are always stored as text,
    never as formulas.

    Args:
        rows: Rows of cell values (first row is usually a header)
        sheet_title: Title of the only sheet

    Returns:
        XLSX file content
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    for row_idx, row in enumerate(rows, start=1):
        for col_idx, value in enumerate(row, start=1):
            if value is None or value == "":
                # Empty cell entry keeps all-blank rows, trailing ones included
                ws.cell(row=row_idx, column=col_idx)
                continue
            if isinstance(value, str):
                cell = ws.cell(row=row_idx, column=col_idx, value=ILLEGAL_CHARACTERS_RE.sub("", value))
                cell.data_type = "s"
            else:
                ws.cell(row=row_idx, column=col_idx, value=value)

    buffer = io.BytesIO()
    wb.save(buffer)
    wb.close()

    data = buffer.getvalue()
    logger.debug(f"Encoded workbook: {len(rows)} row(s), {len(data)} bytes")
    return data


def encode_csv(rows: List[Row]) -> str:
    """
    Encode rows as comma-separated text.

    Args:
        rows: Rows of cell values

    Returns:
        CSV text with '\\n' line endings
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])

    logger.debug(f"Encoded CSV: {len(rows)} row(s)")
    return buffer.getvalue()
