"""
Sub-item / data flattening.

Sheets are laid out as repeating column pairs: an even column holds a
sub-item and the column after it holds that sub-item's data. Row 0 is a
header. Flattening walks every pair of every included sheet and produces one
list of FlattenedRow, with a blank separator row after each sheet that
contributed anything.

Ordering is: input triple order, then column pair ascending, then row
ascending. The caller supplies triples in upload order and workbook sheet
order.
"""
import logging
import math
from typing import Iterable, List

from sheet_flattener.core.models import CellValue, FlattenedRow, Grid, Row, SheetTriple

logger = logging.getLogger(__name__)

HEADER_ROWS = 1


def is_blank(value: CellValue) -> bool:
    """
    True for values that count as empty when deciding whether to skip a pair.

    None, empty strings, zero, False and NaN are all blank.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value


def _cell(row: Row, col_idx: int) -> CellValue:
    """Cell value, or None when the row is too short."""
    if col_idx < len(row):
        return row[col_idx]
    return None


def max_column_count(grid: Grid) -> int:
    """Longest row length in the grid (0 for an empty grid)."""
    return max((len(row) for row in grid), default=0)


def flatten_sheet(file_name: str, sheet_name: str, grid: Grid) -> List[FlattenedRow]:
    """
    Extract sub-item / data pairs from one sheet, without a trailing separator.

    The column count is taken once from the longest row, so a single long row
    widens the scan for every row of the sheet.

    Args:
        file_name: Name of the workbook the sheet belongs to
        sheet_name: Name of the sheet
        grid: Ragged rows of cell values; row 0 is the header

    Returns:
        Extracted rows in column-pair, then row, order
    """
    max_col = max_column_count(grid)
    rows: List[FlattenedRow] = []

    for col_idx in range(0, max_col, 2):
        for row_idx in range(HEADER_ROWS, len(grid)):
            row = grid[row_idx]
            sub_item = _cell(row, col_idx)
            data = _cell(row, col_idx + 1)
            if is_blank(data):
                data = ""

            if is_blank(sub_item) and is_blank(data):
                continue
            # A missing sub-item cell is never emitted, even next to data
            if sub_item is None:
                continue

            rows.append(FlattenedRow(
                sub_item=sub_item,
                data=data,
                file_name=file_name,
                sheet_name=sheet_name,
            ))

    logger.debug(f"{file_name}/{sheet_name}: {len(rows)} row(s) from {len(grid)} grid row(s), {max_col} column(s)")
    return rows


def flatten(triples: Iterable[SheetTriple]) -> List[FlattenedRow]:
    """
    Flatten included sheets into a single ordered list.

    A separator row follows every sheet that produced at least one row,
    including the last one. Sheets with no rows add nothing.

    Args:
        triples: (file name, sheet name, grid) for each included sheet, in order

    Returns:
        Flattened rows; empty when there is nothing to flatten
    """
    result: List[FlattenedRow] = []
    sheet_count = 0

    for file_name, sheet_name, grid in triples:
        sheet_count += 1
        sheet_rows = flatten_sheet(file_name, sheet_name, grid)
        if sheet_rows:
            result.extend(sheet_rows)
            result.append(FlattenedRow.separator())

    logger.info(f"Flattened {sheet_count} sheet(s) into {len(result)} row(s)")
    return result
