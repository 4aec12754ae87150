"""
Export adapters for flattened output.

Both exports return None when there is nothing to export.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from sheet_flattener.core.models import FlattenedRow, Row
from sheet_flattener.engine.codec import encode_csv, encode_workbook

logger = logging.getLogger(__name__)

WORKBOOK_EXPORT_NAME = "processed_data.xlsx"
CSV_EXPORT_NAME = "processed_data.csv"
EXPORT_SHEET_TITLE = "ProcessedData"

COLUMNS = ["Sub-item", "Data", "File", "Sheet"]


def rows_to_records(rows: Sequence[FlattenedRow]) -> List[Dict[str, Any]]:
    """Convert flattened rows to dicts keyed by the export column headers."""
    return [
        {
            "Sub-item": row.sub_item,
            "Data": row.data,
            "File": row.file_name,
            "Sheet": row.sheet_name,
        }
        for row in rows
    ]


def _table(rows: Sequence[FlattenedRow]) -> List[Row]:
    table: List[Row] = [list(COLUMNS)]
    for record in rows_to_records(rows):
        table.append([record[column] for column in COLUMNS])
    return table


def export_workbook(rows: Sequence[FlattenedRow], sheet_title: str = EXPORT_SHEET_TITLE) -> Optional[bytes]:
    """
    Export flattened rows as a single-sheet XLSX workbook.

    Args:
        rows: Flattened output
        sheet_title: Title of the exported sheet

    Returns:
        XLSX bytes, or None when rows is empty
    """
    if not rows:
        logger.debug("Workbook export skipped: no rows")
        return None

    data = encode_workbook(_table(rows), sheet_title=sheet_title)
    logger.info(f"Exported {len(rows)} row(s) to workbook ({len(data)} bytes)")
    return data


def export_delimited_text(rows: Sequence[FlattenedRow]) -> Optional[str]:
    """
    Export flattened rows as CSV text.

    Returns:
        CSV text, or None when rows is empty
    """
    if not rows:
        logger.debug("CSV export skipped: no rows")
        return None

    text = encode_csv(_table(rows))
    logger.info(f"Exported {len(rows)} row(s) to CSV")
    return text
