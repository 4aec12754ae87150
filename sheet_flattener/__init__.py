"""
Sheet Flattener - Flatten sub-item / data column pairs from Excel sheets.

Main exports:
- Session: One user's upload batch, sheet selection and flattened result
- SelectionState: Per-sheet inclusion flags for an upload batch
- flatten: Flatten included sheets into a single list of rows
- export_workbook / export_delimited_text: Export flattened rows
"""
__version__ = '1.0.0'

from .core.errors import (
    SheetFlattenerError,
    UnknownSheetError,
    WorkbookDecodeError,
    WorkbookLoadError,
)
from .core.models import FlattenedRow, LoadReport, UploadedFile
from .core.session import SelectionState, Session, can_export, can_process
from .engine.export import export_delimited_text, export_workbook
from .engine.flattener import flatten

__all__ = [
    'Session',
    'SelectionState',
    'UploadedFile',
    'FlattenedRow',
    'LoadReport',
    'can_process',
    'can_export',
    'flatten',
    'export_workbook',
    'export_delimited_text',
    'SheetFlattenerError',
    'WorkbookDecodeError',
    'WorkbookLoadError',
    'UnknownSheetError',
]
