"""
Exception hierarchy for Sheet Flattener.
"""
from typing import Dict, Optional


class SheetFlattenerError(Exception):
    """Base class for all Sheet Flattener errors."""
    pass


class WorkbookDecodeError(SheetFlattenerError):
    """Raised when an uploaded file cannot be decoded as a workbook."""

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Could not read workbook '{file_name}': {reason}")


class WorkbookLoadError(SheetFlattenerError):
    """Raised when a strict batch load fails. Carries every failing file."""

    def __init__(self, failures: Dict[str, str]):
        self.failures = dict(failures)
        names = ", ".join(self.failures)
        super().__init__(f"Failed to load {len(self.failures)} file(s): {names}")


class UnknownSheetError(SheetFlattenerError, KeyError):
    """Raised when a (file, sheet) pair is not part of the current selection."""

    def __init__(self, file_name: str, sheet_name: Optional[str] = None):
        self.file_name = file_name
        self.sheet_name = sheet_name
        if sheet_name is None:
            message = f"Unknown file '{file_name}'"
        else:
            message = f"Unknown sheet '{sheet_name}' in file '{file_name}'"
        super().__init__(message)

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]
