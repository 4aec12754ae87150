"""
Sheet Flattener - Data Classes

Plain data shared between the codec, the selection state, the flattening
engine and the export adapters.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Dict, List, Optional, Tuple, Union

# ============================================================================
# Cell / Grid types
# ============================================================================

CellValue = Optional[Union[str, int, float, bool, datetime, date, time]]
Row = List[CellValue]
Grid = List[Row]

# (file name, sheet name, grid) - the unit the flattening engine consumes
SheetTriple = Tuple[str, str, Grid]


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class DecodedWorkbook:
    """Result of decoding workbook bytes: sheet names in workbook order, and one grid per sheet."""
    sheet_names: List[str]
    grids: Dict[str, Grid] = field(default_factory=dict)

    def sheet_grid(self, sheet_name: str) -> Grid:
        """Return the grid for a sheet (KeyError if the sheet does not exist)."""
        return self.grids[sheet_name]


@dataclass
class UploadedFile:
    """
    A workbook file in the current upload batch.

    Attributes:
        name: File name, unique within a batch
        content: Raw bytes as uploaded
        sheet_names: Sheet names in the order the decoder reported them
        grids: Decoded grid per sheet, cached at load time
    """
    name: str
    content: bytes = field(repr=False)
    sheet_names: List[str] = field(default_factory=list)
    grids: Dict[str, Grid] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class FlattenedRow:
    """
    One extracted sub-item / data pair, tagged with the file and sheet it came from.

    A row whose fields are all empty strings is a separator between sheets.
    """
    sub_item: CellValue = ""
    data: CellValue = ""
    file_name: str = ""
    sheet_name: str = ""

    @classmethod
    def separator(cls) -> 'FlattenedRow':
        """Create a blank separator row."""
        return cls("", "", "", "")

    @property
    def is_separator(self) -> bool:
        return (
            self.sub_item == ""
            and self.data == ""
            and self.file_name == ""
            and self.sheet_name == ""
        )


@dataclass
class LoadReport:
    """Outcome of loading an upload batch."""
    loaded: List[str] = field(default_factory=list)
    rejected: Dict[str, str] = field(default_factory=dict)  # file name -> reason

    @property
    def success(self) -> bool:
        return not self.rejected
