"""
Session and selection state for Sheet Flattener.

WHAT THIS FILE DOES:
    Holds everything a single user session owns: the current upload batch,
    one "included" flag per (file, sheet), and the last flattened result.
    Derived data is never recomputed implicitly. Callers ask for it with
    Session.process().

STATE STRUCTURE:
    SelectionState
    ├── files:    {file name: UploadedFile}      (upload order)
    └── included: {file name: {sheet name: bool}} (workbook sheet order)

    Session
    ├── selection: SelectionState
    └── rows:      List[FlattenedRow]             (last processed snapshot)

USAGE:
    session = Session()
    session.load_files([UploadedFile(name="a.xlsx", content=data)])
    session.toggle("a.xlsx", "Sheet1")
    if can_process(session.selection):
        rows = session.process()
    xlsx_bytes = session.export_workbook()
"""
import logging
from typing import Dict, Iterable, List, Optional

from sheet_flattener.core.errors import UnknownSheetError, WorkbookDecodeError, WorkbookLoadError
from sheet_flattener.core.models import FlattenedRow, LoadReport, SheetTriple, UploadedFile
from sheet_flattener.engine import export
from sheet_flattener.engine.codec import decode_workbook
from sheet_flattener.engine.flattener import flatten

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Upload batch plus per-sheet inclusion flags.

    Every sheet of every file has exactly one flag, False right after loading.
    Only toggle() and set_included() change flags, one pair at a time.
    """

    def __init__(self, files: Optional[Iterable[UploadedFile]] = None):
        self._files: Dict[str, UploadedFile] = {}
        self._included: Dict[str, Dict[str, bool]] = {}

        for uploaded in files or []:
            # Same name again replaces the earlier entry
            self._files[uploaded.name] = uploaded
            self._included[uploaded.name] = {sheet: False for sheet in uploaded.sheet_names}

    @property
    def files(self) -> List[UploadedFile]:
        return list(self._files.values())

    @property
    def file_names(self) -> List[str]:
        return list(self._files)

    def get_file(self, file_name: str) -> UploadedFile:
        try:
            return self._files[file_name]
        except KeyError:
            raise UnknownSheetError(file_name) from None

    def sheet_names(self, file_name: str) -> List[str]:
        return list(self.get_file(file_name).sheet_names)

    def is_included(self, file_name: str, sheet_name: str) -> bool:
        self._check(file_name, sheet_name)
        return self._included[file_name][sheet_name]

    def toggle(self, file_name: str, sheet_name: str) -> bool:
        """
        Flip the inclusion flag of one sheet.

        Args:
            file_name: File in the current batch
            sheet_name: Sheet of that file

        Returns:
            The new flag value

        Raises:
            UnknownSheetError: If the file or sheet is not in the batch
        """
        self._check(file_name, sheet_name)
        new_value = not self._included[file_name][sheet_name]
        self._included[file_name][sheet_name] = new_value
        logger.debug(f"Toggled {file_name}/{sheet_name} -> {new_value}")
        return new_value

    def set_included(self, file_name: str, sheet_name: str, included: bool) -> None:
        """Set the inclusion flag of one sheet."""
        self._check(file_name, sheet_name)
        self._included[file_name][sheet_name] = bool(included)

    def has_any_included(self) -> bool:
        return any(
            included
            for sheets in self._included.values()
            for included in sheets.values()
        )

    def included_triples(self) -> List[SheetTriple]:
        """Included sheets as (file, sheet, grid), in upload order then workbook sheet order."""
        triples = []
        for file_name, uploaded in self._files.items():
            flags = self._included[file_name]
            for sheet_name in uploaded.sheet_names:
                if flags.get(sheet_name):
                    triples.append((file_name, sheet_name, uploaded.grids.get(sheet_name, [])))
        return triples

    def as_dict(self) -> Dict[str, Dict[str, bool]]:
        """Copy of the flags, {file name: {sheet name: included}}."""
        return {name: dict(flags) for name, flags in self._included.items()}

    def _check(self, file_name: str, sheet_name: str) -> None:
        if file_name not in self._included or sheet_name not in self._included[file_name]:
            raise UnknownSheetError(file_name, sheet_name)


def can_process(selection: SelectionState) -> bool:
    """True when at least one sheet is selected."""
    return selection.has_any_included()


def can_export(rows: List[FlattenedRow]) -> bool:
    """True when there is a flattened result to export."""
    return len(rows) > 0


class Session:
    """
    One user's working session.

    Loading a batch replaces the selection state and discards the flattened
    result. Processing replaces the flattened result in full.
    """

    def __init__(self, max_upload_bytes: Optional[int] = None, export_sheet_title: str = export.EXPORT_SHEET_TITLE):
        """
        Initialise session.

        Args:
            max_upload_bytes: Reject files larger than this (None = no limit)
            export_sheet_title: Sheet title used by export_workbook()
        """
        self.max_upload_bytes = max_upload_bytes
        self.export_sheet_title = export_sheet_title
        self.selection = SelectionState()
        self.rows: List[FlattenedRow] = []

    def load_files(self, files: Iterable[UploadedFile], skip_invalid: bool = False) -> LoadReport:
        """
        Decode an upload batch and make it the current selection state.

        Every file is decoded once here and its grids are cached. All flags
        start as not included.

        Args:
            files: Uploaded files (name and content; sheet data is filled in here)
            skip_invalid: Keep the decodable files instead of failing the batch

        Returns:
            LoadReport listing loaded and rejected file names

        Raises:
            WorkbookLoadError: If any file fails to decode and skip_invalid is False.
                The previous state is kept in that case.
        """
        decoded: List[UploadedFile] = []
        report = LoadReport()

        for uploaded in files:
            try:
                decoded.append(self._decode(uploaded))
            except WorkbookDecodeError as e:
                report.rejected[uploaded.name] = e.reason

        if report.rejected and not skip_invalid:
            logger.error(f"Batch load failed: {', '.join(report.rejected)}")
            raise WorkbookLoadError(report.rejected)

        for name in report.rejected:
            logger.warning(f"Skipped unreadable file: {name}")

        self.selection = SelectionState(decoded)
        self.rows = []
        report.loaded = self.selection.file_names

        logger.info(f"Loaded {len(report.loaded)} file(s), rejected {len(report.rejected)}")
        return report

    def toggle(self, file_name: str, sheet_name: str) -> bool:
        return self.selection.toggle(file_name, sheet_name)

    def can_process(self) -> bool:
        return can_process(self.selection)

    def can_export(self) -> bool:
        return can_export(self.rows)

    def process(self) -> List[FlattenedRow]:
        """Flatten the included sheets and replace the current result."""
        triples = self.selection.included_triples()
        logger.info(f"Processing {len(triples)} included sheet(s)")
        self.rows = flatten(triples)
        return self.rows

    def export_workbook(self) -> Optional[bytes]:
        return export.export_workbook(self.rows, sheet_title=self.export_sheet_title)

    def export_csv(self) -> Optional[str]:
        return export.export_delimited_text(self.rows)

    def _decode(self, uploaded: UploadedFile) -> UploadedFile:
        if self.max_upload_bytes is not None and len(uploaded.content) > self.max_upload_bytes:
            raise WorkbookDecodeError(
                uploaded.name,
                f"File too large ({len(uploaded.content)} bytes, maximum {self.max_upload_bytes})"
            )

        workbook = decode_workbook(uploaded.content, file_name=uploaded.name)
        return UploadedFile(
            name=uploaded.name,
            content=uploaded.content,
            sheet_names=workbook.sheet_names,
            grids=workbook.grids,
        )
