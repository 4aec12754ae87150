"""Shared fixtures: workbooks built in memory with openpyxl."""

import io
import zipfile

import pytest
from openpyxl import Workbook

from sheet_flattener.core.config import get_settings


def build_workbook(sheets):
    """
    Build XLSX bytes from {sheet title: list of rows}.

    Sheets are created in dict order. None leaves a cell blank.
    """
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    wb.close()
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point logs at a temp dir and rebuild settings for every test."""
    monkeypatch.setenv("SHEET_FLATTENER_LOG_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sales_workbook():
    """Two paired-column sheets plus an empty one, in that workbook order."""
    return build_workbook({
        "Fruit": [
            ["Sub-item", "Data", "Sub-item", "Data"],
            ["Apple", 3, "Pear", "ripe"],
            ["Banana", "yellow", None, None],
        ],
        "Veg": [
            ["Sub-item", "Data"],
            ["Carrot", "orange"],
        ],
        "Empty": [],
    })


@pytest.fixture
def notes_workbook():
    return build_workbook({
        "Notes": [
            ["Sub-item", "Data"],
            ["Memo", "call back"],
        ],
    })


def truncate_part(content, part_name, keep=200):
    """Copy of XLSX bytes with one zip member cut short after `keep` bytes."""
    source = zipfile.ZipFile(io.BytesIO(content))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as target:
        for info in source.infolist():
            data = source.read(info.filename)
            if info.filename == part_name:
                data = data[:keep]
            target.writestr(info, data)
    source.close()
    return buffer.getvalue()
