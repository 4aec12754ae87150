"""Tests for the sub-item / data flattening engine."""

from sheet_flattener.core.models import FlattenedRow
from sheet_flattener.engine.flattener import flatten, flatten_sheet, is_blank, max_column_count

SEP = FlattenedRow.separator()


def _pairs(rows):
    """(sub_item, data) of every row, separators as None."""
    return [None if row.is_separator else (row.sub_item, row.data) for row in rows]


# ---------------------------------------------------------------------------
# Basic scenarios
# ---------------------------------------------------------------------------

def test_single_sheet_scenario():
    grid = [["A", "B"], ["1", "x"], ["", "y"], ["2", ""]]
    rows = flatten([("book.xlsx", "S1", grid)])

    assert rows == [
        FlattenedRow("1", "x", "book.xlsx", "S1"),
        FlattenedRow("", "y", "book.xlsx", "S1"),
        FlattenedRow("2", "", "book.xlsx", "S1"),
        SEP,
    ]


def test_two_sheets_one_row_each_gives_four_rows():
    g1 = [["h", "h"], ["a", "1"]]
    g2 = [["h", "h"], ["b", "2"]]
    rows = flatten([("f.xlsx", "S1", g1), ("f.xlsx", "S2", g2)])

    assert len(rows) == 4
    assert rows[1].is_separator and rows[3].is_separator
    assert rows[0].sheet_name == "S1"
    assert rows[2].sheet_name == "S2"


def test_empty_input_gives_empty_output():
    assert flatten([]) == []


def test_rows_carry_file_and_sheet():
    rows = flatten([("first.xlsx", "Data", [["h", "h"], ["k", "v"]])])
    assert rows[0].file_name == "first.xlsx"
    assert rows[0].sheet_name == "Data"


# ---------------------------------------------------------------------------
# Degenerate grids
# ---------------------------------------------------------------------------

def test_empty_grid_emits_nothing():
    assert flatten([("f", "S", [])]) == []


def test_header_only_grid_emits_nothing():
    assert flatten([("f", "S", [["Sub-item", "Data"]])]) == []


def test_grid_without_columns_emits_nothing():
    assert flatten([("f", "S", [[], [], []])]) == []


def test_all_blank_rows_emit_no_separator():
    grid = [["h", "h"], [None, None], ["", ""], [0, 0]]
    assert flatten([("f", "S", grid)]) == []


def test_empty_sheet_between_sheets_adds_no_separator():
    good = [["h", "h"], ["a", "1"]]
    rows = flatten([("f", "S1", good), ("f", "Blank", []), ("f", "S3", good)])
    assert _pairs(rows) == [("a", "1"), None, ("a", "1"), None]


# ---------------------------------------------------------------------------
# Skip and emit rules
# ---------------------------------------------------------------------------

def test_blank_pair_skipped_while_other_pair_in_same_row_kept():
    grid = [["h1", "h2", "h3", "h4"], ["", None, "k", "v"]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [("k", "v")]


def test_missing_sub_item_cell_is_not_emitted_even_with_data():
    grid = [["h1", "h2", "h3", "h4"], ["a", "1", None, "orphan"]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [("a", "1")]


def test_falsy_but_present_sub_item_is_emitted():
    grid = [["h", "h"], [0, "zero"], [False, "no"]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [(0, "zero"), (False, "no")]


def test_falsy_data_becomes_empty_string():
    grid = [["h", "h"], ["count", 0], ["flag", False], ["missing", None]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [("count", ""), ("flag", ""), ("missing", "")]


def test_zero_sub_item_with_zero_data_is_skipped():
    grid = [["h", "h"], [0, 0]]
    assert flatten_sheet("f", "S", grid) == []


def test_nan_counts_as_blank():
    nan = float("nan")
    assert is_blank(nan)
    grid = [["h", "h"], [nan, nan], ["a", nan]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [("a", "")]


def test_is_blank_values():
    for value in (None, "", 0, 0.0, False):
        assert is_blank(value)
    for value in ("0", " ", 1, -1, 0.5, True, "x"):
        assert not is_blank(value)


# ---------------------------------------------------------------------------
# Ragged rows and column count
# ---------------------------------------------------------------------------

def test_ragged_rows_are_padded_with_absent_cells():
    grid = [["h1", "h2", "h3", "h4"], ["a"], ["b", "2", "c"]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [("a", ""), ("b", "2"), ("c", "")]


def test_max_column_count_uses_longest_row():
    assert max_column_count([]) == 0
    assert max_column_count([[1], [1, 2, 3], []]) == 3


def test_one_long_row_widens_scan_for_all_rows():
    grid = [["h"], ["a", "1"], ["b", "2", "c", "3", "d", "4"], ["e", "5", "f"]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [
        ("a", "1"), ("b", "2"), ("e", "5"),
        ("c", "3"), ("f", ""),
        ("d", "4"),
    ]


def test_odd_column_count_scans_final_half_pair():
    grid = [["h", "h", "h"], ["a", "1", "tail"]]
    assert _pairs(flatten_sheet("f", "S", grid)) == [("a", "1"), ("tail", "")]


# ---------------------------------------------------------------------------
# Ordering and purity
# ---------------------------------------------------------------------------

def test_order_is_pair_then_row():
    grid = [
        ["A", "B", "C", "D"],
        ["a1", "b1", "c1", "d1"],
        ["a2", "b2", "c2", "d2"],
    ]
    assert [row.sub_item for row in flatten_sheet("f", "S", grid)] == ["a1", "a2", "c1", "c2"]


def test_order_follows_triples_across_files():
    g = [["h", "h"], ["x", "1"]]
    rows = flatten([("b.xlsx", "S2", g), ("b.xlsx", "S1", g), ("a.xlsx", "S1", g)])
    origins = [(row.file_name, row.sheet_name) for row in rows if not row.is_separator]
    assert origins == [("b.xlsx", "S2"), ("b.xlsx", "S1"), ("a.xlsx", "S1")]


def test_no_extra_separator_between_files():
    g = [["h", "h"], ["x", "1"]]
    rows = flatten([("a.xlsx", "S", g), ("b.xlsx", "S", g)])
    assert [row.is_separator for row in rows] == [False, True, False, True]


def test_flatten_sheet_has_no_separator():
    rows = flatten_sheet("f", "S", [["h", "h"], ["x", "1"]])
    assert not any(row.is_separator for row in rows)


def test_flatten_is_repeatable_and_does_not_mutate_input():
    grid = [["h", "h", "h", "h"], ["a", "1", "", "z"], ["b"], []]
    snapshot = [list(row) for row in grid]
    triples = [("f", "S1", grid), ("f", "S2", grid)]

    first = flatten(triples)
    second = flatten(triples)

    assert first == second
    assert grid == snapshot


def test_separator_row_shape():
    assert SEP == FlattenedRow("", "", "", "")
    assert SEP.is_separator
    assert not FlattenedRow("", "y", "f", "S").is_separator
    assert not FlattenedRow(0, "", "", "").is_separator
