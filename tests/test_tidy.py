"""Tests for tidying completed tasks under the Done marker."""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'scripts'))

from sheet_grid import TaskGrid
from tidy import DoneRowNotFoundError, find_done_row, tidy_completed

HEADERS = ['Name', '✔️', 'Completed', 'Link']


class CountingGrid(TaskGrid):
    def __init__(self, rows=None):
        super().__init__(rows)
        self.inserts = 0
        self.deletes = 0

    def insert_row_before(self, row):
        self.inserts += 1
        super().insert_row_before(row)

    def delete_row(self, row):
        self.deletes += 1
        super().delete_row(row)


def names(sheet):
    return [row[0] for row in sheet.get_values(1, 1, sheet.row_count, 1)]


def test_find_done_row():
    """Test the Done marker row is located."""
    grid = TaskGrid.from_values([HEADERS, ['A'], ['Done'], ['Old']])
    assert find_done_row(grid) == 3


def test_find_done_row_requires_exact_match():
    grid = TaskGrid.from_values([HEADERS, ['done'], ['Done '], ['Done']])
    assert find_done_row(grid) == 4


def test_find_done_row_only_scans_first_hundred_rows():
    values = [HEADERS] + [[f'T{i}'] for i in range(100)] + [['Done']]
    with pytest.raises(DoneRowNotFoundError):
        find_done_row(TaskGrid.from_values(values))


def test_missing_done_row_raises_before_mutating():
    """Test tidy without a Done row fails before touching the sheet."""
    grid = CountingGrid(TaskGrid.from_values([HEADERS, ['A', '✔️']]).rows)
    with pytest.raises(DoneRowNotFoundError):
        tidy_completed(grid)
    assert grid.inserts == 0
    assert grid.deletes == 0


def test_moves_checked_row_below_done():
    """Test a checked task moves to just below Done."""
    grid = TaskGrid.from_values([HEADERS, ['A', ''], ['B', '✔️'], ['Done'], ['Old', '✔️']])
    result = tidy_completed(grid)

    assert names(grid) == ['Name', 'A', 'Done', 'B', 'Old']
    assert grid.row_count == 5
    assert result == {'moved': 1, 'done_row': 3, 'titles': ['B']}


def test_moved_rows_keep_relative_order():
    """Test several tidied rows keep their original order under Done."""
    grid = TaskGrid.from_values([
        HEADERS,
        ['B1', '✔️'],
        ['A', ''],
        ['B2', '✔️'],
        ['B3', '✔️'],
        ['Done'],
        ['Old', '✔️'],
    ])
    result = tidy_completed(grid)

    assert names(grid) == ['Name', 'A', 'Done', 'B1', 'B2', 'B3', 'Old']
    assert result['moved'] == 3
    assert result['done_row'] == 3
    assert result['titles'] == ['B1', 'B2', 'B3']


def test_moved_row_keeps_all_cells_and_formats():
    values = [HEADERS, ['Ship it', '✔️', 'Sat Oct 17 2026', 'https://docs.example/1'] + ['x'] * 22, ['Done']]
    formats = [[], [{'color': 'green'}] * 26, [{'bold': True}]]
    grid = TaskGrid.from_values(values, formats)
    original = [(grid.cell(2, c).value, grid.cell(2, c).format) for c in range(1, 27)]

    tidy_completed(grid)

    assert names(grid) == ['Name', 'Done', 'Ship it']
    assert [(grid.cell(3, c).value, grid.cell(3, c).format) for c in range(1, 27)] == original
    assert grid.cell(2, 1).format == {'bold': True}


def test_header_row_is_never_moved():
    grid = TaskGrid.from_values([['Name', '✔️'], ['Done']])
    assert tidy_completed(grid)['moved'] == 0
    assert names(grid) == ['Name', 'Done']


def test_no_checked_rows_is_noop_and_idempotent():
    """Test tidy with nothing checked makes no row changes."""
    rows = [HEADERS] + [[f'Task {i}', ''] for i in range(98)] + [['Done']]
    grid = CountingGrid(TaskGrid.from_values(rows).rows)
    before = names(grid)

    for _ in range(2):
        result = tidy_completed(grid)
        assert result['moved'] == 0
        assert result['done_row'] == 100

    assert grid.inserts == 0
    assert grid.deletes == 0
    assert names(grid) == before


def test_second_tidy_after_move_is_noop():
    grid = CountingGrid(TaskGrid.from_values([HEADERS, ['B', '✔️'], ['Done']]).rows)
    tidy_completed(grid)
    assert (grid.inserts, grid.deletes) == (1, 1)
    assert tidy_completed(grid)['moved'] == 0
    assert (grid.inserts, grid.deletes) == (1, 1)


def test_done_rows_below_marker_are_not_rescanned():
    grid = TaskGrid.from_values([HEADERS, ['Done'], ['Old 1', '✔️'], ['Old 2', '✔️']])
    assert tidy_completed(grid)['moved'] == 0
    assert names(grid) == ['Name', 'Done', 'Old 1', 'Old 2']
