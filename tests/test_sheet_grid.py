"""Tests for the in-memory and file-backed task grid."""

import json
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'scripts'))

from sheet_grid import Cell, LocalSheet, TaskGrid


def test_reads_beyond_data_are_empty():
    """Test reads past the last row come back as empty strings."""
    grid = TaskGrid.from_values([['Name']])
    assert grid.get_values(1, 1, 3, 2) == [['Name', ''], ['', ''], ['', '']]
    assert grid.row_count == 1


def test_set_value_extends_rows():
    grid = TaskGrid()
    grid.set_value(3, 2, 'x')
    assert grid.row_count == 3
    assert grid.get_value(3, 2) == 'x'
    assert grid.get_value(1, 1) == ''


def test_set_value_none_clears():
    grid = TaskGrid.from_values([['a']])
    grid.set_value(1, 1, None)
    assert grid.get_value(1, 1) == ''


def test_column_out_of_range_raises():
    grid = TaskGrid()
    with pytest.raises(ValueError):
        grid.get_value(1, 27)
    with pytest.raises(ValueError):
        grid.set_value(0, 1, 'x')


def test_copy_row_preserves_values_and_formats():
    """Test copying a row keeps every A..Z value and format."""
    values = [[f'v{c}' for c in range(26)], []]
    formats = [[{'bold': c % 2 == 0, 'color': f'#{c:06x}'} for c in range(26)], []]
    grid = TaskGrid.from_values(values, formats)

    grid.copy_row(1, 2)

    for c in range(1, 27):
        assert grid.cell(2, c).value == grid.cell(1, c).value
        assert grid.cell(2, c).format == grid.cell(1, c).format


def test_copy_row_is_independent_of_source():
    grid = TaskGrid.from_values([['a'], []], [[{'bold': True}], []])
    grid.copy_row(1, 2)
    grid.cell(1, 1).format['bold'] = False
    grid.set_value(1, 1, 'changed')
    assert grid.cell(2, 1).format == {'bold': True}
    assert grid.get_value(2, 1) == 'a'


def test_insert_row_before_takes_format_of_row_below():
    """Test an inserted row picks up the styling of the row it pushes down."""
    grid = TaskGrid.from_values(
        [['Done'], ['task']],
        [[{'bold': True}], [{'italic': True}]],
    )
    grid.insert_row_before(2)
    assert grid.row_count == 3
    assert grid.get_value(2, 1) == ''
    assert grid.cell(2, 1).format == {'italic': True}
    assert grid.get_value(3, 1) == 'task'


def test_insert_row_at_end_is_blank():
    grid = TaskGrid.from_values([['a']])
    grid.insert_row_before(2)
    assert grid.row_count == 2
    assert grid.cell(2, 1) == Cell()


def test_insert_row_past_end_raises():
    grid = TaskGrid.from_values([['a']])
    with pytest.raises(ValueError):
        grid.insert_row_before(5)


def test_delete_row_shifts_up():
    grid = TaskGrid.from_values([['a'], ['b'], ['c']])
    grid.delete_row(2)
    assert grid.get_values(1, 1, 2, 1) == [['a'], ['c']]
    with pytest.raises(ValueError):
        grid.delete_row(3)


def test_local_sheet_load_and_save(tmp_path):
    """Test JSON sheet files load and save with formats intact."""
    path = tmp_path / 'tasks.json'
    path.write_text(json.dumps({'rows': [
        ['Name', '✔️', 'Completed', 'Link'],
        [{'value': 'Done', 'format': {'bold': True}}],
        ['Ship it', '✔️'],
    ]}, ensure_ascii=False))

    sheet = LocalSheet.load(path)
    assert sheet.get_value(2, 1) == 'Done'
    assert sheet.cell(2, 1).format == {'bold': True}
    assert sheet.get_value(3, 2) == '✔️'

    sheet.set_value(3, 3, 'Sat Oct 17 2026')
    sheet.save()

    data = json.loads(path.read_text())
    assert data['rows'][1] == [{'value': 'Done', 'format': {'bold': True}}]
    assert data['rows'][2] == ['Ship it', '✔️', 'Sat Oct 17 2026']


def test_local_sheet_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LocalSheet.load(tmp_path / 'missing.json')


def test_local_sheet_rejects_bad_layout(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('[1, 2, 3]')
    with pytest.raises(ValueError, match='rows'):
        LocalSheet.load(path)


def test_rows_wider_than_z_are_rejected():
    with pytest.raises(ValueError, match='A..Z'):
        TaskGrid.from_values([['x'] * 27])


def test_local_sheet_with_extra_columns_is_left_untouched(tmp_path):
    """Loading a row past column Z fails instead of dropping data on save."""
    path = tmp_path / 'wide.json'
    original = json.dumps({'rows': [[f'c{i}' for i in range(27)]]})
    path.write_text(original)
    with pytest.raises(ValueError, match='Row 1 has 27 cells'):
        LocalSheet.load(path)
    assert path.read_text() == original
