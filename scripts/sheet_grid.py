#!/usr/bin/env python3
"""
In-memory task grid and its JSON-file-backed variant.

The grid is rows x 26 columns (A..Z), addressed 1-based like the hosted
spreadsheet. Each cell carries a value and an opaque format mapping so that
row copies can keep styling alongside values.

Local sheet file layout:
    {"rows": [["Name", "✔️", {"value": "Done", "format": {"bold": true}}], ...]}
A cell is either a bare value or an object with "value" and "format".
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path

from utils import NUM_COLUMNS, atomic_write


@dataclass
class Cell:
    value: object = ''
    format: dict = field(default_factory=dict)

    def to_json(self):
        if self.format:
            return {'value': self.value, 'format': self.format}
        return self.value

    @classmethod
    def from_json(cls, raw) -> 'Cell':
        if isinstance(raw, dict):
            return cls(value=_normalize(raw.get('value')), format=dict(raw.get('format') or {}))
        return cls(value=_normalize(raw))


def _normalize(value):
    return '' if value is None else value


def _blank_row(formats: list[dict] | None = None) -> list[Cell]:
    if formats is None:
        return [Cell() for _ in range(NUM_COLUMNS)]
    return [Cell(format=copy.deepcopy(fmt)) for fmt in formats]


class TaskGrid:
    """Mutable rows x A..Z grid with the operations the tracker needs."""

    def __init__(self, rows: list[list[Cell]] | None = None):
        self.rows: list[list[Cell]] = []
        for r, row in enumerate(rows or [], 1):
            cells = list(row)
            if len(cells) > NUM_COLUMNS:
                raise ValueError(f"Row {r} has {len(cells)} cells; only columns A..Z are supported")
            cells.extend(Cell() for _ in range(NUM_COLUMNS - len(cells)))
            self.rows.append(cells)

    @classmethod
    def from_values(cls, values: list[list], formats: list[list[dict]] | None = None) -> 'TaskGrid':
        rows = []
        for r, row_values in enumerate(values):
            row_formats = formats[r] if formats and r < len(formats) else []
            cells = []
            for c, value in enumerate(row_values):
                fmt = row_formats[c] if c < len(row_formats) else {}
                cells.append(Cell(value=_normalize(value), format=dict(fmt or {})))
            rows.append(cells)
        return cls(rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def _check(self, row: int, column: int = 1) -> None:
        if row < 1:
            raise ValueError(f"Row must be >= 1, got {row}")
        if not 1 <= column <= NUM_COLUMNS:
            raise ValueError(f"Column must be between 1 and {NUM_COLUMNS}, got {column}")

    def _cell(self, row: int, column: int) -> Cell:
        self._check(row, column)
        while len(self.rows) < row:
            self.rows.append(_blank_row())
        return self.rows[row - 1][column - 1]

    def cell(self, row: int, column: int) -> Cell:
        """Return the cell object (value + format) at ``row``/``column``."""
        return self._cell(row, column)

    def get_values(self, row: int, column: int, num_rows: int, num_columns: int) -> list[list]:
        self._check(row, column)
        self._check(row + num_rows - 1, column + num_columns - 1)
        grid = []
        for r in range(row, row + num_rows):
            if r > len(self.rows):
                grid.append([''] * num_columns)
                continue
            cells = self.rows[r - 1]
            grid.append([cells[c - 1].value for c in range(column, column + num_columns)])
        return grid

    def get_value(self, row: int, column: int):
        return self.get_values(row, column, 1, 1)[0][0]

    def set_value(self, row: int, column: int, value) -> None:
        self._cell(row, column).value = _normalize(value)

    def insert_row_before(self, row: int) -> None:
        """Insert a blank row at ``row``; it takes the formatting of the row it pushes down."""
        self._check(row)
        if row > len(self.rows) + 1:
            raise ValueError(f"Cannot insert before row {row}: sheet has {len(self.rows)} rows")
        below = self.rows[row - 1] if row <= len(self.rows) else None
        formats = [cell.format for cell in below] if below else None
        self.rows.insert(row - 1, _blank_row(formats))

    def delete_row(self, row: int) -> None:
        self._check(row)
        if row > len(self.rows):
            raise ValueError(f"Cannot delete row {row}: sheet has {len(self.rows)} rows")
        del self.rows[row - 1]

    def copy_row(self, source_row: int, target_row: int) -> None:
        """Copy A..Z values and formatting from ``source_row`` into ``target_row``."""
        self._check(source_row)
        self._check(target_row)
        source = [self._cell(source_row, c) for c in range(1, NUM_COLUMNS + 1)]
        snapshot = [Cell(value=copy.deepcopy(cell.value), format=copy.deepcopy(cell.format)) for cell in source]
        self._cell(target_row, 1)
        self.rows[target_row - 1] = snapshot

    def to_json(self) -> dict:
        rows = []
        for cells in self.rows:
            encoded = [cell.to_json() for cell in cells]
            while encoded and encoded[-1] == '':
                encoded.pop()
            rows.append(encoded)
        return {'rows': rows}


class LocalSheet(TaskGrid):
    """Task grid persisted to a JSON file."""

    def __init__(self, path: Path, rows: list[list[Cell]] | None = None):
        super().__init__(rows)
        self.path = Path(path)

    @classmethod
    def load(cls, path: Path) -> 'LocalSheet':
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Sheet file not found: {path}")
        data = json.loads(path.read_text(encoding='utf-8'))
        if not isinstance(data, dict) or not isinstance(data.get('rows'), list):
            raise ValueError(f"Sheet file {path} must contain an object with a 'rows' list")
        rows = [[Cell.from_json(raw) for raw in row] for row in data['rows']]
        return cls(path, rows)

    def save(self) -> None:
        atomic_write(self.path, json.dumps(self.to_json(), ensure_ascii=False, indent=2) + "\n")
