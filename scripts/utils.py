#!/usr/bin/env python3
"""
Shared utilities for the sheet task tracker scripts.

Configuration via environment variables:
- TASK_TRACKER_CHECK_MARK: Glyph that marks a task complete
- TASK_TRACKER_NOTES_FOLDER_ID: Folder that task notes are filed into
- TASK_TRACKER_MENU_TITLE: Title of the custom menu
- TASK_TRACKER_SPREADSHEET_ID: Spreadsheet used by the Google backend
- TASK_TRACKER_SHEET_NAME: Tab within that spreadsheet
- TASK_TRACKER_CREDENTIALS: Service account JSON for the Google backend
- TASK_TRACKER_NOTES_DIR: Root directory of the local note store
- TASK_TRACKER_OBSIDIAN_VAULT: Vault name used in local note links
"""

import os
import tempfile
from pathlib import Path

CHECK_COMPLETE = os.getenv('TASK_TRACKER_CHECK_MARK', '✔️')
TASK_NOTES_FOLDER_ID = os.getenv('TASK_TRACKER_NOTES_FOLDER_ID', '11761DZMMmHJq4vYh-fB5JYGYNI8WPaAz')
MENU_TITLE = os.getenv('TASK_TRACKER_MENU_TITLE', 'Tasks')

SPREADSHEET_ID = os.getenv('TASK_TRACKER_SPREADSHEET_ID', '')
SHEET_NAME = os.getenv('TASK_TRACKER_SHEET_NAME', 'Sheet1')
CREDENTIALS_PATH = Path(os.getenv(
    'TASK_TRACKER_CREDENTIALS',
    Path.home() / ".config" / "task-tracker" / "service_account.json"
)).expanduser()
NOTES_DIR = Path(os.getenv(
    'TASK_TRACKER_NOTES_DIR',
    Path.home() / "Obsidian" / "Task Notes"
)).expanduser()
OBSIDIAN_VAULT = os.getenv('TASK_TRACKER_OBSIDIAN_VAULT', 'Obsidian')

COMPLETED_HEADER = 'Completed'
LINK_HEADER = 'Link'
DONE_MARKER = 'Done'
NOTE_TITLE_PREFIX = '[task note] '

NUM_COLUMNS = 26  # A..Z
HEADER_ROW = 1
NAME_COLUMN = 1
CHECK_COLUMN = 2  # tidy reads the checkmark from column B
DONE_SCAN_ROWS = 100


class HeaderNotFoundError(ValueError):
    """Raised when no header cell in row 1 matches the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Couldn't find header with name: {name}")
        self.name = name


def atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


def column_letter(column: int) -> str:
    """Return the A1 letter(s) for a 1-based column number."""
    if column < 1:
        raise ValueError(f"Column must be >= 1, got {column}")
    letters = ''
    while column:
        column, rem = divmod(column - 1, 26)
        letters = chr(ord('A') + rem) + letters
    return letters


def a1_notation(row: int, column: int) -> str:
    """Return the A1 label for a cell, e.g. (3, 4) -> 'D3'."""
    if row < 1:
        raise ValueError(f"Row must be >= 1, got {row}")
    return f"{column_letter(column)}{row}"


def cell_text(value) -> str:
    """Render a cell value as text; empty cells come back as ''."""
    if value is None:
        return ''
    return str(value)


def header_map(sheet) -> dict[str, int]:
    """Map header text in A1:Z1 to its 1-based column.

    The first occurrence wins when a header repeats.
    """
    headers = sheet.get_values(HEADER_ROW, 1, 1, NUM_COLUMNS)[0]
    mapping: dict[str, int] = {}
    for idx, name in enumerate(headers, 1):
        text = cell_text(name)
        if text and text not in mapping:
            mapping[text] = idx
    return mapping


def find_header_column(sheet, name: str) -> int:
    """Find a column by its header name.

    Args:
        sheet: Any sheet collaborator exposing ``get_values``.
        name: Exact header text to look for.

    Returns:
        int: 1-based column number.

    Raises:
        HeaderNotFoundError: if no cell in A1:Z1 equals ``name``.
    """
    return lookup_header(header_map(sheet), name)


def lookup_header(headers: dict[str, int], name: str) -> int:
    """Resolve ``name`` in a map already built by ``header_map``."""
    column = headers.get(name)
    if column is None:
        raise HeaderNotFoundError(name)
    return column
