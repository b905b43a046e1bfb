#!/usr/bin/env python3
"""
Tidy completed tasks down under the "Done" section.

Rows above the "Done" marker row whose checkmark column (B) holds the check
glyph are moved to just below the marker. Moved rows keep their original
relative order and their formatting.
"""

from __future__ import annotations

import logging

from utils import (
    CHECK_COLUMN,
    CHECK_COMPLETE,
    DONE_MARKER,
    DONE_SCAN_ROWS,
    HEADER_ROW,
    NAME_COLUMN,
    cell_text,
)

logger = logging.getLogger(__name__)


class DoneRowNotFoundError(ValueError):
    """Raised when no row in the scan window is the "Done" marker."""


def find_done_row(sheet) -> int:
    """Return the 1-based row whose name cell is exactly "Done"."""
    names = sheet.get_values(1, NAME_COLUMN, DONE_SCAN_ROWS, 1)
    for idx, (name,) in enumerate(names, 1):
        if name == DONE_MARKER:
            return idx
    raise DoneRowNotFoundError(
        f"No '{DONE_MARKER}' row found in the first {DONE_SCAN_ROWS} rows of column A"
    )


def tidy_completed(sheet) -> dict:
    """Move checked tasks above the Done marker to just below it.

    Rows are visited in ascending order over a snapshot of A..B. Each
    deletion above the marker shifts it up by one, so the marker position
    is tracked explicitly rather than re-read.
    """
    done_row = find_done_row(sheet)
    snapshot = sheet.get_values(1, NAME_COLUMN, done_row, CHECK_COLUMN)

    moved = 0
    titles = []
    # The marker row itself is never moved.
    for row_num, (name, check) in enumerate(snapshot[:-1], 1):
        if row_num == HEADER_ROW:
            continue
        if cell_text(check) != CHECK_COMPLETE:
            continue

        # Every earlier move removed one row above this one.
        source_row = row_num - moved

        # Insert before the row under the marker so the new row picks up
        # task-row styling rather than the marker's.
        target_row = done_row + 1 + moved
        sheet.insert_row_before(target_row)
        sheet.copy_row(source_row, target_row)
        sheet.delete_row(source_row)

        done_row -= 1
        moved += 1
        titles.append(cell_text(name))
        logger.debug(f"Moved '{name}' from row {row_num} to below {DONE_MARKER}")

    if moved:
        logger.info(f"Tidied {moved} completed task(s) under '{DONE_MARKER}'")
    return {'moved': moved, 'done_row': done_row, 'titles': titles}
