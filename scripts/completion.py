#!/usr/bin/env python3
"""
Edit watcher: annotate tasks with a completed-on date.

When the checkmark cell of a row goes from empty to the check glyph, today's
date is written into the row's "Completed" cell. Any other change to the
checkmark cell clears that annotation. Edits elsewhere are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from utils import CHECK_COMPLETE, COMPLETED_HEADER, cell_text, header_map, lookup_header


@dataclass(frozen=True)
class EditEvent:
    row: int
    column: int
    value: object = ''
    old_value: object = ''


def format_completed_date(day: date) -> str:
    """Format like 'Sat Oct 17 2026'."""
    return day.strftime('%a %b %d %Y')


def on_edit(sheet, event: EditEvent, today: date | None = None) -> str | None:
    """Write or clear the completion date for the edited row.

    Returns the value written into the Completed cell, or None when the edit
    was not on the checkmark column.
    """
    headers = header_map(sheet)
    check_col = lookup_header(headers, CHECK_COMPLETE)
    if event.column != check_col:
        return None

    completed_col = lookup_header(headers, COMPLETED_HEADER)

    new_val = cell_text(event.value)
    old_val = cell_text(event.old_value)
    was_checked_complete = old_val == '' and new_val == CHECK_COMPLETE

    completed_val = ''
    if was_checked_complete:
        completed_val = format_completed_date(today or date.today())

    sheet.set_value(event.row, completed_col, completed_val)
    return completed_val
