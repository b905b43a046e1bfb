#!/usr/bin/env python3
"""
Create a companion note document for a task row.

The note is where verbose notes and drafts for the task live. Its URL is
written into the row's "Link" cell, which also guards against creating a
second note for the same task.
"""

from __future__ import annotations

import logging

from utils import (
    LINK_HEADER,
    NAME_COLUMN,
    NOTE_TITLE_PREFIX,
    TASK_NOTES_FOLDER_ID,
    a1_notation,
    cell_text,
    find_header_column,
)

logger = logging.getLogger(__name__)


def create_task_note(sheet, ui, store, row: int, folder_id: str | None = None):
    """Create a note for the task in ``row`` and link it from the sheet.

    Returns the created document, or None when the row has no task name or
    already has something in its link cell (the user is alerted either way).
    """
    task_name = cell_text(sheet.get_value(row, NAME_COLUMN))
    if not task_name:
        logger.warning(f"No task name in row {row}")
        ui.alert(f"No task name found for row {row}")
        return None

    link_col = find_header_column(sheet, LINK_HEADER)
    existing = cell_text(sheet.get_value(row, link_col))
    if existing:
        cell = a1_notation(row, link_col)
        logger.warning(f"Link cell {cell} already populated, not creating a note")
        ui.alert(f"There's already data in {cell}")
        return None

    doc = store.create_document(f"{NOTE_TITLE_PREFIX}{task_name}")
    doc_url = doc.url

    target_folder = folder_id or TASK_NOTES_FOLDER_ID
    store.move_file(doc.id, store.root_folder_id(), target_folder)

    sheet.set_value(row, link_col, doc_url)
    logger.info(f"Created task note for '{task_name}': {doc_url}")
    return doc
