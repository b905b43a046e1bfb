#!/usr/bin/env python3
"""
Sheet task tracker entry points and CLI.

Usage:
    python3 scripts/tracker.py [--local sheet.json] menu
    python3 scripts/tracker.py [--local sheet.json] edit --row 3 --column B --value ✔️
    python3 scripts/tracker.py [--local sheet.json] note --row 3
    python3 scripts/tracker.py [--local sheet.json] tidy

Without --local the Google backend is used (TASK_TRACKER_SPREADSHEET_ID,
TASK_TRACKER_SHEET_NAME, TASK_TRACKER_CREDENTIALS).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from googleapiclient.errors import HttpError

import google_backend
from completion import EditEvent, on_edit
from notes_store import LocalNoteStore
from sheet_grid import LocalSheet
from task_notes import create_task_note
from tidy import tidy_completed
from utils import (
    CREDENTIALS_PATH,
    MENU_TITLE,
    NOTES_DIR,
    NUM_COLUMNS,
    SHEET_NAME,
    SPREADSHEET_ID,
    cell_text,
)

logger = logging.getLogger(__name__)

LOCAL_NOTES_FOLDER = 'Tasks'

MENU_ITEMS = [
    ('🧹 Tidy Completed Tasks', 'tidy_completed'),
    ('✍️ Create Task Doc', 'create_task_note'),
]


class ConsoleUi:
    """UI collaborator for the command line: alerts go to stderr."""

    def __init__(self, stream=None):
        self.stream = stream
        self.alerts: list[str] = []
        self.menus: dict[str, list[tuple[str, str]]] = {}

    def alert(self, message: str) -> None:
        self.alerts.append(message)
        print(message, file=self.stream or sys.stderr)

    def add_menu(self, title: str, items: list[tuple[str, str]]) -> None:
        self.menus[title] = list(items)


@dataclass
class HostContext:
    sheet: object
    ui: object
    store: object
    active_row: int | None = None
    notes_folder_id: str | None = None


def on_open(ui) -> None:
    """Set up the custom menu."""
    ui.add_menu(MENU_TITLE, MENU_ITEMS)


def _tidy_action(ctx: HostContext):
    return tidy_completed(ctx.sheet)


def _note_action(ctx: HostContext):
    if ctx.active_row is None:
        raise ValueError("Create Task Doc needs an active row")
    return create_task_note(ctx.sheet, ctx.ui, ctx.store, ctx.active_row, ctx.notes_folder_id)


MENU_ACTIONS = {
    'tidy_completed': _tidy_action,
    'create_task_note': _note_action,
}


def run_action(name: str, ctx: HostContext):
    """Dispatch a menu action by name."""
    handler = MENU_ACTIONS.get(name)
    if handler is None:
        raise ValueError(f"Unknown menu action: {name}")
    return handler(ctx)


def parse_column(raw: str) -> int:
    """Accept a 1-based column number or letters ('B', 'aa')."""
    raw = raw.strip()
    if raw.isdigit():
        column = int(raw)
    elif raw.isalpha():
        column = 0
        for ch in raw.upper():
            column = column * 26 + (ord(ch) - ord('A') + 1)
    else:
        raise ValueError(f"Invalid column: {raw}")
    if not 1 <= column <= NUM_COLUMNS:
        raise ValueError(f"Column out of range A..Z: {raw}")
    return column


def _open_context(args) -> HostContext:
    ui = ConsoleUi()
    if args.local:
        sheet = LocalSheet.load(Path(args.local))
        store = LocalNoteStore(Path(args.notes_dir))
        folder = args.notes_folder or LOCAL_NOTES_FOLDER
    else:
        sheet, store = google_backend.connect(SPREADSHEET_ID, SHEET_NAME, CREDENTIALS_PATH)
        folder = args.notes_folder
    return HostContext(sheet=sheet, ui=ui, store=store, notes_folder_id=folder)


def _finish(ctx: HostContext) -> None:
    if isinstance(ctx.sheet, LocalSheet):
        ctx.sheet.save()


def _emit(args, payload: dict, text: str) -> None:
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(text)


def cmd_menu(args, ctx: HostContext) -> int:
    on_open(ctx.ui)
    payload = {'command': 'menu', 'menus': {t: [list(i) for i in items] for t, items in ctx.ui.menus.items()}}
    lines = []
    for title, items in ctx.ui.menus.items():
        lines.append(title)
        lines.extend(f"  {label} -> {action}" for label, action in items)
    _emit(args, payload, "\n".join(lines))
    return 0


def cmd_edit(args, ctx: HostContext) -> int:
    column = parse_column(args.column)
    old_value = args.old_value
    if old_value is None:
        old_value = cell_text(ctx.sheet.get_value(args.row, column))
    ctx.sheet.set_value(args.row, column, args.value)
    completed = on_edit(ctx.sheet, EditEvent(args.row, column, args.value, old_value))
    _finish(ctx)
    payload = {'command': 'edit', 'row': args.row, 'column': column, 'completed': completed}
    if completed is None:
        text = "Not the checkmark column; nothing annotated."
    elif completed:
        text = f"Row {args.row} completed on {completed}"
    else:
        text = f"Row {args.row} completion date cleared"
    _emit(args, payload, text)
    return 0


def cmd_note(args, ctx: HostContext) -> int:
    ctx.active_row = args.row
    doc = run_action('create_task_note', ctx)
    if doc is None:
        return 1
    _finish(ctx)
    _emit(args, {'command': 'note', 'row': args.row, 'id': doc.id, 'title': doc.title, 'url': doc.url},
          f"Created: {doc.url}")
    return 0


def cmd_tidy(args, ctx: HostContext) -> int:
    result = run_action('tidy_completed', ctx)
    _finish(ctx)
    if result['moved']:
        text = f"Moved {result['moved']} completed task(s) under Done: " + ", ".join(result['titles'])
    else:
        text = "No completed tasks to tidy."
    _emit(args, {'command': 'tidy', **result}, text)
    return 0


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(description='Sheet Task Tracker')
    parser.add_argument('--local', help='JSON sheet file to use instead of Google Sheets')
    parser.add_argument('--notes-dir', default=str(NOTES_DIR), help='Root of the local note store')
    parser.add_argument('--notes-folder', help='Folder that new task notes are filed into')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')

    subparsers = parser.add_subparsers(dest='command', required=True)

    menu_parser = subparsers.add_parser('menu', help='Show the task menu')
    menu_parser.set_defaults(func=cmd_menu)

    edit_parser = subparsers.add_parser('edit', help='Edit a cell and run the completion watcher')
    edit_parser.add_argument('--row', type=int, required=True)
    edit_parser.add_argument('--column', required=True, help='Column number or letter')
    edit_parser.add_argument('--value', default='', help='New cell value')
    edit_parser.add_argument('--old-value', help='Previous value (default: current cell value)')
    edit_parser.set_defaults(func=cmd_edit)

    note_parser = subparsers.add_parser('note', help='Create a task note for a row')
    note_parser.add_argument('--row', type=int, required=True)
    note_parser.set_defaults(func=cmd_note)

    tidy_parser = subparsers.add_parser('tidy', help='Move completed tasks under Done')
    tidy_parser.set_defaults(func=cmd_tidy)

    args = parser.parse_args()

    try:
        ctx = _open_context(args)
        return args.func(args, ctx)
    except (ValueError, OSError, HttpError) as exc:
        logger.error(str(exc))
        return 1


if __name__ == '__main__':
    raise SystemExit(main())
