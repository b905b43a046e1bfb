#!/usr/bin/env python3
"""
Google Sheets / Docs / Drive collaborators for the task tracker.

Uses a service account (TASK_TRACKER_CREDENTIALS) with Sheets, Docs and Drive
scopes. Row numbers and columns are 1-based here and converted to the API's
0-based grid indexes internally.
"""

from __future__ import annotations

import logging
from pathlib import Path

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from notes_store import Document
from utils import NUM_COLUMNS, a1_notation

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive",
]


def get_credentials(credentials_path: Path) -> Credentials:
    """Load service account credentials."""
    if not credentials_path.exists():
        raise FileNotFoundError(f"Credentials not found at {credentials_path}")
    return Credentials.from_service_account_file(str(credentials_path), scopes=SCOPES)


class GoogleSheet:
    """One tab of a Google spreadsheet."""

    def __init__(self, service, spreadsheet_id: str, sheet_name: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._sheet_id = None

    def _range(self, a1: str) -> str:
        escaped = self.sheet_name.replace("'", "''")
        return f"'{escaped}'!{a1}"

    @property
    def sheet_id(self) -> int:
        if self._sheet_id is None:
            spreadsheet = self.service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets.properties",
            ).execute()
            for sheet in spreadsheet.get("sheets", []):
                props = sheet.get("properties", {})
                if props.get("title") == self.sheet_name:
                    self._sheet_id = props["sheetId"]
                    break
            else:
                raise ValueError(f"Sheet '{self.sheet_name}' not found in spreadsheet {self.spreadsheet_id}")
        return self._sheet_id

    def _batch_update(self, requests: list[dict]) -> dict:
        return self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": requests},
        ).execute()

    def _row_range(self, row: int) -> dict:
        return {
            "sheetId": self.sheet_id,
            "startRowIndex": row - 1,
            "endRowIndex": row,
            "startColumnIndex": 0,
            "endColumnIndex": NUM_COLUMNS,
        }

    def get_values(self, row: int, column: int, num_rows: int, num_columns: int) -> list[list]:
        a1 = f"{a1_notation(row, column)}:{a1_notation(row + num_rows - 1, column + num_columns - 1)}"
        result = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=self._range(a1),
            majorDimension="ROWS",
            valueRenderOption="FORMATTED_VALUE",
        ).execute()
        # The API drops trailing empty rows and cells.
        values = result.get("values", [])
        grid = []
        for r in range(num_rows):
            row_values = list(values[r]) if r < len(values) else []
            row_values.extend([""] * (num_columns - len(row_values)))
            grid.append(row_values[:num_columns])
        return grid

    def get_value(self, row: int, column: int):
        return self.get_values(row, column, 1, 1)[0][0]

    def set_value(self, row: int, column: int, value) -> None:
        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=self._range(a1_notation(row, column)),
            valueInputOption="USER_ENTERED",
            body={"values": [[value]]},
        ).execute()

    def insert_row_before(self, row: int) -> None:
        # inheritFromBefore=False: the new row takes the style of the row it pushes down.
        self._batch_update([{
            "insertDimension": {
                "range": {
                    "sheetId": self.sheet_id,
                    "dimension": "ROWS",
                    "startIndex": row - 1,
                    "endIndex": row,
                },
                "inheritFromBefore": False,
            }
        }])

    def delete_row(self, row: int) -> None:
        self._batch_update([{
            "deleteDimension": {
                "range": {
                    "sheetId": self.sheet_id,
                    "dimension": "ROWS",
                    "startIndex": row - 1,
                    "endIndex": row,
                }
            }
        }])

    def copy_row(self, source_row: int, target_row: int) -> None:
        self._batch_update([{
            "copyPaste": {
                "source": self._row_range(source_row),
                "destination": self._row_range(target_row),
                "pasteType": "PASTE_NORMAL",
                "pasteOrientation": "NORMAL",
            }
        }])


class GoogleDrive:
    """Google Docs for note creation, Drive for filing."""

    def __init__(self, docs_service, drive_service):
        self.docs = docs_service
        self.drive = drive_service
        self._root_id = None

    def create_document(self, title: str):
        doc = self.docs.documents().create(body={"title": title}).execute()
        doc_id = doc["documentId"]
        logger.info(f"Created Google Doc '{title}': {doc_id}")
        return Document(id=doc_id, title=title, url=f"https://docs.google.com/document/d/{doc_id}/edit")

    def root_folder_id(self) -> str:
        if self._root_id is None:
            self._root_id = self.drive.files().get(fileId="root", fields="id").execute()["id"]
        return self._root_id

    def move_file(self, file_id: str, source_folder_id: str, target_folder_id: str) -> dict:
        # Drive applies addParents before removeParents within one update,
        # so the file is never left without a parent.
        return self.drive.files().update(
            fileId=file_id,
            addParents=target_folder_id,
            removeParents=source_folder_id,
            fields="id, parents",
        ).execute()


def connect(spreadsheet_id: str, sheet_name: str, credentials_path: Path) -> tuple[GoogleSheet, GoogleDrive]:
    """Build the sheet and drive collaborators from service account credentials."""
    if not spreadsheet_id:
        raise ValueError("TASK_TRACKER_SPREADSHEET_ID is not set")
    creds = get_credentials(credentials_path)
    sheets = build("sheets", "v4", credentials=creds, cache_discovery=False)
    docs = build("docs", "v1", credentials=creds, cache_discovery=False)
    drive = build("drive", "v3", credentials=creds, cache_discovery=False)
    return GoogleSheet(sheets, spreadsheet_id, sheet_name), GoogleDrive(docs, drive)
