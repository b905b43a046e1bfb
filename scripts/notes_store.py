#!/usr/bin/env python3
"""
Local note store: task notes as markdown files in an Obsidian-style vault.

Folders are subdirectories of the store root, addressed by name. The root
folder itself has the id "root". Notes are created in the root and filed
into a folder afterwards, mirroring how hosted documents land in the
default location first.
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from utils import OBSIDIAN_VAULT, atomic_write

logger = logging.getLogger(__name__)

ROOT_FOLDER_ID = 'root'


@dataclass(frozen=True)
class Document:
    id: str
    title: str
    url: str


def _safe_filename(title: str) -> str:
    cleaned = re.sub(r'[\\/:*?"<>|\r\n]+', ' ', title)
    cleaned = re.sub(r'\s{2,}', ' ', cleaned).strip()
    return cleaned or 'Untitled'


class LocalNoteStore:
    def __init__(self, root: Path, vault: str | None = None):
        self.root = Path(root)
        self.vault = vault or OBSIDIAN_VAULT

    def root_folder_id(self) -> str:
        return ROOT_FOLDER_ID

    def folder_path(self, folder_id: str) -> Path:
        if folder_id == ROOT_FOLDER_ID:
            return self.root
        return self.root / folder_id

    def _note_url(self, file_id: str) -> str:
        enc_vault = quote(self.vault, safe='')
        enc_file = quote(Path(file_id).stem, safe='')
        return f"obsidian://open?vault={enc_vault}&file={enc_file}"

    def _name_taken(self, name: str) -> bool:
        if not self.root.exists():
            return False
        return any(path.name == name for path in self.root.rglob("*.md"))

    def create_document(self, title: str) -> Document:
        """Create a markdown note in the root folder.

        The file name is unique across the whole store so the note can be filed
        into any folder and its vault link stays unambiguous.
        """
        base = _safe_filename(title)
        name = f"{base}.md"
        counter = 2
        while self._name_taken(name):
            name = f"{base} ({counter}).md"
            counter += 1
        atomic_write(self.root / name, f"# {title}\n")
        logger.info(f"Created note: {self.root / name}")
        return Document(id=name, title=title, url=self._note_url(name))

    def move_file(self, file_id: str, source_folder_id: str, target_folder_id: str) -> Path:
        """Add the note to the target folder, then remove it from the source."""
        source = self.folder_path(source_folder_id) / file_id
        target_dir = self.folder_path(target_folder_id)
        target = target_dir / file_id
        if not source.exists():
            raise FileNotFoundError(f"Note not found: {source}")
        if target.exists():
            raise FileExistsError(f"Note already exists: {target}")
        target_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        source.unlink()
        return target
