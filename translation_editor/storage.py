"""Local persistence of pending edits, one file per app identifier.

File names reuse the browser storage keys of the web editor
(``<app>.proposedChanges`` and ``<app>.searchQuery``), so a change-set
exported from browser storage can be dropped in as is.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .io_utils import write_json_atomic

logger = logging.getLogger(__name__)


class ChangeSetStore:
    def __init__(self, storage_dir, app_identifier: str):
        if not app_identifier:
            raise ValueError("app_identifier must not be empty")
        self.storage_dir = Path(storage_dir)
        self.app_identifier = app_identifier

    @property
    def changes_path(self) -> Path:
        return self.storage_dir / f"{self.app_identifier}.proposedChanges.json"

    @property
    def search_query_path(self) -> Path:
        return self.storage_dir / f"{self.app_identifier}.searchQuery"

    def load_changes(self) -> Dict[str, Any]:
        """Load the stored change-set; unreadable data is discarded."""
        path = self.changes_path
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        except (OSError, ValueError) as exc:
            logger.error("Failed to parse proposed changes from %s, discarding them: %s", path, exc)
            self.clear_changes()
            return {}
        logger.debug("Loaded %d proposed changes from %s", len(data), path)
        return data

    def save_changes(self, changes: Dict[str, Any]) -> None:
        write_json_atomic(self.changes_path, changes)
        logger.debug("Saved %d proposed changes to %s", len(changes), self.changes_path)

    def clear_changes(self) -> None:
        try:
            os.remove(self.changes_path)
        except FileNotFoundError:
            pass

    def load_search_query(self, default: str = '') -> str:
        try:
            return self.search_query_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return default

    def save_search_query(self, query: Optional[str]) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.search_query_path.write_text(query or '', encoding='utf-8')
