"""
Revision history kept in a YAML sidecar file.

The file maps each document name to its prior full-text versions, oldest
first. It is loaded in full and rewritten in full on every change.
"""
import logging
from pathlib import Path
from typing import Dict, List, Union

import yaml

from cms.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class HistoryStore:
    """Snapshots of documents taken before each overwrite."""

    def __init__(self, path: Union[str, Path], documents: DocumentStore):
        self.path = Path(path)
        self.documents = documents

    def _load(self) -> Dict[str, List[str]]:
        if not self.path.is_file():
            return {}
        with open(self.path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed history file {self.path}")
            return {}
        return data

    def _save(self, data: Dict[str, List[str]]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False)

    def record(self, name: str):
        """
        Snapshot the current content of `name`.

        Must run before the document is overwritten. The first call for a
        name only opens an empty history.
        """
        data = self._load()
        if name not in data:
            data[name] = []
        else:
            data[name].append(self.documents.read_text(name))
        self._save(data)
        logger.info(f"Recorded history for {name} ({len(data[name])} versions)")

    def move(self, old: str, new: str):
        """Re-key the history of a renamed document, replacing any entry at `new`."""
        data = self._load()
        if old not in data:
            return
        data[new] = data.pop(old)
        self._save(data)
        logger.info(f"Moved history {old} -> {new}")

    def drop(self, name: str):
        data = self._load()
        if data.pop(name, None) is not None:
            self._save(data)
            logger.info(f"Dropped history for {name}")

    def versions(self, name: str) -> List[str]:
        return list(self._load().get(name) or [])
