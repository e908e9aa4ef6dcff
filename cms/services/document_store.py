"""
Filesystem-backed document store.

Every document is a regular file in one flat directory; the filesystem is
the only source of truth and the last writer wins.
"""
import logging
from pathlib import Path
from typing import List, Union

from werkzeug.utils import safe_join

from cms.models import Document, DocumentKind

logger = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """Base exception for document store errors."""
    pass


class DocumentNotFound(DocumentStoreError):
    """Raised when the named document does not exist."""

    def __init__(self, name: str):
        super().__init__(f"{name} does not exist.")
        self.name = name


class UnsupportedDocument(DocumentStoreError):
    """Raised when a document's extension has no render strategy."""

    def __init__(self, name: str):
        super().__init__(f"{name} cannot be displayed.")
        self.name = name


def duplicate_name(name: str) -> str:
    """
    Derive the name of a copy by inserting '_copy' before the first dot.

    'notes.md' -> 'notes_copy.md', 'report.v2.md' -> 'report_copy.v2.md',
    'README' -> 'README_copy'.
    """
    if '.' not in name:
        return f"{name}_copy"
    stem, rest = name.split('.', 1)
    return f"{stem}_copy.{rest}"


class DocumentStore:
    """Lists, reads and mutates the files of the document directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self._ensure_directory()

    def _ensure_directory(self):
        """Ensure the document directory exists."""
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """
        Resolve a document name inside the store.

        Raises:
            DocumentNotFound if the name is empty or escapes the directory
        """
        joined = safe_join(str(self.root), name) if name else None
        if joined is None or '/' in name or '\\' in name:
            raise DocumentNotFound(name)
        return Path(joined)

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except DocumentNotFound:
            return False

    def list(self) -> List[Document]:
        """Return every document, sorted by name."""
        documents = []
        for entry in sorted(self.root.iterdir(), key=lambda p: p.name):
            if entry.is_file() and not entry.name.startswith('.'):
                documents.append(Document(name=entry.name, size_bytes=entry.stat().st_size))
        return documents

    def read(self, name: str) -> bytes:
        path = self.path_for(name)
        if not path.is_file():
            raise DocumentNotFound(name)
        return path.read_bytes()

    def read_text(self, name: str) -> str:
        return self.read(name).decode('utf-8')

    def write(self, name: str, content: Union[str, bytes]):
        """Create the document or replace its whole content."""
        if isinstance(content, str):
            content = content.encode('utf-8')
        self.path_for(name).write_bytes(content)

    def rename(self, old: str, new: str):
        """
        Move a document to a new name.

        Raises:
            DocumentNotFound if the source is missing
        """
        source = self.path_for(old)
        if not source.is_file():
            raise DocumentNotFound(old)
        target = self.path_for(new)
        target.write_bytes(source.read_bytes())
        source.unlink()
        logger.info(f"Renamed document {old} -> {new}")

    def duplicate(self, name: str) -> str:
        """
        Copy a document under a derived '_copy' name and return that name.

        An existing copy is never overwritten; '_copy' is repeated until the
        name is free.
        """
        content = self.read(name)
        new_name = duplicate_name(name)
        while self.exists(new_name):
            new_name = duplicate_name(new_name)
        self.write(new_name, content)
        logger.info(f"Duplicated document {name} -> {new_name}")
        return new_name

    def delete(self, name: str):
        path = self.path_for(name)
        if not path.is_file():
            raise DocumentNotFound(name)
        path.unlink()
        logger.info(f"Deleted document {name}")

    @staticmethod
    def classify(name: str) -> DocumentKind:
        return DocumentKind.from_filename(name)
