"""
Data models for the application.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DocumentKind(Enum):
    """How a document is rendered, chosen once from its extension."""
    TEXT = 'text'
    MARKDOWN = 'markdown'
    IMAGE = 'image'
    UNSUPPORTED = 'unsupported'

    @classmethod
    def from_filename(cls, filename: str) -> 'DocumentKind':
        """Classify a filename by its (case-insensitive) extension."""
        ext = Path(filename).suffix.lower()
        if ext == '.md':
            return cls.MARKDOWN
        if ext == '.txt':
            return cls.TEXT
        if ext in ('.jpg', '.jpeg', '.png'):
            return cls.IMAGE
        return cls.UNSUPPORTED

    @property
    def is_text(self) -> bool:
        return self in (DocumentKind.TEXT, DocumentKind.MARKDOWN)


@dataclass
class Document:
    """A file in the document directory."""
    name: str = ''
    size_bytes: int = 0

    @property
    def kind(self) -> DocumentKind:
        return DocumentKind.from_filename(self.name)
