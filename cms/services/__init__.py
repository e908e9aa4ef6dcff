"""
Storage services.

Stores are cheap to build and hold no state between requests, so each
request builds its own from the application config.

Usage:
    from cms.services import get_document_store

    documents = get_document_store()
    content = documents.read('about.md')
"""
from pathlib import Path

from flask import current_app

from cms.services.document_store import (
    DocumentStore, DocumentStoreError, DocumentNotFound, UnsupportedDocument
)
from cms.services.history_store import HistoryStore
from cms.services.credential_store import CredentialStore


def init_storage(app):
    """Create the document directory and the parents of the sidecar files."""
    Path(app.config['DATA_DIR']).mkdir(parents=True, exist_ok=True)
    Path(app.config['USERS_FILE']).parent.mkdir(parents=True, exist_ok=True)
    Path(app.config['HISTORY_FILE']).parent.mkdir(parents=True, exist_ok=True)


def get_document_store() -> DocumentStore:
    return DocumentStore(current_app.config['DATA_DIR'])


def get_history_store(documents: DocumentStore = None) -> HistoryStore:
    return HistoryStore(current_app.config['HISTORY_FILE'], documents or get_document_store())


def get_credential_store() -> CredentialStore:
    return CredentialStore(current_app.config['USERS_FILE'])


__all__ = [
    'DocumentStore', 'DocumentStoreError', 'DocumentNotFound', 'UnsupportedDocument',
    'HistoryStore', 'CredentialStore',
    'init_storage', 'get_document_store', 'get_history_store', 'get_credential_store'
]
