"""
Document store backend selection.

The backend is chosen by name from configuration, so callers never depend on a
concrete store class.
"""
from typing import Optional

from bookshelf.common.errors import ConfigurationError
from bookshelf.services.store.document_store import DocumentStore
from bookshelf.services.system.logger_service import get_logger

logger = get_logger(__name__)

BACKEND_FIRESTORE = 'firestore'
BACKEND_MEMORY = 'memory'

SUPPORTED_BACKENDS = (BACKEND_FIRESTORE, BACKEND_MEMORY)


def create_document_store(backend: str, database_name: Optional[str] = None) -> DocumentStore:
    """
    Build the document store named by `backend`.

    Args:
        backend: 'firestore' or 'memory'
        database_name: Firestore database id, or the label of the in-memory store

    Raises:
        ConfigurationError: unknown backend name
    """
    name = (backend or '').strip().lower()

    if name == BACKEND_FIRESTORE:
        # Imported lazily so the memory backend works without Firebase credentials
        from bookshelf.services.firebase.firebase_client import get_firestore_client
        from bookshelf.services.store.firestore_store import FirestoreDocumentStore

        logger.info("Using Firestore document store", extra={'database': database_name})
        return FirestoreDocumentStore(get_firestore_client(database_name))

    if name == BACKEND_MEMORY:
        from bookshelf.services.store.memory_store import InMemoryDocumentStore

        logger.info("Using in-memory document store", extra={'database': database_name})
        return InMemoryDocumentStore(database_name or 'default')

    raise ConfigurationError(
        f"Unknown document store backend '{backend}', expected one of {', '.join(SUPPORTED_BACKENDS)}"
    )
