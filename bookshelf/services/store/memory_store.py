"""In-process document store, used for local development and tests."""
from __future__ import annotations

import copy
import threading
from typing import Dict, List

from bookshelf.services.store.document_store import (
    OP_EQUALS,
    Document,
    DocumentFilter,
    DocumentStore,
    DeleteResult,
    InsertResult,
    ReplaceResult,
)
from bookshelf.services.system.logger_service import get_logger

logger = get_logger(__name__)

ID_FIELD = 'id'


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store keyed by collection then document id.

    Documents are deep-copied on the way in and on the way out.
    """

    def __init__(self, database_name: str = 'default'):
        self.database_name = database_name
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._lock = threading.Lock()

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    def insert(self, collection: str, document: Document) -> InsertResult:
        doc_id = document.get(ID_FIELD)
        if doc_id is None:
            return InsertResult(acknowledged=False)
        with self._lock:
            docs = self._collection(collection)
            if doc_id in docs:
                logger.warning(
                    "Insert rejected, id already present",
                    extra={'database': self.database_name, 'collection': collection, 'entity_id': doc_id},
                )
                return InsertResult(acknowledged=False)
            docs[doc_id] = copy.deepcopy(document)
        return InsertResult(acknowledged=True, inserted_id=doc_id)

    def replace(self, collection: str, filter: DocumentFilter, document: Document) -> ReplaceResult:
        with self._lock:
            docs = self._collection(collection)
            matched = [doc_id for doc_id, doc in docs.items() if filter.matches(doc)]
            for doc_id in matched:
                replacement = copy.deepcopy(document)
                replacement[ID_FIELD] = doc_id
                docs[doc_id] = replacement
        # Every matched document is rewritten, identical content included
        return ReplaceResult(matched_count=len(matched), modified_count=len(matched))

    def delete_by_filter(self, collection: str, filter: DocumentFilter) -> DeleteResult:
        with self._lock:
            docs = self._collection(collection)
            matched = [doc_id for doc_id, doc in docs.items() if filter.matches(doc)]
            for doc_id in matched:
                del docs[doc_id]
        return DeleteResult(deleted_count=len(matched))

    def find_by_filter(self, collection: str, filter: DocumentFilter) -> List[Document]:
        with self._lock:
            docs = self._collection(collection)
            if filter.field == ID_FIELD and filter.op == OP_EQUALS:
                found = docs.get(filter.value)
                return [copy.deepcopy(found)] if found is not None else []
            return [copy.deepcopy(doc) for doc in docs.values() if filter.matches(doc)]

    def count(self, collection: str) -> int:
        """Number of physically stored documents, soft-deleted ones included."""
        with self._lock:
            return len(self._collection(collection))

    def clear(self) -> None:
        with self._lock:
            self._collections.clear()
