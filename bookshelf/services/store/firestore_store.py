"""
Firestore-backed document store.

Document ids double as Firestore document names, so id-equality filters
resolve to direct document references instead of queries.
"""
from __future__ import annotations

from typing import Any, Iterable, List

from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore_v1 import FieldFilter

from bookshelf.services.store.document_store import (
    OP_EQUALS,
    OP_NOT_EXISTS,
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


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, client: Any):
        """
        Args:
            client: Firestore client, owned by the caller (see firebase_client.get_firestore_client)
        """
        self.client = client

    def _collection(self, name: str):
        return self.client.collection(name)

    def _is_id_filter(self, filter: DocumentFilter) -> bool:
        return filter.field == ID_FIELD and filter.op == OP_EQUALS

    def _snapshots(self, collection: str, filter: DocumentFilter) -> Iterable[Any]:
        """Yield existing snapshots matching the filter."""
        coll = self._collection(collection)
        if self._is_id_filter(filter):
            # A '/' would turn the id into a subcollection path
            if not isinstance(filter.value, str) or not filter.value or '/' in filter.value:
                return []
            snapshot = coll.document(filter.value).get()
            return [snapshot] if snapshot.exists else []
        if filter.op == OP_EQUALS:
            return coll.where(filter=FieldFilter(filter.field, '==', filter.value)).stream()
        if filter.op == OP_NOT_EXISTS:
            # Firestore cannot query for a missing field; filter client side
            return (snap for snap in coll.stream() if filter.matches(snap.to_dict() or {}))
        raise ValueError(f"Unsupported filter operator: {filter.op}")

    @staticmethod
    def _to_document(snapshot: Any) -> Document:
        data = snapshot.to_dict() or {}
        data[ID_FIELD] = snapshot.id
        return data

    def insert(self, collection: str, document: Document) -> InsertResult:
        doc_id = document.get(ID_FIELD)
        if not doc_id:
            return InsertResult(acknowledged=False)
        try:
            write_result = self._collection(collection).document(doc_id).create(dict(document))
        except AlreadyExists:
            logger.warning(
                "Insert rejected, id already present",
                extra={'collection': collection, 'entity_id': doc_id},
            )
            return InsertResult(acknowledged=False)
        acknowledged = getattr(write_result, 'update_time', None) is not None
        return InsertResult(acknowledged=acknowledged, inserted_id=doc_id if acknowledged else None)

    def replace(self, collection: str, filter: DocumentFilter, document: Document) -> ReplaceResult:
        matched = 0
        for snapshot in list(self._snapshots(collection, filter)):
            replacement = dict(document)
            replacement[ID_FIELD] = snapshot.id
            snapshot.reference.set(replacement)
            matched += 1
        return ReplaceResult(matched_count=matched, modified_count=matched)

    def delete_by_filter(self, collection: str, filter: DocumentFilter) -> DeleteResult:
        deleted = 0
        for snapshot in list(self._snapshots(collection, filter)):
            snapshot.reference.delete()
            deleted += 1
        return DeleteResult(deleted_count=deleted)

    def find_by_filter(self, collection: str, filter: DocumentFilter) -> List[Document]:
        return [self._to_document(snapshot) for snapshot in self._snapshots(collection, filter)]
