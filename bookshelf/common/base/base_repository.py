"""
Base Repository Class.
Generic CRUD with soft delete over one collection of a document store.
"""
import uuid
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from bookshelf.common.base.base_entity import BaseEntity
from bookshelf.common.base.base_mapper import EntityMapper
from bookshelf.common.errors import (
    DuplicateMatchAnomaly,
    EntityNotFound,
    MissingInsertedId,
    PostWriteReadMiss,
    WriteNotAcknowledged,
)
from bookshelf.services.store.document_store import DocumentFilter, DocumentStore
from bookshelf.services.system.logger_service import get_logger, log_entity_operation

logger = get_logger(__name__)

T = TypeVar('T', bound=BaseEntity)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Every mutation re-reads the document after writing and returns the stored
    state rather than the in-memory entity. Zero matches on an id-scoped
    mutation is fatal; more than one match is logged and tolerated.
    """

    ID_FIELD = 'id'
    DELETED_AT_FIELD = 'deletedAt'

    def __init__(self, store: DocumentStore, collection_name: str, mapper: EntityMapper[T]):
        self.store = store
        self.collection_name = collection_name
        self.mapper = mapper

    # ------------------------------------------------------------------
    # Helpers

    def now(self) -> datetime:
        """Return current UTC time."""
        return datetime.now(timezone.utc)

    def generate_id(self) -> str:
        return str(uuid.uuid4())

    def collection_reference(self, id: Optional[str]) -> str:
        if id is not None:
            return f"{self.collection_name}::{id}"
        return f"{self.collection_name}::"

    def _id_filter(self, id: str) -> DocumentFilter:
        return DocumentFilter.eq(self.ID_FIELD, id)

    def _read(self, id: str) -> Optional[T]:
        """Read by id regardless of the soft-delete flag."""
        document = self.store.find_one_by_filter(self.collection_name, self._id_filter(id))
        if document is None:
            return None
        return self.mapper.from_document(document)

    def _log_operation(self, operation: str, id: Optional[str]) -> None:
        log_entity_operation(
            logger, operation, self.collection_reference(id),
            collection=self.collection_name, entity_id=id,
        )

    def _warn_duplicates(self, operation: str, id: str, count: int) -> None:
        logger.warning(
            f"Inconsistency: More than one entity with id {self.collection_reference(id)} was {operation}!",
            extra={
                'anomaly': DuplicateMatchAnomaly.__name__,
                'collection': self.collection_name,
                'entity_id': id,
                'match_count': count,
            },
        )

    # ------------------------------------------------------------------
    # CRUD

    def persist(self, entity: T) -> T:
        generated_id = self.generate_id()
        entity.id = generated_id
        entity.created_at = self.now()

        result = self.store.insert(self.collection_name, self.mapper.to_document(entity))
        if not result.acknowledged:
            raise WriteNotAcknowledged(
                "Cannot insert a new entity",
                collection=self.collection_name, entity_id=generated_id,
            )
        if not result.inserted_id:
            raise MissingInsertedId(
                "Cannot get inserted entity id",
                collection=self.collection_name, entity_id=generated_id,
            )
        self._log_operation('inserted', result.inserted_id)

        inserted = self._read(generated_id)
        if inserted is None:
            raise PostWriteReadMiss(
                f"Entity {self.collection_reference(result.inserted_id)} was inserted but could not be returned",
                collection=self.collection_name, entity_id=generated_id,
            )
        return inserted

    def update(self, entity: T) -> T:
        entity.updated_at = self.now()

        result = self.store.replace(
            self.collection_name, self._id_filter(entity.id), self.mapper.to_document(entity)
        )
        if result.modified_count < 1:
            raise EntityNotFound(
                f"Cannot find entity {self.collection_reference(entity.id)} to update",
                collection=self.collection_name, entity_id=entity.id,
            )
        if result.modified_count > 1:
            self._warn_duplicates('updated', entity.id, result.modified_count)
        self._log_operation('updated', entity.id)

        updated = self._read(entity.id)
        if updated is None:
            raise PostWriteReadMiss(
                f"Entity {self.collection_reference(entity.id)} was updated but could not be returned",
                collection=self.collection_name, entity_id=entity.id,
            )
        return updated

    def delete(self, id: str) -> bool:
        """Hard delete: physically removes the document whatever its soft-delete state."""
        result = self.store.delete_by_filter(self.collection_name, self._id_filter(id))
        if result.deleted_count < 1:
            raise EntityNotFound(
                f"Cannot find entity {self.collection_reference(id)} to delete",
                collection=self.collection_name, entity_id=id,
            )
        if result.deleted_count > 1:
            self._warn_duplicates('deleted', id, result.deleted_count)
        self._log_operation('deleted', id)
        return True

    def logical_delete(self, id: str) -> bool:
        """
        Soft delete: stamps deleted_at and keeps the document.

        Already soft-deleted entities are stamped again. The read and the
        replace are separate round trips, not a transaction.
        """
        found = self._read(id)
        if found is None:
            raise EntityNotFound(
                f"Cannot find entity {self.collection_reference(id)} to logically delete",
                collection=self.collection_name, entity_id=id,
            )
        now = self.now()
        found.updated_at = now
        found.deleted_at = now

        result = self.store.replace(self.collection_name, self._id_filter(id), self.mapper.to_document(found))
        if result.modified_count < 1:
            raise EntityNotFound(
                f"Cannot logically delete {self.collection_reference(id)}",
                collection=self.collection_name, entity_id=id,
            )
        if result.modified_count > 1:
            self._warn_duplicates('logically deleted', id, result.modified_count)
        self._log_operation('logically deleted', id)
        return True

    def find_all(self) -> List[T]:
        documents = self.store.find_by_filter(
            self.collection_name, DocumentFilter.not_exists(self.DELETED_AT_FIELD)
        )
        return [self.mapper.from_document(document) for document in documents]

    def find_one(self, id: str) -> Optional[T]:
        found = self._read(id)
        if found is None or found.is_deleted:
            return None
        return found
