"""
Document store capability contract.

Collection-scoped insert / find / replace / delete-by-filter operations that
report acknowledgment and modification counts. Repositories depend on this
interface only, so any backend (Firestore, in-memory) can be swapped in by the
wiring layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]

OP_EQUALS = '=='
OP_NOT_EXISTS = 'not_exists'


@dataclass(frozen=True)
class DocumentFilter:
    """Single-field filter. `not_exists` matches documents where the field is absent or None."""
    field: str
    op: str
    value: Any = None

    @classmethod
    def eq(cls, field: str, value: Any) -> 'DocumentFilter':
        return cls(field=field, op=OP_EQUALS, value=value)

    @classmethod
    def not_exists(cls, field: str) -> 'DocumentFilter':
        return cls(field=field, op=OP_NOT_EXISTS)

    def matches(self, document: Document) -> bool:
        if self.op == OP_EQUALS:
            return self.field in document and document[self.field] == self.value
        if self.op == OP_NOT_EXISTS:
            return document.get(self.field) is None
        raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class InsertResult:
    acknowledged: bool
    inserted_id: Optional[str] = None


@dataclass(frozen=True)
class ReplaceResult:
    matched_count: int
    modified_count: int


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int


class DocumentStore(ABC):
    """
    Abstract document store.

    Documents are plain dicts. Implementations must hand out copies so that
    callers never alias stored state.
    """

    @abstractmethod
    def insert(self, collection: str, document: Document) -> InsertResult:
        pass

    @abstractmethod
    def replace(self, collection: str, filter: DocumentFilter, document: Document) -> ReplaceResult:
        """Full replace of every matching document."""
        pass

    @abstractmethod
    def delete_by_filter(self, collection: str, filter: DocumentFilter) -> DeleteResult:
        pass

    @abstractmethod
    def find_by_filter(self, collection: str, filter: DocumentFilter) -> List[Document]:
        pass

    def find_one_by_filter(self, collection: str, filter: DocumentFilter) -> Optional[Document]:
        documents = self.find_by_filter(collection, filter)
        return documents[0] if documents else None
