"""Document store contract and interchangeable backends."""

from .document_store import (  # noqa: F401
    DocumentFilter,
    DocumentStore,
    DeleteResult,
    InsertResult,
    ReplaceResult,
)
from .factory import create_document_store  # noqa: F401
