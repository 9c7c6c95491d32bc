"""
Books Feature Module.
"""
from typing import Any, Dict, Optional

from bookshelf.config.env_config import get_store_config
from bookshelf.features.books.repository.book_repository import BookRepository
from bookshelf.features.books.service.book_service import BookService
from bookshelf.services.store.document_store import DocumentStore
from bookshelf.services.store.factory import create_document_store


def build_book_service(config: Optional[Dict[str, Any]] = None,
                       store: Optional[DocumentStore] = None) -> BookService:
    """
    Wire store -> repository -> service.

    Args:
        config: Store configuration (default: get_store_config())
        store: Prebuilt store; skips backend selection when given
    """
    config = config or get_store_config()
    if store is None:
        store = create_document_store(config['database_use'], config.get('database_name'))
    book_repository = BookRepository(store, config.get('books_collection', 'books'))
    return BookService(book_repository=book_repository)
