"""
Book Repository.
"""
from bookshelf.common.base.base_repository import BaseRepository
from bookshelf.features.books.domain.book_entity import Book
from bookshelf.features.books.mapper.book_mapper import BookMapper
from bookshelf.services.store.document_store import DocumentStore

DEFAULT_COLLECTION = 'books'


class BookRepository(BaseRepository[Book]):
    def __init__(self, store: DocumentStore, collection_name: str = DEFAULT_COLLECTION):
        super().__init__(store, collection_name, BookMapper())
