"""
Book Service.
"""
from typing import List, Optional

from bookshelf.common.base.base_service import BaseService
from bookshelf.features.books.domain.book_entity import Book
from bookshelf.features.books.repository.book_repository import BookRepository


class BookService(BaseService[Book]):
    def __init__(self, book_repository: BookRepository):
        super().__init__(book_repository)

    def create_book(self, book: Book) -> Book:
        return self.create(book)

    def delete_book(self, book_id: str) -> bool:
        return self.delete(book_id)

    def update_book(self, book: Book) -> Book:
        return self.update(book)

    def get_all_books(self) -> List[Book]:
        return self.list_all()

    def get_book(self, book_id: str) -> Optional[Book]:
        return self.get_one(book_id)
