"""
Book Mapper.
"""
from typing import Any, Dict

from bookshelf.common.base.base_mapper import EntityMapper
from bookshelf.features.books.domain.book_entity import Book


class BookMapper(EntityMapper[Book]):
    def __init__(self):
        super().__init__(Book)

    def to_document(self, book: Book) -> Dict[str, Any]:
        # Store layout is camelCase, matching the other collections
        return {
            'id': book.id,
            'title': book.title,
            'author': book.author,
            'isbn': book.isbn,
            'publishedYear': book.published_year,
            'description': book.description,
            'createdAt': book.created_at,
            'updatedAt': book.updated_at,
            'deletedAt': book.deleted_at,
        }

    def from_document(self, data: Dict[str, Any]) -> Book:
        return Book(
            id=data.get('id'),
            title=data.get('title', ''),
            author=data.get('author'),
            isbn=data.get('isbn'),
            published_year=data.get('publishedYear'),
            description=data.get('description'),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
            deleted_at=data.get('deletedAt'),
        )
