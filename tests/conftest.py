"""Pytest configuration for bookshelf tests."""
import os

# Keep test runs quiet and off the filesystem; must happen before bookshelf configures logging.
os.environ.setdefault('LOG_TO_FILE', 'false')
os.environ.setdefault('ENVIRONMENT', 'test')

from unittest.mock import MagicMock

import pytest

from bookshelf.features.books.domain.book_entity import Book
from bookshelf.features.books.repository.book_repository import BookRepository
from bookshelf.features.books.service.book_service import BookService
from bookshelf.services.store.document_store import DocumentStore
from bookshelf.services.store.memory_store import InMemoryDocumentStore


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore('test')


@pytest.fixture
def book_repository(memory_store):
    return BookRepository(memory_store)


@pytest.fixture
def book_service(book_repository):
    return BookService(book_repository=book_repository)


@pytest.fixture
def mock_store():
    return MagicMock(spec=DocumentStore)


@pytest.fixture
def mock_repository(mock_store):
    return BookRepository(mock_store)


@pytest.fixture
def dune():
    return Book(title="Dune", author="Frank Herbert", published_year=1965)
