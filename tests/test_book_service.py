import dataclasses
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from bookshelf.common.errors import EntityNotFound, WriteNotAcknowledged
from bookshelf.features.books.domain.book_entity import Book
from bookshelf.features.books.repository.book_repository import BookRepository
from bookshelf.features.books.service.book_service import BookService


@pytest.fixture
def mock_book_repo():
    return MagicMock(spec=BookRepository)


@pytest.fixture
def delegating_service(mock_book_repo):
    return BookService(book_repository=mock_book_repo)


def test_service_holds_single_repository(delegating_service, mock_book_repo):
    assert delegating_service.repository is mock_book_repo
    assert not hasattr(delegating_service, "book_repository")


def test_create_book_forwards_to_persist(delegating_service, mock_book_repo, dune):
    stored = Book(id="x", title="Dune")
    mock_book_repo.persist.return_value = stored

    assert delegating_service.create_book(dune) is stored
    mock_book_repo.persist.assert_called_once_with(dune)


def test_delete_book_is_soft_delete(delegating_service, mock_book_repo):
    mock_book_repo.logical_delete.return_value = True

    assert delegating_service.delete_book("x") is True
    mock_book_repo.logical_delete.assert_called_once_with("x")
    mock_book_repo.delete.assert_not_called()


def test_purge_is_hard_delete(delegating_service, mock_book_repo):
    mock_book_repo.delete.return_value = True

    assert delegating_service.purge("x") is True
    mock_book_repo.delete.assert_called_once_with("x")


def test_update_book_forwards(delegating_service, mock_book_repo):
    book = Book(id="x", title="Dune Messiah")
    mock_book_repo.update.return_value = book

    assert delegating_service.update_book(book) is book
    mock_book_repo.update.assert_called_once_with(book)


def test_get_all_books_forwards(delegating_service, mock_book_repo):
    mock_book_repo.find_all.return_value = []

    assert delegating_service.get_all_books() == []
    mock_book_repo.find_all.assert_called_once_with()


def test_get_book_forwards(delegating_service, mock_book_repo):
    mock_book_repo.find_one.return_value = None

    assert delegating_service.get_book("missing") is None
    mock_book_repo.find_one.assert_called_once_with("missing")


def test_errors_propagate_unchanged(delegating_service, mock_book_repo, dune):
    error = WriteNotAcknowledged("Cannot insert a new entity", collection="books")
    mock_book_repo.persist.side_effect = error

    with pytest.raises(WriteNotAcknowledged) as exc_info:
        delegating_service.create_book(dune)
    assert exc_info.value is error


def test_book_lifecycle_scenario(book_service, book_repository):
    t1 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    t2 = datetime(2026, 3, 1, 9, 5, tzinfo=timezone.utc)
    t3 = datetime(2026, 3, 1, 9, 10, tzinfo=timezone.utc)

    with patch.object(book_repository, 'now', side_effect=[t1, t2, t3]):
        created = book_service.create_book(Book(title="Dune"))
        assert created.id
        assert created.title == "Dune"
        assert created.created_at == t1
        assert created.updated_at is None
        assert created.deleted_at is None

        updated = book_service.update_book(dataclasses.replace(created, title="Dune Messiah"))
        assert updated.id == created.id
        assert updated.title == "Dune Messiah"
        assert updated.updated_at == t2
        assert updated.updated_at > created.created_at

        assert book_service.delete_book(created.id) is True

    assert book_service.get_book(created.id) is None
    assert created.id not in [b.id for b in book_service.get_all_books()]

    assert book_service.purge(created.id) is True
    with pytest.raises(EntityNotFound):
        book_service.purge(created.id)
