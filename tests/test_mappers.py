from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import pytest

from bookshelf.common.base.base_entity import BaseEntity
from bookshelf.common.base.base_mapper import EntityMapper, to_camel_case
from bookshelf.features.books.domain.book_entity import Book
from bookshelf.features.books.mapper.book_mapper import BookMapper


@dataclass(kw_only=True)
class Shelf(BaseEntity):
    label: str
    room_name: Optional[str] = None


def test_to_camel_case():
    assert to_camel_case('deleted_at') == 'deletedAt'
    assert to_camel_case('published_year') == 'publishedYear'
    assert to_camel_case('id') == 'id'


def test_default_mapper_uses_camel_case_keys():
    mapper = EntityMapper(Shelf)
    stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)

    document = mapper.to_document(Shelf(id='s1', label='A', room_name='Study', created_at=stamp))

    assert document == {
        'id': 's1',
        'createdAt': stamp,
        'updatedAt': None,
        'deletedAt': None,
        'label': 'A',
        'roomName': 'Study',
    }
    assert mapper.from_document(document) == Shelf(id='s1', label='A', room_name='Study', created_at=stamp)


def test_default_mapper_ignores_unknown_keys():
    shelf = EntityMapper(Shelf).from_document({'id': 's1', 'label': 'A', 'legacyField': 1})
    assert shelf == Shelf(id='s1', label='A')


def test_default_mapper_rejects_non_dataclass():
    with pytest.raises(TypeError):
        EntityMapper(dict)


def test_book_mapper_layout():
    mapper = BookMapper()
    book = Book(id='b1', title='Dune', published_year=1965)

    document = mapper.to_document(book)

    assert document['publishedYear'] == 1965
    assert document['deletedAt'] is None
    assert mapper.from_document(document) == book


def test_book_mapper_tolerates_missing_fields():
    book = BookMapper().from_document({'id': 'b1'})
    assert book.title == ''
    assert book.deleted_at is None
    assert not book.is_deleted
