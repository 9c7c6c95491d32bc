"""
Book Domain Entity.
"""
from dataclasses import dataclass
from typing import Optional

from bookshelf.common.base.base_entity import BaseEntity


@dataclass(kw_only=True)
class Book(BaseEntity):
    title: str
    author: Optional[str] = None
    isbn: Optional[str] = None
    published_year: Optional[int] = None
    description: Optional[str] = None
