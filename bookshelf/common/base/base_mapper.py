"""
Base Mapper.
Translates dataclass entities to and from store documents (camelCase keys).
"""
import dataclasses
from typing import Any, Dict, Generic, Type, TypeVar

from bookshelf.common.base.base_entity import BaseEntity

T = TypeVar('T', bound=BaseEntity)


def to_camel_case(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in tail)


class EntityMapper(Generic[T]):
    """
    Default mapping driven by the entity's dataclass fields.

    Subclasses override `to_document` / `from_document` when a collection
    needs a hand-written layout.
    """

    def __init__(self, entity_type: Type[T]):
        if not dataclasses.is_dataclass(entity_type):
            raise TypeError(f"{entity_type.__name__} must be a dataclass")
        self.entity_type = entity_type

    def to_document(self, entity: T) -> Dict[str, Any]:
        return {
            to_camel_case(f.name): getattr(entity, f.name)
            for f in dataclasses.fields(entity)
        }

    def from_document(self, data: Dict[str, Any]) -> T:
        kwargs = {}
        for f in dataclasses.fields(self.entity_type):
            key = to_camel_case(f.name)
            if key in data:
                kwargs[f.name] = data[key]
        return self.entity_type(**kwargs)
