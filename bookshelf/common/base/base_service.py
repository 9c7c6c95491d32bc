"""
Base Service Class.
Thin facade forwarding entity operations to one repository.
"""
from typing import Generic, List, Optional, TypeVar

from bookshelf.common.base.base_entity import BaseEntity
from bookshelf.common.base.base_repository import BaseRepository

T = TypeVar('T', bound=BaseEntity)


class BaseService(Generic[T]):
    """
    Base class for all domain services.

    No validation or transformation happens here; results and errors are the
    repository's, unchanged.
    """

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    def create(self, entity: T) -> T:
        return self.repository.persist(entity)

    def delete(self, id: str) -> bool:
        """Soft delete."""
        return self.repository.logical_delete(id)

    def purge(self, id: str) -> bool:
        """Hard delete."""
        return self.repository.delete(id)

    def update(self, entity: T) -> T:
        return self.repository.update(entity)

    def list_all(self) -> List[T]:
        return self.repository.find_all()

    def get_one(self, id: str) -> Optional[T]:
        return self.repository.find_one(id)
