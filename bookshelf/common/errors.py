"""
Repository error taxonomy.

Fatal conditions are raised and propagate to the caller untouched.
Duplicate matches on id-scoped mutations are only reported through a
WARNING log record tagged with DuplicateMatchAnomaly.
"""
from typing import Optional


class RepositoryError(Exception):
    """Base class for every fatal repository condition."""

    def __init__(self, message: str, collection: Optional[str] = None, entity_id: Optional[str] = None):
        super().__init__(message)
        self.collection = collection
        self.entity_id = entity_id


class WriteNotAcknowledged(RepositoryError):
    """The store declined to confirm a write."""


class MissingInsertedId(RepositoryError):
    """The store acknowledged an insert but returned no identifier."""


class PostWriteReadMiss(RepositoryError):
    """A write succeeded but the immediate re-read found nothing."""


class EntityNotFound(RepositoryError):
    """Zero documents matched an id-scoped mutation or lookup."""


class DuplicateMatchAnomaly(UserWarning):
    """More than one document matched an id-scoped mutation. Logged, never raised."""


class ConfigurationError(Exception):
    """Invalid store wiring or environment configuration."""
