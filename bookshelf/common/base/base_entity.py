"""
Base Entity.
Lifecycle fields shared by every persisted entity.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(kw_only=True)
class BaseEntity:
    # Assigned by the repository on persist, never by callers
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # None means live
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
