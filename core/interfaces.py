"""
Persistence interfaces used by the services.

The SQLAlchemy implementations live in ``database.repositories``; tests
substitute in-memory versions.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from database.models import Location, User


class UserRepository(ABC):
    """Credential store."""

    @abstractmethod
    async def find_by_national_id_or_email(
        self, national_id: str, email: str
    ) -> Optional[User]:
        """Return any user matching either key (single combined lookup)."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get(self, user_id: uuid.UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def add(self, user: User) -> User:
        """
        Persist a new user.

        Raises ``ConflictError`` when the store rejects a duplicate
        national id or email.
        """
        ...

    @abstractmethod
    async def delete(self, user: User) -> None:
        ...


class LocationRepository(ABC):
    """Location store.  Every query is scoped to an owner."""

    @abstractmethod
    async def add(self, location: Location) -> Location:
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: uuid.UUID) -> List[Location]:
        ...

    @abstractmethod
    async def get_owned(
        self, owner_id: uuid.UUID, location_id: uuid.UUID
    ) -> Optional[Location]:
        ...

    @abstractmethod
    async def count_by_owner(self, owner_id: uuid.UUID) -> int:
        ...

    @abstractmethod
    async def save(self, location: Location) -> Location:
        """Persist changes made to an already-stored location."""
        ...

    @abstractmethod
    async def delete(self, location: Location) -> None:
        ...
