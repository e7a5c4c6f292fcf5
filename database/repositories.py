"""
SQLAlchemy-backed repositories for users and locations.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConflictError, InvalidTokenError
from core.interfaces import LocationRepository, UserRepository
from database.models import Location, User

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_national_id_or_email(
        self, national_id: str, email: str
    ) -> Optional[User]:
        result = await self._session.execute(
            select(User)
            .where(or_(User.national_id == national_id, User.email == email))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def get(self, user_id: uuid.UUID) -> Optional[User]:
        return await self._session.get(User, user_id)

    async def add(self, user: User) -> User:
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same keys.
            await self._session.rollback()
            logger.warning("Unique constraint rejected user insert: %s", exc.orig)
            raise ConflictError("User with the same national id or email already exists") from exc
        return user

    async def delete(self, user: User) -> None:
        await self._session.delete(user)
        await self._session.flush()


class SqlAlchemyLocationRepository(LocationRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, location: Location) -> Location:
        self._session.add(location)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Owner row is gone; only a token issued before deletion gets here.
            await self._session.rollback()
            logger.warning("Foreign key rejected location insert: %s", exc.orig)
            raise InvalidTokenError("Token user no longer exists") from exc
        return location

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[Location]:
        result = await self._session.execute(
            select(Location).where(Location.user_id == owner_id)
        )
        return list(result.scalars().all())

    async def get_owned(
        self, owner_id: uuid.UUID, location_id: uuid.UUID
    ) -> Optional[Location]:
        result = await self._session.execute(
            select(Location).where(
                Location.location_id == location_id,
                Location.user_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def count_by_owner(self, owner_id: uuid.UUID) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(Location).where(Location.user_id == owner_id)
        )
        return int(result.scalar_one())

    async def save(self, location: Location) -> Location:
        await self._session.flush()
        await self._session.refresh(location)
        return location

    async def delete(self, location: Location) -> None:
        await self._session.delete(location)
        await self._session.flush()
