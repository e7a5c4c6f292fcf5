"""
Account operations: register, login and delete.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Tuple

from auth.jwt import TokenService
from auth.password import PasswordHasher
from core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
)
from core.interfaces import LocationRepository, UserRepository
from database.models import User
from utils.schemas import RegisterRequest
from utils.validators import normalize_email, parse_uuid

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        users: UserRepository,
        locations: LocationRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
        login_token_expiry_seconds: int = 3600,
        allow_cross_user_delete: bool = False,
    ):
        self.users = users
        self.locations = locations
        self.tokens = tokens
        self.hasher = hasher
        self.login_token_expiry_seconds = login_token_expiry_seconds
        self.allow_cross_user_delete = allow_cross_user_delete

    async def register(self, req: RegisterRequest) -> Tuple[User, str]:
        """Create a user and return it with a non-expiring token."""
        email = normalize_email(str(req.email))

        existing = await self.users.find_by_national_id_or_email(req.national_id, email)
        if existing is not None:
            raise ConflictError("User with the same national id or email already exists")

        user = User(
            user_id=uuid.uuid4(),
            name=req.name,
            gender=req.gender,
            national_id=req.national_id,
            address=req.address,
            email=email,
            password_hash=await self.hasher.hash(req.password),
            birthdate=req.birthdate,
        )
        await self.users.add(user)

        token = self.tokens.issue(str(user.user_id))
        logger.info("Registered user %s", user.user_id)
        return user, token

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Exchange credentials for a short-lived token.

        Unknown email and wrong password fail identically.
        """
        user = await self.users.get_by_email(normalize_email(email))
        if user is None:
            # Same bcrypt cost as a wrong password.
            await self.hasher.verify_dummy(password)
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()
        if not await self.hasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        token = self.tokens.issue(
            str(user.user_id), expires_in=self.login_token_expiry_seconds
        )
        logger.info("Login: %s", user.user_id)
        return user, token

    async def delete_user(self, caller_id: uuid.UUID, target_id: object) -> None:
        target: Optional[uuid.UUID] = parse_uuid(target_id)

        if not self.allow_cross_user_delete and target != caller_id:
            raise ForbiddenError("Users can only delete their own account")

        user = await self.users.get(target) if target is not None else None
        if user is None:
            raise NotFoundError("User")

        if await self.locations.count_by_owner(user.user_id) > 0:
            raise ConflictError("User cannot be deleted while they own locations")

        await self.users.delete(user)
        logger.info("Deleted user %s (requested by %s)", user.user_id, caller_id)
