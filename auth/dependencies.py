"""
FastAPI dependencies for authentication.

``get_current_user_id`` is the auth gate: it is the only place a caller's
identity is derived, and every protected route depends on it.
"""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, Request

from auth.jwt import TokenService
from auth.password import PasswordHasher
from config.settings import config
from core.exceptions import InvalidTokenError, UnauthorizedError
from utils.validators import parse_uuid

logger = logging.getLogger(__name__)


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(config.jwt_secret)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=config.bcrypt_rounds)


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> uuid.UUID:
    """
    Extract and verify the Bearer token from the Authorization header.
    Returns the authenticated user_id and records it on ``request.state``.
    """
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError()

    user_id = parse_uuid(tokens.verify(token))
    if user_id is None:
        logger.warning("Token carried a non-UUID subject")
        raise InvalidTokenError()

    request.state.user_id = user_id
    return user_id
