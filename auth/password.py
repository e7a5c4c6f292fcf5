"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a configurable
work factor.  ``PasswordHasher`` runs the expensive part in a worker thread
so request handlers don't stall the event loop.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import bcrypt

# bcrypt only looks at the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash: Optional[str] = None

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self.rounds)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(verify_password, password, password_hash)

    async def verify_dummy(self, password: str) -> None:
        """Pay the cost of a real check when there is no stored hash."""
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash("exercita365-dummy-password")
        await self.verify(password, self._dummy_hash)
