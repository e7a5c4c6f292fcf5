"""
Account API routes.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status

from api.dependencies import get_account_service
from auth.dependencies import get_current_user_id
from auth.service import AccountService
from utils.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/usuario", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> AuthResponse:
    """Register a new user."""
    user, token = await accounts.register(req)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> AuthResponse:
    """Login with email + password."""
    user, token = await accounts.login(req.email, req.password)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.delete("/usuario/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    caller_id: uuid.UUID = Depends(get_current_user_id),
    accounts: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Delete a user that owns no locations."""
    await accounts.delete_user(caller_id, user_id)
    return MessageResponse(message="User deleted successfully.")
