from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from config.settings import config

router = APIRouter(tags=["health"])


@router.get("/")
async def welcome() -> Dict[str, str]:
    return {"message": f"Welcome to the {config.app_name}!"}


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok", "version": config.app_version}
