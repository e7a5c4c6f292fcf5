"""
FastAPI dependencies (shared across routes).

Builds repositories and services per request from the request's DB session.
Tests swap any of these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import get_password_hasher, get_token_service
from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.service import AccountService
from config.settings import config
from connectors.base import BaseGeocoder
from connectors.nominatim import NominatimGeocoder
from core.interfaces import LocationRepository, UserRepository
from core.location_service import LocationService
from database.repositories import SqlAlchemyLocationRepository, SqlAlchemyUserRepository
from database.session import get_db_session


def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return SqlAlchemyUserRepository(session)


def get_location_repository(session: AsyncSession = Depends(get_db_session)) -> LocationRepository:
    return SqlAlchemyLocationRepository(session)


@lru_cache
def get_geocoder() -> BaseGeocoder:
    return NominatimGeocoder(
        search_url=config.geocoding_url,
        timeout=config.geocoding_timeout_seconds,
        user_agent=config.geocoding_user_agent,
    )


def get_location_service(
    locations: LocationRepository = Depends(get_location_repository),
    geocoder: BaseGeocoder = Depends(get_geocoder),
) -> LocationService:
    return LocationService(
        locations=locations,
        geocoder=geocoder,
        map_link_template=config.map_link_template,
    )


def get_account_service(
    users: UserRepository = Depends(get_user_repository),
    locations: LocationRepository = Depends(get_location_repository),
    tokens: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(
        users=users,
        locations=locations,
        tokens=tokens,
        hasher=hasher,
        login_token_expiry_seconds=config.login_token_expiry_seconds,
        allow_cross_user_delete=config.allow_cross_user_delete,
    )
