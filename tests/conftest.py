"""
Shared fixtures: services wired to in-memory repositories.
"""

import pytest

from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.service import AccountService
from core.location_service import LocationService
from tests.fakes import (
    CENTRAL_PARK,
    MAP_TEMPLATE,
    InMemoryLocationRepository,
    InMemoryUserRepository,
    StubGeocoder,
)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def location_repo():
    return InMemoryLocationRepository()


@pytest.fixture
def geocoder():
    return StubGeocoder({"Central Park, NY": CENTRAL_PARK})


@pytest.fixture
def token_service():
    return TokenService("test-secret")


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def account_service(user_repo, location_repo, token_service, hasher):
    return AccountService(
        users=user_repo,
        locations=location_repo,
        tokens=token_service,
        hasher=hasher,
        login_token_expiry_seconds=3600,
    )


@pytest.fixture
def location_service(location_repo, geocoder):
    return LocationService(
        locations=location_repo,
        geocoder=geocoder,
        map_link_template=MAP_TEMPLATE,
    )
