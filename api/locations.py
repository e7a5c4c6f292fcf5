"""
Location API routes.  All of them sit behind the auth gate.
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_location_service
from auth.dependencies import get_current_user_id
from core.location_service import LocationService
from utils.schemas import (
    LocationCreate,
    LocationOut,
    LocationUpdate,
    MapLinkResponse,
    MessageResponse,
)

# Router-level gate runs before any endpoint dependency opens a DB session.
router = APIRouter(
    prefix="/local",
    tags=["locations"],
    dependencies=[Depends(get_current_user_id)],
)


@router.post("", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
async def create_location(
    body: LocationCreate,
    service: LocationService = Depends(get_location_service),
    owner_id: uuid.UUID = Depends(get_current_user_id),
) -> LocationOut:
    location = await service.create(owner_id, body.name, body.description, body.address)
    return LocationOut.model_validate(location)


@router.get("", response_model=List[LocationOut])
async def list_locations(
    service: LocationService = Depends(get_location_service),
    owner_id: uuid.UUID = Depends(get_current_user_id),
) -> List[LocationOut]:
    """List every location owned by the caller."""
    return [LocationOut.model_validate(loc) for loc in await service.list_by_owner(owner_id)]


@router.get("/{location_id}", response_model=LocationOut)
async def get_location(
    location_id: str,
    service: LocationService = Depends(get_location_service),
    owner_id: uuid.UUID = Depends(get_current_user_id),
) -> LocationOut:
    return LocationOut.model_validate(await service.get_owned(owner_id, location_id))


@router.put("/{location_id}", response_model=LocationOut)
async def update_location(
    location_id: str,
    body: LocationUpdate,
    service: LocationService = Depends(get_location_service),
    owner_id: uuid.UUID = Depends(get_current_user_id),
) -> LocationOut:
    """Partial update: fields missing from the body keep their value."""
    fields = body.model_dump(exclude_unset=True)
    location = await service.update(owner_id, location_id, fields)
    return LocationOut.model_validate(location)


@router.delete("/{location_id}", response_model=MessageResponse)
async def delete_location(
    location_id: str,
    service: LocationService = Depends(get_location_service),
    owner_id: uuid.UUID = Depends(get_current_user_id),
) -> MessageResponse:
    await service.delete(owner_id, location_id)
    return MessageResponse(message="Location deleted successfully.")


@router.get("/{location_id}/maps", response_model=MapLinkResponse)
async def location_map_link(
    location_id: str,
    service: LocationService = Depends(get_location_service),
    owner_id: uuid.UUID = Depends(get_current_user_id),
) -> MapLinkResponse:
    """Geocode the location's address and return a map link."""
    link = await service.derive_map_link(owner_id, location_id)
    return MapLinkResponse(map_link=link)
