"""
Location lifecycle with per-owner isolation.

Every operation takes the owner id resolved by the auth gate.  A location
that exists but belongs to someone else is reported exactly like one that
doesn't exist.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Mapping

from connectors.base import BaseGeocoder, Coordinates
from core.exceptions import GeocodeNotFoundError, NotFoundError
from core.interfaces import LocationRepository
from database.models import Location
from utils.validators import clean_text, parse_uuid

logger = logging.getLogger(__name__)

# Fields a caller may change after creation.  Owner and coordinates are not here.
MUTABLE_FIELDS = ("name", "description", "address")


class LocationService:
    def __init__(
        self,
        locations: LocationRepository,
        geocoder: BaseGeocoder,
        map_link_template: str,
    ):
        self.locations = locations
        self.geocoder = geocoder
        self.map_link_template = map_link_template

    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        description: str,
        address: str,
    ) -> Location:
        location = Location(
            location_id=uuid.uuid4(),
            user_id=owner_id,
            name=clean_text("name", name),
            description=clean_text("description", description),
            address=clean_text("address", address),
        )
        await self.locations.add(location)
        logger.info("Created location %s for user %s", location.location_id, owner_id)
        return location

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[Location]:
        return list(await self.locations.list_by_owner(owner_id))

    async def get_owned(self, owner_id: uuid.UUID, location_id: Any) -> Location:
        lid = parse_uuid(location_id)
        location = None
        if lid is not None:
            location = await self.locations.get_owned(owner_id, lid)
        if location is None:
            raise NotFoundError("Location")
        return location

    async def update(
        self,
        owner_id: uuid.UUID,
        location_id: Any,
        fields: Mapping[str, Any],
    ) -> Location:
        """Apply a partial update; keys outside ``MUTABLE_FIELDS`` are ignored."""
        location = await self.get_owned(owner_id, location_id)

        ignored = sorted(set(fields) - set(MUTABLE_FIELDS))
        if ignored:
            logger.debug("Ignoring non-updatable location fields: %s", ignored)

        # Validate everything before touching the record.
        changes: Dict[str, str] = {
            key: clean_text(key, fields[key]) for key in MUTABLE_FIELDS if key in fields
        }
        if "address" in changes and changes["address"] != location.address:
            location.coordinates = None
        for key, value in changes.items():
            setattr(location, key, value)

        await self.locations.save(location)
        return location

    async def delete(self, owner_id: uuid.UUID, location_id: Any) -> None:
        location = await self.get_owned(owner_id, location_id)
        await self.locations.delete(location)
        logger.info("Deleted location %s of user %s", location.location_id, owner_id)

    async def derive_map_link(self, owner_id: uuid.UUID, location_id: Any) -> str:
        """
        Build a map link for an owned location.

        Stored coordinates are reused; otherwise the address is geocoded and
        the match is persisted on the location.
        """
        location = await self.get_owned(owner_id, location_id)

        coords = Coordinates.from_text(location.coordinates) if location.coordinates else None
        if coords is None:
            coords = await self.geocoder.geocode(location.address)
            if coords is None:
                raise GeocodeNotFoundError()
            location.coordinates = coords.as_text()
            await self.locations.save(location)
            logger.info(
                "Geocoded location %s via %s", location.location_id, self.geocoder.provider_name
            )

        return self.map_link_template.format(lat=coords.lat, lon=coords.lon)
