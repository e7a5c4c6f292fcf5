"""
Geocoding provider interface (address to coordinates).

Every provider (Nominatim, Google, …) subclasses this and implements
``geocode``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinates:
    """Latitude / longitude as the decimal strings the provider returned."""

    lat: str
    lon: str

    def as_text(self) -> str:
        return f"{self.lat},{self.lon}"

    @classmethod
    def from_text(cls, text: str) -> Optional["Coordinates"]:
        """Parse a stored ``"lat,lon"`` value; None if it doesn't look like one."""
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 2 or not all(parts):
            return None
        try:
            float(parts[0])
            float(parts[1])
        except ValueError:
            return None
        return cls(lat=parts[0], lon=parts[1])


class BaseGeocoder(ABC):
    """Abstract base for all geocoding providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique slug: 'nominatim', 'google', …"""
        ...

    @abstractmethod
    async def geocode(self, address: str) -> Optional[Coordinates]:
        """
        Look up a free-text address.

        Returns
        -------
        The best match, or None when the provider has no match.

        Raises
        ------
        UpstreamUnavailableError
            On timeouts, network errors or unusable provider responses.
        """
        ...
