"""
models/location.py
------------------
Domain model for a saved location.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Geo:
    """
    Where a location is. The catalog never interprets these fields.

    Attributes:
        address: Human-readable address.
        lat: Latitude.
        lng: Longitude.
        zoom: Map zoom level used when the location is shown.
    """
    address: str = ""
    lat: float = 0.0
    lng: float = 0.0
    zoom: int = 10

    def to_dict(self) -> dict:
        return {"address": self.address, "lat": self.lat, "lng": self.lng, "zoom": self.zoom}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Geo":
        data = data or {}
        return cls(
            address=data.get("address", ""),
            lat=data.get("lat", 0.0),
            lng=data.get("lng", 0.0),
            zoom=data.get("zoom", 10),
        )


@dataclass
class Location:
    """
    A named, rated place.

    Attributes:
        id: Opaque id assigned by storage (None for new records).
        name: Display name.
        rate: Rating, 1-5 by convention (not validated).
        geo: Address and coordinates.
        created_at: Creation time, ms since epoch. Never changes after creation.
        updated_at: Time of the last save, ms since epoch.
    """
    name: str
    rate: int = 0
    geo: Geo = field(default_factory=Geo)
    id: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    def to_dict(self) -> dict:
        """Stored form, with the camelCase keys the collection uses."""
        data = {
            "name": self.name,
            "rate": self.rate,
            "geo": self.geo.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.id:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        """Build a Location from its stored form; unknown keys are ignored."""
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            rate=data.get("rate", 0),
            geo=Geo.from_dict(data.get("geo")),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def __str__(self) -> str:
        return f"{self.name} ({'★' * int(self.rate or 0)}) | {self.geo.address}"
