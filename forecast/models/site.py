"""Forecast site (location) models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    region: str


@dataclass(frozen=True)
class LocationRow:
    """Display projection of a Location used by the search screen."""

    name: str
    id: str
    region: str

    @classmethod
    def from_location(cls, location: Location) -> "LocationRow":
        return cls(name=location.name, id=location.id, region=location.region)
