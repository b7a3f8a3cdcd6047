from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")

    @classmethod
    def parse(cls, lat: str | float, lon: str | float) -> "GeoPoint":
        """Build a point from raw map-file fields (strings or numbers)."""

        return cls(lat=float(lat), lon=float(lon))

    def __str__(self) -> str:
        return f"({self.lat:.6f}, {self.lon:.6f})"
