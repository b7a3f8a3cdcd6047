from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint

# Nominal speeds (km/h) per road category, used to derive traversal time
# when an edge does not carry one.
SPEED_LIMITS_KMH: dict[str, float] = {
    "motorway": 100.0,
    "trunk": 90.0,
    "primary": 80.0,
    "secondary": 60.0,
    "tertiary": 40.0,
    "unclassified": 35.0,
    "residential": 30.0,
    "service": 20.0,
    "living_street": 10.0,
}

DEFAULT_CATEGORY = "residential"


def normalize_category(category: str | None) -> str:
    """Map a free-form road type onto a key of SPEED_LIMITS_KMH.

    OSM link roads ("primary_link") share the speed of their parent class.
    Anything unknown falls back to residential.
    """

    value = (category or "").strip().lower()
    if value.endswith("_link"):
        value = value[: -len("_link")]
    return value if value in SPEED_LIMITS_KMH else DEFAULT_CATEGORY


def speed_kmh_for_category(category: str | None) -> float:
    return SPEED_LIMITS_KMH[normalize_category(category)]


def travel_time_h(length_km: float, category: str | None) -> float:
    return float(length_km) / speed_kmh_for_category(category)


@dataclass(eq=False, slots=True)
class RoadNode:
    """An intersection of the road network.

    Nodes compare by identity. The graph creates exactly one node per
    distinct GeoPoint, so identity and coordinates coincide.
    """

    coords: GeoPoint
    outgoing: list["RoadEdge"] = field(default_factory=list)

    def add_edge(self, edge: "RoadEdge") -> None:
        if edge.source is not self:
            raise ValueError("Edge does not start at this node")
        self.outgoing.append(edge)

    def __repr__(self) -> str:
        return f"RoadNode({self.coords}, out={len(self.outgoing)})"


@dataclass(frozen=True, eq=False, slots=True)
class RoadEdge:
    """A directed road segment. A two-way street is two edges."""

    name: str
    category: str
    length_km: float
    time_h: float
    source: RoadNode
    target: RoadNode

    @property
    def speed_kmh(self) -> float:
        if self.time_h <= 0.0:
            return float("inf")
        return self.length_km / self.time_h

    def __repr__(self) -> str:
        return (
            f"RoadEdge({self.name!r}, {self.category!r}, {self.length_km:.3f} km, "
            f"{self.source.coords} -> {self.target.coords})"
        )
