from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .geo import GeoPoint


class SearchAlgorithm(str, Enum):
    BFS = "bfs"
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"
    TIME_DIJKSTRA = "time_dijkstra"
    TIME_ASTAR = "time_astar"


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """One road segment travelled by a route."""

    origin: GeoPoint
    destination: GeoPoint
    name: str | None = None
    category: str | None = None
    distance_km: float | None = None
    duration_h: float | None = None


@dataclass(frozen=True, slots=True)
class Route:
    origin: GeoPoint
    destination: GeoPoint
    algorithm: SearchAlgorithm
    path: tuple[GeoPoint, ...] = field(default_factory=tuple)
    segments: tuple[RouteSegment, ...] = field(default_factory=tuple)
    visited_count: int = 0

    @property
    def total_distance_km(self) -> float | None:
        distances = [seg.distance_km for seg in self.segments]
        if any(d is None for d in distances):
            return None
        return float(sum(d for d in distances if d is not None))

    @property
    def total_time_h(self) -> float | None:
        durations = [seg.duration_h for seg in self.segments]
        if any(d is None for d in durations):
            return None
        return float(sum(d for d in durations if d is not None))

    @property
    def hop_count(self) -> int:
        return max(0, len(self.path) - 1)
