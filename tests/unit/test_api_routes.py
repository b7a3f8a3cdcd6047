from __future__ import annotations

from dataclasses import dataclass

import httpx
import pytest

from src.adapters.api.dependencies import get_routing_service
from src.app.services.routing_service import RoutingService
from src.domain.models import GeoPoint, RoadGraph
from src.main import app

START = GeoPoint(lat=28.12, lon=-15.43)
MIDDLE = GeoPoint(lat=28.121, lon=-15.43)
GOAL = GeoPoint(lat=28.121, lon=-15.431)
ISLAND = GeoPoint(lat=28.2, lon=-15.5)


@dataclass(slots=True)
class _InMemoryGraphRepository:
    graph: RoadGraph

    def load_graph(self) -> RoadGraph:
        return self.graph


def _service() -> RoutingService:
    g = RoadGraph()
    for p in (START, MIDDLE, GOAL, ISLAND):
        g.add_vertex(p)
    g.add_edge(START, MIDDLE, "Calle Triana", "residential", 0.2)
    g.add_edge(MIDDLE, GOAL, "Calle Mayor", "secondary", 0.15)
    return RoutingService(graph_repository=_InMemoryGraphRepository(g))


def _point(p: GeoPoint) -> dict[str, float]:
    return {"lat": p.lat, "lon": p.lon}


async def _post(payload: dict) -> httpx.Response:
    app.dependency_overrides[get_routing_service] = _service
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            return await client.post("/routes", json=payload)
    finally:
        app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_returns_route() -> None:
    resp = await _post({"origin": _point(START), "destination": _point(GOAL)})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["algorithm"] == "dijkstra"
    assert payload["path"] == [_point(START), _point(MIDDLE), _point(GOAL)]
    assert [s["name"] for s in payload["segments"]] == ["Calle Triana", "Calle Mayor"]
    assert payload["total_distance_km"] == pytest.approx(0.35)
    assert payload["total_time_h"] == pytest.approx(0.2 / 30.0 + 0.15 / 60.0)
    assert payload["visited_count"] == 3
    assert payload["hop_count"] == 2


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_with_snapping_and_time_search() -> None:
    resp = await _post(
        {
            "origin": {"lat": 28.12001, "lon": -15.43001},
            "destination": _point(GOAL),
            "algorithm": "time_astar",
            "snap": True,
        }
    )

    assert resp.status_code == 200
    assert resp.json()["origin"] == _point(START)


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_unknown_endpoint_is_422() -> None:
    resp = await _post(
        {"origin": _point(START), "destination": {"lat": 0.0, "lon": 0.0}}
    )

    assert resp.status_code == 422
    assert "not an intersection" in resp.json()["detail"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_without_path_is_404() -> None:
    resp = await _post({"origin": _point(START), "destination": _point(ISLAND)})

    assert resp.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_rejects_unknown_algorithm() -> None:
    resp = await _post(
        {
            "origin": _point(START),
            "destination": _point(GOAL),
            "algorithm": "teleport",
        }
    )

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_graph_stats() -> None:
    app.dependency_overrides[get_routing_service] = _service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/graph/stats")

    app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert resp.json() == {"vertices": 4, "edges": 2}
