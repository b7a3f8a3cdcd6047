from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.api.dependencies import get_routing_service
from src.adapters.api.schemas.routes import (
    GeoPointSchema,
    GraphStatsSchema,
    RouteRequestSchema,
    RouteSchema,
    RouteSegmentSchema,
)
from src.app.services.routing_service import RoutingService
from src.domain.exceptions import InvalidEndpoint, NoPathFound
from src.domain.models import GeoPoint, Route

router = APIRouter(tags=["routes"])


def _point_to_schema(point: GeoPoint) -> GeoPointSchema:
    return GeoPointSchema(lat=point.lat, lon=point.lon)


def _route_to_schema(route: Route) -> RouteSchema:
    return RouteSchema(
        origin=_point_to_schema(route.origin),
        destination=_point_to_schema(route.destination),
        algorithm=route.algorithm.value,
        path=[_point_to_schema(p) for p in route.path],
        segments=[
            RouteSegmentSchema(
                origin=_point_to_schema(seg.origin),
                destination=_point_to_schema(seg.destination),
                name=seg.name,
                category=seg.category,
                distance_km=seg.distance_km,
                duration_h=seg.duration_h,
            )
            for seg in route.segments
        ],
        visited_count=route.visited_count,
        hop_count=route.hop_count,
        total_distance_km=route.total_distance_km,
        total_time_h=route.total_time_h,
    )


@router.post("/routes", response_model=RouteSchema)
def calculate_route(
    req: RouteRequestSchema,
    service: RoutingService = Depends(get_routing_service),
) -> RouteSchema:
    origin = GeoPoint(lat=req.origin.lat, lon=req.origin.lon)
    destination = GeoPoint(lat=req.destination.lat, lon=req.destination.lon)
    try:
        route = service.calculate_route(
            origin=origin,
            destination=destination,
            algorithm=req.algorithm,
            snap=req.snap,
        )
    except InvalidEndpoint as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except NoPathFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _route_to_schema(route)


@router.get("/graph/stats", response_model=GraphStatsSchema)
def graph_stats(
    service: RoutingService = Depends(get_routing_service),
) -> GraphStatsSchema:
    return GraphStatsSchema(**service.graph_stats())
