from __future__ import annotations

from typing import Mapping

from src.domain.models import GeoPoint, RoadNode

# Upper bound on the length of a reconstructed path.
MAX_PATH_NODES = 10_000


def reconstruct_path(
    parent_by_node: Mapping[RoadNode, RoadNode],
    *,
    start: RoadNode,
    goal: RoadNode,
    max_nodes: int = MAX_PATH_NODES,
) -> list[GeoPoint] | None:
    """Rebuild the start..goal coordinates by walking parent links from goal.

    Returns None when the parent map is broken (missing link or a cycle) or
    the path would exceed ``max_nodes``.
    """

    current = goal
    seen = {current}
    path = [current.coords]

    while current is not start:
        parent = parent_by_node.get(current)
        if parent is None or parent in seen:
            return None
        seen.add(parent)
        path.append(parent.coords)
        if len(path) > max_nodes:
            return None
        current = parent

    path.reverse()
    return path
