from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import RoadGraph


class IGraphRepository(ABC):
    """Port for loading the road network used by the searches."""

    @abstractmethod
    def load_graph(self) -> RoadGraph:
        """Load the graph into memory and return it.

        Implementations may cache the result; callers must not mutate it.
        """
