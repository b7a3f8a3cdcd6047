class RoutingError(Exception):
    """Base exception for route calculation failures."""


class NoPathFound(RoutingError):
    """Raised when no feasible path exists for the given request."""


class InvalidEndpoint(RoutingError):
    """Raised when an origin or destination is not an intersection of the graph."""
