from .routing import InvalidEndpoint, NoPathFound, RoutingError

__all__ = [
    "InvalidEndpoint",
    "NoPathFound",
    "RoutingError",
]
