from .local_map_repository import LocalMapRepository, parse_map

__all__ = [
    "LocalMapRepository",
    "parse_map",
]
