from .topology import GROUND, NodeIndex, map_topology  # noqa: F401
from .wire import Port, Wire  # noqa: F401

__all__ = [
    "GROUND",
    "NodeIndex",
    "Port",
    "Wire",
    "map_topology",
]
