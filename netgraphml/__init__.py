"""netgraphml package initialization.

This module exposes the network container and the GraphML read/write entry
points used by external callers.
"""

from .errors import GraphMLError, StructuralError, UnsupportedTypeKind, ValueParseError
from .graph import Edge, Network
from .persist import (
    ValueKind,
    read_graph,
    read_graphml,
    read_net_graphml,
    write_graph,
    write_graphml,
    write_net_graphml,
)

__all__ = [
    "Edge",
    "GraphMLError",
    "Network",
    "StructuralError",
    "UnsupportedTypeKind",
    "ValueKind",
    "ValueParseError",
    "read_graph",
    "read_graphml",
    "read_net_graphml",
    "write_graph",
    "write_graphml",
    "write_net_graphml",
]
