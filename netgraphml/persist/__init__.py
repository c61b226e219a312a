"""Persistence utilities for netgraphml."""

from .graphml import (
    graphml_string,
    read_graphml,
    read_graphml_string,
    read_net_graphml,
    write_graphml,
    write_net_graphml,
)
from .registry import FormatRegistry, GraphFormat, read_graph, write_graph
from .types import ValueKind

__all__ = [
    "FormatRegistry",
    "GraphFormat",
    "ValueKind",
    "graphml_string",
    "read_graph",
    "read_graphml",
    "read_graphml_string",
    "read_net_graphml",
    "write_graph",
    "write_graphml",
    "write_net_graphml",
]
