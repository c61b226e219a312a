"""Format registry dispatching reads and writes by format name."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from ..graph.store import Network
from . import graphml

Reader = Callable[[Any], Network]
Writer = Callable[[Any, Network], bool]


@dataclass(frozen=True)
class GraphFormat:
    """Plain and network read/write callables for one file format."""

    read: Reader
    write: Writer
    read_net: Reader
    write_net: Writer


@dataclass
class FormatRegistry:
    """Resolve format names to their :class:`GraphFormat`."""

    registry: Dict[str, GraphFormat] = field(default_factory=dict)

    def register(self, name: str, graph_format: GraphFormat) -> None:
        """Register ``graph_format`` under ``name``."""

        self.registry[name.lower()] = graph_format

    def get(self, name: str) -> GraphFormat:
        """Return the format registered under ``name``."""

        try:
            return self.registry[name.lower()]
        except KeyError:
            raise KeyError(f"Unknown graph format: {name}") from None

    def read(self, source: Any, *, format: str = "graphml", network: bool = False) -> Network:
        """Read ``source`` with the plain or network reader of ``format``."""

        graph_format = self.get(format)
        reader = graph_format.read_net if network else graph_format.read
        return reader(source)

    def write(self, sink: Any, value: Network, *, format: str = "graphml") -> bool:
        """Write ``value``, keeping its properties when it has any."""

        graph_format = self.get(format)
        writer = graph_format.write_net if value.has_properties() else graph_format.write
        return writer(sink, value)


def _default_registry() -> FormatRegistry:
    registry = FormatRegistry()
    registry.register(
        "graphml",
        GraphFormat(
            read=graphml.read_graphml,
            write=graphml.write_graphml,
            read_net=graphml.read_net_graphml,
            write_net=graphml.write_net_graphml,
        ),
    )
    return registry


DEFAULT_REGISTRY = _default_registry()


def read_graph(source: Any, *, format: str = "graphml", network: bool = False) -> Network:
    """Read ``source`` through :data:`DEFAULT_REGISTRY`."""

    return DEFAULT_REGISTRY.read(source, format=format, network=network)


def write_graph(sink: Any, value: Network, *, format: str = "graphml") -> bool:
    """Write ``value`` through :data:`DEFAULT_REGISTRY`."""

    return DEFAULT_REGISTRY.write(sink, value, format=format)


__all__ = [
    "DEFAULT_REGISTRY",
    "FormatRegistry",
    "GraphFormat",
    "read_graph",
    "write_graph",
]
