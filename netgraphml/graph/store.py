"""In-memory NetworkX based container for attributed networks."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterator, Optional, Tuple

import networkx as nx


@dataclass(frozen=True, order=True)
class Edge:
    """Edge handle between two 1-based vertex indices."""

    source: int
    target: int

    def reverse(self) -> "Edge":
        return Edge(self.target, self.source)


@dataclass
class PropertyMap:
    """Typed per-entity values for one named vertex or edge property.

    ``key_of`` maps every lookup key to the form the owning container uses,
    so equivalent keys address the same value.
    """

    value_type: Any
    values: Dict[Hashable, Any] = field(default_factory=dict)
    key_of: Optional[Callable[[Any], Hashable]] = field(default=None, repr=False, compare=False)

    def _key(self, key: Any) -> Hashable:
        return key if self.key_of is None else self.key_of(key)

    def __getitem__(self, key: Hashable) -> Any:
        return self.values[self._key(key)]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        self.values[self._key(key)] = value

    def __contains__(self, key: object) -> bool:
        return self._key(key) in self.values

    def __len__(self) -> int:
        return len(self.values)

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self.values.get(self._key(key), default)


@dataclass
class Network:
    """Lightweight wrapper around :class:`networkx.Graph`/:class:`networkx.DiGraph`.

    Vertices are the contiguous integers ``1..n`` fixed at construction.
    Property tables live beside the topology, one dictionary per scope, and
    keep their declaration order.
    """

    graph: nx.Graph = field(default_factory=nx.Graph)
    graph_properties: Dict[str, Any] = field(default_factory=dict)
    vertex_properties: Dict[str, PropertyMap] = field(default_factory=dict)
    edge_properties: Dict[str, PropertyMap] = field(default_factory=dict)

    @classmethod
    def with_vertices(cls, count: int, *, directed: bool = False) -> "Network":
        """Return an edgeless network with ``count`` vertices."""

        graph: nx.Graph = nx.DiGraph() if directed else nx.Graph()
        graph.add_nodes_from(range(1, count + 1))
        return cls(graph=graph)

    # -- topology ---------------------------------------------------------

    def is_directed(self) -> bool:
        return self.graph.is_directed()

    def nv(self) -> int:
        """Number of vertices."""

        return self.graph.number_of_nodes()

    def ne(self) -> int:
        """Number of edges."""

        return self.graph.number_of_edges()

    def vertices(self) -> range:
        return range(1, self.nv() + 1)

    def edge(self, source: int, target: int) -> Edge:
        """Return the handle the container uses for ``source``-``target``."""

        if self.is_directed() or source <= target:
            return Edge(source, target)
        return Edge(target, source)

    def edges(self) -> Iterator[Edge]:
        """Iterate over edge handles in the container's natural order."""

        for source, target in self.graph.edges():
            yield self.edge(source, target)

    def has_edge(self, source: int, target: int) -> bool:
        return self.graph.has_edge(source, target)

    def add_edge(self, source: int, target: int) -> Tuple[bool, Edge]:
        """Insert an edge and return ``(added, handle)``.

        ``added`` is ``False`` when the container already holds the edge.
        """

        for vertex in (source, target):
            if vertex not in self.graph:
                raise ValueError(f"Vertex {vertex} is not in 1..{self.nv()}")
        handle = self.edge(source, target)
        if self.graph.has_edge(source, target):
            return False, handle
        self.graph.add_edge(source, target)
        return True, handle

    def same_topology(self, other: "Network") -> bool:
        """Return whether ``other`` has the same vertices and adjacency."""

        if self.is_directed() != other.is_directed():
            return False
        if self.nv() != other.nv() or self.ne() != other.ne():
            return False
        return all(
            set(self.graph.adj[vertex]) == set(other.graph.adj[vertex])
            for vertex in self.vertices()
        )

    # -- properties -------------------------------------------------------

    def has_properties(self) -> bool:
        return bool(self.graph_properties or self.vertex_properties or self.edge_properties)

    def set_graph_property(self, name: str, value: Any) -> None:
        self.graph_properties[name] = value

    def graph_property(self, name: str) -> Any:
        return self.graph_properties[name]

    def add_vertex_property(self, name: str, value_type: Any) -> PropertyMap:
        """Declare the vertex property ``name`` holding ``value_type`` values."""

        prop = PropertyMap(value_type=value_type)
        self.vertex_properties[name] = prop
        return prop

    def vertex_property(self, name: str) -> Optional[PropertyMap]:
        return self.vertex_properties.get(name)

    def add_edge_property(self, name: str, value_type: Any) -> PropertyMap:
        """Declare the edge property ``name`` holding ``value_type`` values."""

        prop = PropertyMap(value_type=value_type, key_of=self._edge_key)
        self.edge_properties[name] = prop
        return prop

    def edge_property(self, name: str) -> Optional[PropertyMap]:
        return self.edge_properties.get(name)

    def _edge_key(self, key: Any) -> Any:
        if isinstance(key, Edge):
            return self.edge(key.source, key.target)
        return key
