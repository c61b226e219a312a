"""GraphML ``key`` schema handling.

The readers need the full key schema before any ``data`` element can be
decoded, and the writers need every key declared before the body is emitted.
Both directions share :class:`KeySchema`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator
from xml.etree.ElementTree import Element

from ..errors import StructuralError
from ..graph.ids import local_name, required_attribute
from ..graph.store import Network
from .types import ValueKind, from_attr_type, kind_of, resolve_kind

LOGGER = logging.getLogger(__name__)


class Scope(str, Enum):
    """Attribute scopes; the member value is the ``for`` attribute."""

    GRAPH = "graph"
    VERTEX = "node"
    EDGE = "edge"


@dataclass(frozen=True)
class KeySpec:
    """One declared attribute key."""

    scope: Scope
    id: str
    name: str
    kind: ValueKind

    def to_element(self) -> Element:
        return Element(
            "key",
            {
                "id": self.id,
                "for": self.scope.value,
                "attr.name": self.name,
                "attr.type": self.kind.value,
            },
        )


@dataclass
class KeySchema:
    """Per-scope key tables, indexed by key id in declaration order."""

    tables: Dict[Scope, Dict[str, KeySpec]] = field(
        default_factory=lambda: {scope: {} for scope in Scope}
    )

    def declare(self, spec: KeySpec) -> None:
        table = self.tables[spec.scope]
        if spec.id in table:
            raise StructuralError(f"Key {spec.id!r} declared twice for '{spec.scope.value}'")
        if any(existing.name == spec.name for existing in table.values()):
            raise StructuralError(
                f"Attribute {spec.name!r} declared twice for '{spec.scope.value}'"
            )
        table[spec.id] = spec

    def resolve(self, scope: Scope, key_id: str) -> KeySpec:
        """Return the key ``key_id`` declared for ``scope``."""

        try:
            return self.tables[scope][key_id]
        except KeyError:
            raise StructuralError(
                f"Undeclared key {key_id!r} for '{scope.value}' data"
            ) from None

    def specs(self, scope: Scope) -> Iterator[KeySpec]:
        return iter(self.tables[scope].values())

    def __iter__(self) -> Iterator[KeySpec]:
        for scope in Scope:
            yield from self.specs(scope)

    def __len__(self) -> int:
        return sum(len(table) for table in self.tables.values())

    def specs_by_name(self, scope: Scope) -> Dict[str, KeySpec]:
        """Return ``attr.name -> key`` for ``scope``."""

        return {spec.name: spec for spec in self.specs(scope)}


_SCOPES_BY_FOR = {scope.value: scope for scope in Scope}


def extract_key_schema(root: Element) -> KeySchema:
    """Collect the ``key`` children of a ``graphml`` root element."""

    schema = KeySchema()
    for child in root:
        if local_name(child.tag) != "key":
            continue
        key_id = required_attribute(child, "id")
        scope = _SCOPES_BY_FOR.get(child.get("for", "all"))
        if scope is None:
            LOGGER.warning(
                "Skipping key %r declared for unsupported scope %r", key_id, child.get("for")
            )
            continue
        schema.declare(
            KeySpec(
                scope=scope,
                id=key_id,
                name=required_attribute(child, "attr.name"),
                kind=from_attr_type(required_attribute(child, "attr.type")),
            )
        )
    LOGGER.debug("Extracted %d GraphML keys", len(schema))
    return schema


def synthesize_key_schema(network: Network) -> KeySchema:
    """Assign ``key0``, ``key1``, ... to every property of ``network``.

    Graph properties come first, then vertex and edge tables, each in its
    own declaration order.
    """

    schema = KeySchema()

    def declare(scope: Scope, name: str, kind: ValueKind) -> None:
        schema.declare(KeySpec(scope=scope, id=f"key{len(schema)}", name=name, kind=kind))

    for name, value in network.graph_properties.items():
        declare(Scope.GRAPH, name, kind_of(value))
    for name, prop in network.vertex_properties.items():
        declare(Scope.VERTEX, name, resolve_kind(prop.value_type))
    for name, prop in network.edge_properties.items():
        declare(Scope.EDGE, name, resolve_kind(prop.value_type))
    return schema


__all__ = [
    "KeySchema",
    "KeySpec",
    "Scope",
    "extract_key_schema",
    "synthesize_key_schema",
]
