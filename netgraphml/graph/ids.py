"""Mapping between external GraphML node ids and dense vertex indices."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
from xml.etree.ElementTree import Element

from ..errors import StructuralError


def local_name(tag: str) -> str:
    """Return ``tag`` without its ``{namespace}`` prefix."""

    return tag.rsplit("}", 1)[-1]


def required_attribute(element: Element, name: str) -> str:
    """Return attribute ``name`` of ``element`` or raise :class:`StructuralError`."""

    value = element.get(name)
    if value is None:
        raise StructuralError(f"<{local_name(element.tag)}> is missing the '{name}' attribute")
    return value


def external_id(index: int) -> str:
    """Return the node id written for the 1-based vertex ``index``."""

    return f"n{index - 1}"


@dataclass
class NodeIndex:
    """Assign 1-based vertex indices to node ids in document order."""

    ids: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_graph_element(cls, graph_element: Element) -> "NodeIndex":
        """Index every ``node`` child of ``graph_element``."""

        index = cls()
        for child in graph_element:
            if local_name(child.tag) == "node":
                index.assign(required_attribute(child, "id"))
        return index

    def __len__(self) -> int:
        return len(self.ids)

    def assign(self, node_id: str) -> int:
        """Give ``node_id`` the next free index."""

        if node_id in self.ids:
            raise StructuralError(f"Duplicate node id: {node_id!r}")
        index = len(self.ids) + 1
        self.ids[node_id] = index
        return index

    def resolve(self, node_id: str) -> int:
        """Return the index previously assigned to ``node_id``."""

        try:
            return self.ids[node_id]
        except KeyError:
            raise StructuralError(f"Undeclared node id: {node_id!r}") from None


__all__ = ["NodeIndex", "external_id", "local_name", "required_attribute"]
