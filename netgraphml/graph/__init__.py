"""Graph subpackage containing the network container and node identity helpers."""

from .ids import NodeIndex, external_id
from .store import Edge, Network, PropertyMap

__all__ = [
    "Edge",
    "Network",
    "NodeIndex",
    "PropertyMap",
    "external_id",
]
