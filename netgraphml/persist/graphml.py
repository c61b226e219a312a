"""Read and write networks in GraphML format.

Two flavours are supported.  The plain functions (:func:`read_graphml`,
:func:`write_graphml`) handle topology only.  The network functions
(:func:`read_net_graphml`, :func:`write_net_graphml`) also carry the typed
graph, vertex and edge properties declared through GraphML ``key``
elements.

Vertices are numbered ``1..n`` in ``node`` document order on read and are
written back with the ids ``n0..n{n-1}``.  Nested graphs, hyperedges and
ports are not supported.

.. warning::

    The parser is the standard :mod:`xml.etree.ElementTree`, which is not
    hardened against malicious input.  Only parse GraphML files you trust.
"""
from __future__ import annotations

import io
import logging
import os
import xml.etree.ElementTree as ET
from types import MappingProxyType
from typing import IO, Any, Hashable, Iterator, List, Mapping, Tuple, Union

from ..config import get_indent
from ..errors import StructuralError
from ..graph.ids import NodeIndex, external_id, local_name, required_attribute
from ..graph.store import Edge, Network, PropertyMap
from .schema import KeySchema, KeySpec, Scope, extract_key_schema, synthesize_key_schema
from .types import format_as, parse_value

LOGGER = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO[Any]]

ENCODING = "utf-8"
XML_DECLARATION = f"<?xml version='1.0' encoding='{ENCODING}'?>\n"

GRAPHML_ROOT_ATTRIBUTES: Mapping[str, str] = MappingProxyType(
    {
        "xmlns": "http://graphml.graphdrawing.org/xmlns",
        "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
        "xsi:schemaLocation": "http://graphml.graphdrawing.org/xmlns/1.0/graphml.xsd",
    }
)

MISSING_POLICIES = ("omit", "error")


# -- reading --------------------------------------------------------------


def _graph_element(root: ET.Element) -> ET.Element:
    if local_name(root.tag) != "graphml":
        raise StructuralError(f"Not a GraphML document: root element is <{local_name(root.tag)}>")
    for child in root:
        if local_name(child.tag) == "graph":
            return child
    raise StructuralError("GraphML document has no <graph> element")


def _is_directed(graph_element: ET.Element) -> bool:
    return graph_element.get("edgedefault", "undirected") == "directed"


def _skip_unrecognized(element: ET.Element) -> None:
    LOGGER.warning("Skipping unknown GraphML element <%s>", local_name(element.tag))


def _edge_endpoints(element: ET.Element) -> Tuple[str, str]:
    return required_attribute(element, "source"), required_attribute(element, "target")


def _data_items(
    element: ET.Element, schema: KeySchema, scope: Scope
) -> Iterator[Tuple[KeySpec, str]]:
    """Yield the resolved key and raw text of each ``data`` child."""

    for child in element:
        if local_name(child.tag) != "data":
            continue
        yield schema.resolve(scope, required_attribute(child, "key")), child.text or ""


def parse_graphml_tree(root: ET.Element) -> Network:
    """Build a topology-only :class:`Network` from a parsed ``graphml`` root."""

    graph_element = _graph_element(root)
    nodes = NodeIndex()
    pending: List[Tuple[str, str]] = []
    for child in graph_element:
        tag = local_name(child.tag)
        if tag == "node":
            nodes.assign(required_attribute(child, "id"))
        elif tag == "edge":
            # Endpoints may reference nodes declared later in the document.
            pending.append(_edge_endpoints(child))
        else:
            _skip_unrecognized(child)

    network = Network.with_vertices(len(nodes), directed=_is_directed(graph_element))
    for source, target in pending:
        network.add_edge(nodes.resolve(source), nodes.resolve(target))
    LOGGER.debug("Read GraphML network with %d vertices and %d edges", network.nv(), network.ne())
    return network


def parse_net_graphml_tree(root: ET.Element) -> Network:
    """Build an attributed :class:`Network` from a parsed ``graphml`` root."""

    graph_element = _graph_element(root)
    schema = extract_key_schema(root)
    nodes = NodeIndex.from_graph_element(graph_element)

    network = Network.with_vertices(len(nodes), directed=_is_directed(graph_element))
    vertex_tables = {
        spec.id: network.add_vertex_property(spec.name, spec.kind)
        for spec in schema.specs(Scope.VERTEX)
    }
    edge_tables = {
        spec.id: network.add_edge_property(spec.name, spec.kind)
        for spec in schema.specs(Scope.EDGE)
    }

    for child in graph_element:
        tag = local_name(child.tag)
        if tag == "node":
            index = nodes.resolve(required_attribute(child, "id"))
            for spec, text in _data_items(child, schema, Scope.VERTEX):
                vertex_tables[spec.id][index] = parse_value(spec.kind, text)
        elif tag == "edge":
            source, target = _edge_endpoints(child)
            _, edge = network.add_edge(nodes.resolve(source), nodes.resolve(target))
            for spec, text in _data_items(child, schema, Scope.EDGE):
                edge_tables[spec.id][edge] = parse_value(spec.kind, text)
        elif tag == "data":
            spec = schema.resolve(Scope.GRAPH, required_attribute(child, "key"))
            network.set_graph_property(spec.name, parse_value(spec.kind, child.text or ""))
        else:
            _skip_unrecognized(child)

    LOGGER.debug(
        "Read GraphML network with %d vertices, %d edges and %d keys",
        network.nv(),
        network.ne(),
        len(schema),
    )
    return network


def read_graphml(source: Source) -> Network:
    """Read a topology-only network from a path or file object."""

    return parse_graphml_tree(ET.parse(source).getroot())


def read_net_graphml(source: Source) -> Network:
    """Read an attributed network from a path or file object."""

    return parse_net_graphml_tree(ET.parse(source).getroot())


def read_graphml_string(text: str, *, network_mode: bool = False) -> Network:
    """Parse GraphML held in ``text``."""

    root = ET.fromstring(text)
    return parse_net_graphml_tree(root) if network_mode else parse_graphml_tree(root)


# -- writing --------------------------------------------------------------


def _root_element() -> ET.Element:
    return ET.Element("graphml", dict(GRAPHML_ROOT_ATTRIBUTES))


def _graph_subelement(root: ET.Element, network: Network) -> ET.Element:
    edgedefault = "directed" if network.is_directed() else "undirected"
    return ET.SubElement(root, "graph", {"edgedefault": edgedefault})


def _edge_subelement(graph_element: ET.Element, edge: Edge) -> ET.Element:
    return ET.SubElement(
        graph_element,
        "edge",
        {"source": external_id(edge.source), "target": external_id(edge.target)},
    )


def _data_subelement(parent: ET.Element, spec: KeySpec, value: Any) -> None:
    ET.SubElement(parent, "data", {"key": spec.id}).text = format_as(spec.kind, value)


def _add_entity_data(
    parent: ET.Element,
    tables: Mapping[str, PropertyMap],
    specs: Mapping[str, KeySpec],
    entity: Hashable,
    missing: str,
) -> None:
    for name, prop in tables.items():
        if entity not in prop:
            if missing == "error":
                raise StructuralError(f"Property {name!r} has no value for {entity!r}")
            continue
        _data_subelement(parent, specs[name], prop[entity])


def build_graphml_tree(network: Network) -> ET.Element:
    """Return the topology-only GraphML tree for ``network``."""

    root = _root_element()
    graph_element = _graph_subelement(root, network)
    for index in network.vertices():
        ET.SubElement(graph_element, "node", {"id": external_id(index)})
    for edge in network.edges():
        _edge_subelement(graph_element, edge)
    return root


def build_net_graphml_tree(network: Network, *, missing: str = "omit") -> ET.Element:
    """Return the attributed GraphML tree for ``network``.

    ``missing`` selects what happens when a declared vertex or edge property
    has no value for some entity: ``"omit"`` leaves the ``data`` element
    out, ``"error"`` raises :class:`StructuralError`.
    """

    if missing not in MISSING_POLICIES:
        raise ValueError(f"missing must be one of {MISSING_POLICIES}, got {missing!r}")

    schema = synthesize_key_schema(network)
    root = _root_element()
    root.extend(spec.to_element() for spec in schema)

    graph_element = _graph_subelement(root, network)
    graph_keys = schema.specs_by_name(Scope.GRAPH)
    for name, value in network.graph_properties.items():
        _data_subelement(graph_element, graph_keys[name], value)

    vertex_keys = schema.specs_by_name(Scope.VERTEX)
    for index in network.vertices():
        node = ET.SubElement(graph_element, "node", {"id": external_id(index)})
        _add_entity_data(node, network.vertex_properties, vertex_keys, index, missing)

    edge_keys = schema.specs_by_name(Scope.EDGE)
    for edge in network.edges():
        element = _edge_subelement(graph_element, edge)
        _add_entity_data(element, network.edge_properties, edge_keys, edge, missing)

    LOGGER.debug(
        "Built GraphML tree with %d vertices, %d edges and %d keys",
        network.nv(),
        network.ne(),
        len(schema),
    )
    return root


def _serialize(root: ET.Element) -> str:
    ET.indent(root, space=get_indent())
    body = ET.tostring(root, encoding="unicode")
    # ElementTree leaves carriage returns in text content unescaped, and a
    # conforming parser folds a raw "\r\n" into "\n".
    return XML_DECLARATION + body.replace("\r", "&#13;")


def _dump(root: ET.Element, sink: Source) -> bool:
    text = _serialize(root)
    if isinstance(sink, io.TextIOBase):
        sink.write(text)
    elif hasattr(sink, "write"):
        sink.write(text.encode(ENCODING))
    else:
        with open(sink, "w", encoding=ENCODING, newline="\n") as handle:
            handle.write(text)
    return True


def write_graphml(sink: Source, network: Network) -> bool:
    """Write the topology of ``network`` to a path or file object."""

    return _dump(build_graphml_tree(network), sink)


def write_net_graphml(sink: Source, network: Network, *, missing: str = "omit") -> bool:
    """Write ``network`` and its properties to a path or file object."""

    return _dump(build_net_graphml_tree(network, missing=missing), sink)


def graphml_string(network: Network, *, network_mode: bool = False) -> str:
    """Return ``network`` serialised as GraphML text."""

    root = build_net_graphml_tree(network) if network_mode else build_graphml_tree(network)
    return _serialize(root)


__all__ = [
    "GRAPHML_ROOT_ATTRIBUTES",
    "build_graphml_tree",
    "build_net_graphml_tree",
    "graphml_string",
    "parse_graphml_tree",
    "parse_net_graphml_tree",
    "read_graphml",
    "read_graphml_string",
    "read_net_graphml",
    "write_graphml",
    "write_net_graphml",
]
