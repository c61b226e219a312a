"""Tests for :mod:`netgraphml.persist.schema`."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

import pytest

from netgraphml.errors import StructuralError, UnsupportedTypeKind
from netgraphml.graph.store import Network
from netgraphml.persist.schema import (
    KeySpec,
    Scope,
    extract_key_schema,
    synthesize_key_schema,
)
from netgraphml.persist.types import ValueKind


def make_root(keys: str) -> ET.Element:
    return ET.fromstring(
        f'<graphml xmlns="http://graphml.graphdrawing.org/xmlns">{keys}'
        '<graph edgedefault="directed"/></graphml>'
    )


def test_extract_key_schema_fills_scope_tables():
    root = make_root(
        '<key id="g0" for="graph" attr.name="title" attr.type="string"/>'
        '<key id="v0" for="node" attr.name="color" attr.type="string"/>'
        '<key id="v1" for="node" attr.name="size" attr.type="long"/>'
        '<key id="e0" for="edge" attr.name="weight" attr.type="float"/>'
    )

    schema = extract_key_schema(root)

    assert len(schema) == 4
    assert schema.resolve(Scope.GRAPH, "g0") == KeySpec(Scope.GRAPH, "g0", "title", ValueKind.STRING)
    assert [spec.name for spec in schema.specs(Scope.VERTEX)] == ["color", "size"]
    assert schema.resolve(Scope.VERTEX, "v1").kind is ValueKind.INT
    assert schema.resolve(Scope.EDGE, "e0").kind is ValueKind.DOUBLE


def test_extract_key_schema_resolves_per_scope():
    schema = extract_key_schema(
        make_root('<key id="k" for="node" attr.name="color" attr.type="string"/>')
    )

    with pytest.raises(StructuralError, match="'k'"):
        schema.resolve(Scope.EDGE, "k")


def test_extract_key_schema_skips_unsupported_scopes(caplog):
    root = make_root(
        '<key id="a0" for="all" attr.name="label" attr.type="string"/>'
        '<key id="p0" attr.name="port" attr.type="string"/>'
    )

    with caplog.at_level(logging.WARNING):
        schema = extract_key_schema(root)

    assert len(schema) == 0
    assert "a0" in caplog.text and "p0" in caplog.text


def test_extract_key_schema_rejects_duplicates():
    with pytest.raises(StructuralError):
        extract_key_schema(
            make_root(
                '<key id="v0" for="node" attr.name="a" attr.type="int"/>'
                '<key id="v0" for="node" attr.name="b" attr.type="int"/>'
            )
        )
    with pytest.raises(StructuralError):
        extract_key_schema(
            make_root(
                '<key id="v0" for="node" attr.name="a" attr.type="int"/>'
                '<key id="v1" for="node" attr.name="a" attr.type="int"/>'
            )
        )


def test_extract_key_schema_allows_same_id_in_different_scopes():
    schema = extract_key_schema(
        make_root(
            '<key id="d0" for="node" attr.name="a" attr.type="int"/>'
            '<key id="d0" for="edge" attr.name="a" attr.type="double"/>'
        )
    )
    assert schema.resolve(Scope.EDGE, "d0").kind is ValueKind.DOUBLE


def test_extract_key_schema_validates_declarations():
    with pytest.raises(UnsupportedTypeKind):
        extract_key_schema(make_root('<key id="v0" for="node" attr.name="a" attr.type="date"/>'))
    with pytest.raises(StructuralError, match="attr.name"):
        extract_key_schema(make_root('<key id="v0" for="node" attr.type="int"/>'))


def test_synthesize_key_schema_orders_graph_vertex_edge():
    network = Network.with_vertices(2)
    network.add_edge_property("weight", float)
    network.add_vertex_property("label", str)
    network.add_vertex_property("pos", list)
    network.set_graph_property("version", 3)

    schema = synthesize_key_schema(network)

    assert [(spec.id, spec.scope, spec.name, spec.kind) for spec in schema] == [
        ("key0", Scope.GRAPH, "version", ValueKind.INT),
        ("key1", Scope.VERTEX, "label", ValueKind.STRING),
        ("key2", Scope.VERTEX, "pos", ValueKind.VECTOR_DOUBLE),
        ("key3", Scope.EDGE, "weight", ValueKind.DOUBLE),
    ]
    assert {name: spec.id for name, spec in schema.specs_by_name(Scope.VERTEX).items()} == {
        "label": "key1",
        "pos": "key2",
    }


def test_synthesize_key_schema_rejects_unsupported_types():
    network = Network.with_vertices(1)
    network.add_vertex_property("blob", bytes)
    with pytest.raises(UnsupportedTypeKind):
        synthesize_key_schema(network)

    network = Network.with_vertices(1)
    network.set_graph_property("origin", complex(0, 1))
    with pytest.raises(UnsupportedTypeKind):
        synthesize_key_schema(network)


def test_key_spec_to_element():
    element = KeySpec(Scope.EDGE, "key4", "weight", ValueKind.DOUBLE).to_element()
    assert element.tag == "key"
    assert element.attrib == {
        "id": "key4",
        "for": "edge",
        "attr.name": "weight",
        "attr.type": "double",
    }
