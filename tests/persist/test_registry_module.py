"""Tests for :mod:`netgraphml.persist.registry`."""

from __future__ import annotations

import pytest

from netgraphml.graph.store import Network
from netgraphml.persist.registry import (
    DEFAULT_REGISTRY,
    FormatRegistry,
    GraphFormat,
    read_graph,
    write_graph,
)


def make_network(*, with_labels: bool) -> Network:
    network = Network.with_vertices(2, directed=True)
    network.add_edge(1, 2)
    if with_labels:
        labels = network.add_vertex_property("label", str)
        labels[1] = "source"
        labels[2] = "sink"
    return network


def test_default_registry_round_trips_through_paths(tmp_path):
    path = tmp_path / "labelled.graphml"
    network = make_network(with_labels=True)

    assert write_graph(path, network) is True

    plain = read_graph(path)
    attributed = read_graph(path, network=True)
    assert plain.same_topology(network)
    assert not plain.has_properties()
    assert attributed.vertex_property("label").values == {1: "source", 2: "sink"}


def test_write_graph_uses_plain_writer_without_properties(tmp_path):
    path = tmp_path / "plain.graphml"

    write_graph(path, make_network(with_labels=False))

    assert "<key" not in path.read_text(encoding="utf-8")


def test_registry_lookup_is_case_insensitive_and_rejects_unknown_names():
    assert DEFAULT_REGISTRY.get("GraphML") is DEFAULT_REGISTRY.get("graphml")

    with pytest.raises(KeyError, match="gexf"):
        DEFAULT_REGISTRY.get("gexf")
    with pytest.raises(KeyError):
        read_graph("unused.gexf", format="gexf")


def test_registry_dispatches_to_registered_callables():
    calls = []
    registry = FormatRegistry()
    registry.register(
        "memory",
        GraphFormat(
            read=lambda source: calls.append(("read", source)) or Network(),
            write=lambda sink, value: calls.append(("write", sink)) or True,
            read_net=lambda source: calls.append(("read_net", source)) or Network(),
            write_net=lambda sink, value: calls.append(("write_net", sink)) or True,
        ),
    )

    registry.read("a", format="memory")
    registry.read("b", format="memory", network=True)
    registry.write("c", make_network(with_labels=False), format="memory")
    registry.write("d", make_network(with_labels=True), format="memory")

    assert calls == [("read", "a"), ("read_net", "b"), ("write", "c"), ("write_net", "d")]
