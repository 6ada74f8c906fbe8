import numpy as np
import pandas as pd
import pytest

from mutagraph.errors import AmbiguousLabel, UnknownId, UnknownLabel, UnresolvedAddress
from mutagraph.graph.address import AddressResolver, ById, ByLabel, parse_address
from mutagraph.graph.graph_schema import Node
from mutagraph.graph.graph_store import GraphStore


def _store(*labels: str) -> GraphStore:
    store = GraphStore()
    for i, label in enumerate(labels, start=1):
        store.insert_node(Node.create(id=i, label=label))
    return store


def test_parse_address_variants():
    assert parse_address(3) == ById(3)
    assert parse_address("3") == ById(3)
    assert parse_address(" 12 ") == ById(12)
    assert parse_address(np.int64(4)) == ById(4)
    assert parse_address("three") == ByLabel("three")
    assert parse_address("3a") == ByLabel("3a")
    assert parse_address(ByLabel("x")) == ByLabel("x")


@pytest.mark.parametrize("token", [True, 1.5, None, ["a"]])
def test_parse_address_rejects_other_types(token):
    with pytest.raises(TypeError):
        parse_address(token)


def test_label_and_id_resolve_to_same_node():
    resolver = AddressResolver(_store("one", "two"))

    assert resolver.resolve("two") == resolver.resolve(2) == 2


def test_unknown_id_and_label():
    resolver = AddressResolver(_store("one"))

    with pytest.raises(UnknownId) as exc:
        resolver.resolve(9)
    assert exc.value.identifier == 9

    with pytest.raises(UnknownLabel) as exc:
        resolver.resolve("nine")
    assert exc.value.label == "nine"


def test_ambiguous_label():
    resolver = AddressResolver(_store("dup", "dup", "solo"))

    with pytest.raises(AmbiguousLabel) as exc:
        resolver.resolve("dup")
    assert exc.value.node_ids == [1, 2]

    assert resolver.resolve("solo") == 3


def test_resolve_many_collects_every_failure():
    resolver = AddressResolver(_store("dup", "dup", "solo"))

    with pytest.raises(UnresolvedAddress) as exc:
        resolver.resolve_many(["solo", "dup", 42, "ghost"])

    kinds = [type(e) for e in exc.value.errors]
    assert kinds == [AmbiguousLabel, UnknownId, UnknownLabel]


def test_resolve_many_accepts_scalar_and_none():
    resolver = AddressResolver(_store("one", "two"))

    assert resolver.resolve_many("two") == [2]
    assert resolver.resolve_many(None) == []
    assert resolver.resolve_many([1, "two", 1]) == [1, 2, 1]


def test_default_label_is_reachable_as_id():
    store = GraphStore()
    store.insert_node(Node.create(id=5))

    assert AddressResolver(store).resolve("5") == 5


def test_whole_number_floats_address_by_id():
    assert parse_address(1.0) == ById(1)
    assert parse_address(np.float64(2.0)) == ById(2)

    for token in (1.5, float("nan")):
        with pytest.raises(TypeError):
            parse_address(token)


def test_resolve_many_unwraps_arrays_and_pandas():
    resolver = AddressResolver(_store("one", "two", "three"))

    assert resolver.resolve_many(np.array([1.0, 2.0])) == [1, 2]
    assert resolver.resolve_many(pd.Series([3, 1])) == [3, 1]
    assert resolver.resolve_many(pd.Index(["two"])) == [2]


def test_float_sources_wire_new_node(three_nodes):
    node_id = three_nodes.add_node(from_=[1.0, 2.0])

    assert three_nodes.get_edges() == [f"1->{node_id}", f"2->{node_id}"]

    with pytest.raises(UnresolvedAddress):
        three_nodes.add_node(from_=pd.Series([1, 9]))
