import pytest

from mutagraph.errors import DuplicateId, LengthMismatch, UnknownId
from mutagraph.graph.graph_schema import Edge, Node
from mutagraph.graph.graph_store import GraphStore


def _store_with_nodes(n: int) -> GraphStore:
    store = GraphStore()
    for i in range(1, n + 1):
        store.insert_node(Node.create(id=i))
    return store


def test_node_table_roundtrip_and_order():
    store = _store_with_nodes(3)

    assert store.node_ids() == [1, 2, 3]
    assert store.get_node(2).label == "2"
    assert [n.id for n in store.get_nodes()] == [1, 2, 3]

    with pytest.raises(DuplicateId):
        store.insert_node(Node.create(id=2))

    with pytest.raises(UnknownId):
        store.get_node(9)


def test_edges_require_present_endpoints():
    store = _store_with_nodes(2)

    with pytest.raises(UnknownId) as exc:
        store.insert_edge(Edge.create(id=1, source=1, target=5))
    assert exc.value.identifier == 5
    assert store.edge_count() == 0


def test_parallel_edges_are_independent():
    store = _store_with_nodes(2)
    store.insert_edge(Edge.create(id=1, source=1, target=2, rel="a"))
    store.insert_edge(Edge.create(id=2, source=1, target=2, rel="b"))

    between = store.edges_between(1, 2)
    assert [e.id for e in between] == [1, 2]
    assert [e.rel for e in between] == ["a", "b"]
    assert store.edges_between(2, 1) == []

    assert store.remove_edge(1) is True
    assert store.remove_edge(1) is False
    assert [e.id for e in store.edges_between(1, 2)] == [2]


def test_remove_node_cascades_to_incident_edges():
    store = _store_with_nodes(3)
    store.insert_edge(Edge.create(id=1, source=1, target=2))
    store.insert_edge(Edge.create(id=2, source=2, target=3))
    store.insert_edge(Edge.create(id=3, source=3, target=1))
    store.insert_edge(Edge.create(id=4, source=2, target=2))

    assert [e.id for e in store.incident_edges(2)] == [1, 2, 4]

    assert store.remove_node(2) is True
    assert store.edge_ids() == [3]
    assert store.remove_node(2) is False
    assert store.integrity_violations() == []


def test_replace_node_updates_label_index():
    store = _store_with_nodes(1)
    store.replace_node(store.get_node(1).with_attribute("label", "renamed"))

    assert store.labels.lookup("renamed") == {1}
    assert "1" not in store.labels


def test_assign_attribute_broadcast_and_positional():
    store = _store_with_nodes(3)

    assert store.assign_attribute("node", "color", [1, 3], "red") == 2
    assert store.get_node(1).get("color") == "red"
    assert store.get_node(2).get("color") is None

    store.assign_attribute("node", "size", [1, 2, 3], [10, 20, 30])
    assert [n.get("size") for n in store.get_nodes()] == [10, 20, 30]


def test_assign_attribute_validates_before_writing():
    store = _store_with_nodes(3)

    with pytest.raises(LengthMismatch) as exc:
        store.assign_attribute("node", "size", [1, 2, 3], [1, 2])
    assert (exc.value.expected, exc.value.actual) == (3, 2)

    with pytest.raises(UnknownId):
        store.assign_attribute("node", "size", [1, 7], 5)

    assert all(not n.has("size") for n in store.get_nodes())


def test_replace_edge_keeps_endpoints():
    store = _store_with_nodes(2)
    store.insert_edge(Edge.create(id=1, source=1, target=2))

    store.replace_edge(store.get_edge(1).with_attribute("rel", "knows"))
    assert store.get_edge(1).rel == "knows"

    with pytest.raises(ValueError):
        store.replace_edge(Edge.create(id=1, source=2, target=1))


def test_clone_is_isolated():
    store = _store_with_nodes(2)
    store.insert_edge(Edge.create(id=1, source=1, target=2))

    clone = store.clone()
    clone.remove_node(1)

    assert store.node_count() == 2
    assert store.edge_count() == 1
    assert store.labels.lookup("1") == {1}
    assert clone.node_count() == 1
    assert clone.edge_count() == 0
    assert set(vars(clone)) == {"_graph", "_edges", "labels"}
