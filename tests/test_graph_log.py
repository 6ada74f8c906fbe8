from mutagraph.config.settings import StoreConfig
from mutagraph.graph.graph_log import GraphLog
from mutagraph.graph.graph_mutator import GraphMutator


def test_record_and_filter():
    log = GraphLog()
    log.record("add_node", node_count=1, edge_count=0)
    log.record("add_node", node_count=2, edge_count=0)
    log.record("add_edge", node_count=2, edge_count=1)

    assert [a.version for a in log.all()] == [1, 2, 3]
    assert len(log.filter(function="add_node")) == 2

    payload = log.last().to_dict()
    assert payload["function"] == "add_edge"
    assert payload["edge_count"] == 1
    assert isinstance(payload["timestamp"], str)


def test_limit_drops_oldest_but_keeps_counting():
    log = GraphLog(limit=2)
    for i in range(5):
        log.record("add_node", node_count=i + 1, edge_count=0)

    assert len(log) == 2
    assert [a.version for a in log.all()] == [4, 5]
    assert log.version == 5


def test_zero_limit_disables_recording():
    graph = GraphMutator(StoreConfig(history_limit=0))
    graph.add_node()

    assert len(graph.history) == 0
    assert graph.history.last() is None
    assert graph.history.version == 1
