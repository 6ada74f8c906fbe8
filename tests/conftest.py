from __future__ import annotations

import pytest

from mutagraph.config.settings import StoreConfig
from mutagraph.graph.graph_mutator import GraphMutator


@pytest.fixture()
def graph() -> GraphMutator:
    return GraphMutator()


@pytest.fixture()
def three_nodes(graph: GraphMutator) -> GraphMutator:
    graph.add_node(label="one")
    graph.add_node(label="two")
    graph.add_node(label="three")
    return graph


@pytest.fixture()
def first_policy_graph() -> GraphMutator:
    return GraphMutator(StoreConfig(delete_edge_policy="first"))
