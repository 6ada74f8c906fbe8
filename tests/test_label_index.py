from mutagraph.graph.label_index import LabelIndex


def test_lookup_add_discard():
    index = LabelIndex()
    index.add("a", 1)
    index.add("a", 2)
    index.add("b", 3)

    assert index.lookup("a") == {1, 2}
    assert index.duplicates() == {"a": (1, 2)}

    index.discard("a", 1)
    assert index.lookup("a") == {2}
    assert index.duplicates() == {}

    index.discard("b", 3)
    assert "b" not in index
    assert index.lookup("b") == set()


def test_relabel_moves_id():
    index = LabelIndex()
    index.add("old", 7)

    index.relabel(7, "old", "new")

    assert "old" not in index
    assert index.lookup("new") == {7}


def test_lookup_returns_copy():
    index = LabelIndex()
    index.add("a", 1)

    found = index.lookup("a")
    found.add(99)

    assert index.lookup("a") == {1}


def test_discard_unknown_is_noop():
    index = LabelIndex()
    index.discard("missing", 1)
    assert len(index) == 0
