import pytest

from mutagraph.graph.identity import IdentityAllocator


def test_ids_start_at_one_and_increase():
    alloc = IdentityAllocator()

    assert alloc.last_id == 0
    assert [alloc.next_id() for _ in range(3)] == [1, 2, 3]
    assert alloc.peek() == 4
    assert alloc.last_id == 3


def test_advance_past_never_moves_backwards():
    alloc = IdentityAllocator()
    alloc.advance_past(10)
    assert alloc.next_id() == 11

    alloc.advance_past(5)
    assert alloc.next_id() == 12


def test_copy_is_independent():
    alloc = IdentityAllocator()
    alloc.next_id()
    clone = alloc.copy()

    clone.next_id()
    assert alloc.last_id == 1
    assert clone.last_id == 2


def test_negative_start_rejected():
    with pytest.raises(ValueError):
        IdentityAllocator(start=-1)
