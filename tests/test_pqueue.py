import pytest

from schedsim.pqueue import MinPriorityQueue


def test_pops_smallest_key_first():
    q = MinPriorityQueue(key=lambda x: x[1], items=[("a", 3), ("b", 1), ("c", 2)])
    assert [q.pop()[0] for _ in range(3)] == ["b", "c", "a"]
    assert not q


def test_equal_keys_pop_in_insertion_order():
    q = MinPriorityQueue(key=lambda x: 0)
    for item in [{"n": 1}, {"n": 2}, {"n": 3}]:
        q.push(item)
    assert [q.pop()["n"] for _ in range(3)] == [1, 2, 3]


def test_len_tracks_pushes_and_pops():
    q = MinPriorityQueue(key=abs, items=[-5, 2])
    assert len(q) == 2
    assert q.pop() == 2
    assert len(q) == 1


def test_empty_queue_raises():
    q = MinPriorityQueue(key=lambda x: x)
    with pytest.raises(IndexError):
        q.pop()
