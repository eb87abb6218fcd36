"""Tests for the open-set structures — ordering, lookup and relaxation."""

import random

import pytest

from asyncastar.core.state import SearchNode, StateDescriptor
from asyncastar.frontier.binary_heap import BinaryHeapOpenSet
from asyncastar.frontier.sorted_list import SortedListOpenSet

OPEN_SETS = [BinaryHeapOpenSet, SortedListOpenSet]


def _node(identity, score, depth=0):
    """A node whose score is exactly *score* (heuristic makes up the rest)."""
    return SearchNode(StateDescriptor(identity), heuristic=score - depth, depth=depth)


@pytest.fixture(params=OPEN_SETS, ids=lambda cls: cls.__name__)
def open_set(request):
    return request.param()


def test_extraction_is_sorted(open_set):
    """1000 random scores come back out in non-decreasing order."""
    rng = random.Random(1234)
    for i in range(1000):
        open_set.insert(_node(i, rng.random()))

    scores = []
    node = open_set.extract_minimum()
    while node is not None:
        scores.append(node.score)
        node = open_set.extract_minimum()

    assert len(scores) == 1000
    assert scores == sorted(scores)
    assert len(open_set) == 0


def test_extract_from_empty(open_set):
    assert open_set.extract_minimum() is None
    assert not open_set


def test_ties_come_out_in_insertion_order(open_set):
    for name in ["a", "b", "c"]:
        open_set.insert(_node(name, 5))
    open_set.insert(_node("low", 1))

    order = [open_set.extract_minimum().identity for _ in range(4)]
    assert order == ["low", "a", "b", "c"]


def test_lookup_and_contains(open_set):
    node = _node("x", 3)
    open_set.insert(node)

    assert open_set.lookup("x") is node
    assert "x" in open_set
    assert open_set.lookup("y") is None
    assert "y" not in open_set

    open_set.extract_minimum()
    assert open_set.lookup("x") is None


def test_duplicate_identity_rejected(open_set):
    open_set.insert(_node("dup", 4))
    with pytest.raises(KeyError):
        open_set.insert(_node("dup", 2))
    assert len(open_set) == 1


def test_update_in_place_reorders(open_set):
    parent = _node("root", 0)
    open_set.insert(_node("a", 2, depth=2))
    open_set.insert(_node("b", 10, depth=10))

    relaxed = open_set.update_in_place("b", parent, heuristic=0.0, depth=1, score=1.0)

    assert relaxed.parent is parent
    assert relaxed.depth == 1
    assert len(open_set) == 2
    assert open_set.extract_minimum().identity == "b"
    assert open_set.extract_minimum().identity == "a"
    assert open_set.extract_minimum() is None


def test_update_in_place_queues_behind_equal_scores(open_set):
    open_set.insert(_node("a", 3, depth=3))
    open_set.insert(_node("b", 9, depth=9))
    open_set.update_in_place("b", None, heuristic=0.0, depth=3, score=3.0)

    assert [open_set.extract_minimum().identity for _ in range(2)] == ["a", "b"]


def test_update_requires_improvement(open_set):
    open_set.insert(_node("a", 4, depth=4))
    with pytest.raises(ValueError):
        open_set.update_in_place("a", None, heuristic=0.0, depth=4, score=4.0)
    with pytest.raises(KeyError):
        open_set.update_in_place("missing", None, heuristic=0.0, depth=0, score=0.0)


def test_heap_skips_stale_entries():
    """Repeated relaxation leaves one retrievable entry per identity."""
    heap = BinaryHeapOpenSet()
    heap.insert(_node("a", 10, depth=10))
    for depth in (8, 6, 4):
        heap.update_in_place("a", None, heuristic=0.0, depth=depth, score=float(depth))

    assert len(heap) == 1
    node = heap.extract_minimum()
    assert node.depth == 4
    assert heap.extract_minimum() is None


def test_implementations_agree():
    """Both structures yield the same identities in the same order."""
    rng = random.Random(99)
    scores = [rng.randint(0, 20) for _ in range(200)]
    orders = []
    for cls in OPEN_SETS:
        s = cls()
        for i, score in enumerate(scores):
            s.insert(_node(i, score, depth=score))
        for i in range(0, 200, 7):
            if s.lookup(i) is not None and s.lookup(i).depth > 0:
                s.update_in_place(i, None, heuristic=0.0, depth=0, score=0.0)
        orders.append([s.extract_minimum().identity for _ in range(len(s))])
    assert orders[0] == orders[1]
