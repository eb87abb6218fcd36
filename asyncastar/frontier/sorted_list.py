"""
SortedListOpenSet — a plain ascending list.

O(n) insertion and relaxation, O(1)-ish extraction.  Fine for small
frontiers and easy to reason about; use BinaryHeapOpenSet for anything
larger.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Hashable

from asyncastar.core.state import SearchNode
from asyncastar.frontier.interface import OpenSetInterface


class SortedListOpenSet(OpenSetInterface):
    """Naive sorted list kept in step with an identity index."""

    def __init__(self) -> None:
        self._scores: list[float] = []
        self._nodes: list[SearchNode] = []
        self._index: dict[Hashable, SearchNode] = {}

    def insert(self, node: SearchNode) -> None:
        self._check_absent(self.lookup(node.identity), node)
        # bisect_right places the node after every equal score (FIFO ties)
        pos = bisect_right(self._scores, node.score)
        self._scores.insert(pos, node.score)
        self._nodes.insert(pos, node)
        self._index[node.identity] = node

    def extract_minimum(self) -> SearchNode | None:
        if not self._nodes:
            return None
        self._scores.pop(0)
        node = self._nodes.pop(0)
        del self._index[node.identity]
        return node

    def lookup(self, identity: Hashable) -> SearchNode | None:
        return self._index.get(identity)

    def update_in_place(
        self,
        identity: Hashable,
        parent: SearchNode | None,
        heuristic: float,
        depth: int,
        score: float,
    ) -> SearchNode:
        node = self._check_relaxation(self.lookup(identity), identity, depth)
        pos = next(i for i, held in enumerate(self._nodes) if held is node)
        del self._scores[pos]
        del self._nodes[pos]
        del self._index[identity]
        node.relax(parent, heuristic, depth, score)
        self.insert(node)
        return node

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"SortedListOpenSet(size={len(self)})"
