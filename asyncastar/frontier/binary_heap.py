"""
BinaryHeapOpenSet — heapq-backed open set with an identity index.

Entries are ``[score, sequence, node]`` lists.  The sequence number is a
monotonically increasing counter, which gives FIFO ordering among equal
scores and guarantees nodes themselves are never compared.

Decrease-key uses lazy deletion: the stale entry is marked removed and a
fresh entry is pushed.  Removed entries are skipped on extraction.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Hashable
from typing import Any

from asyncastar.core.state import SearchNode
from asyncastar.frontier.interface import OpenSetInterface

_REMOVED = None  # placeholder for an invalidated entry's node


class BinaryHeapOpenSet(OpenSetInterface):
    """O(log n) insert / extract / relax."""

    def __init__(self) -> None:
        self._heap: list[list[Any]] = []
        self._entries: dict[Hashable, list[Any]] = {}
        self._counter = itertools.count()

    # ── Public API ─────────────────────────────────────────────────

    def insert(self, node: SearchNode) -> None:
        self._check_absent(self.lookup(node.identity), node)
        self._push(node)

    def extract_minimum(self) -> SearchNode | None:
        while self._heap:
            _score, _seq, node = heapq.heappop(self._heap)
            if node is not _REMOVED:
                del self._entries[node.identity]
                return node
        return None

    def lookup(self, identity: Hashable) -> SearchNode | None:
        entry = self._entries.get(identity)
        return entry[2] if entry is not None else None

    def update_in_place(
        self,
        identity: Hashable,
        parent: SearchNode | None,
        heuristic: float,
        depth: int,
        score: float,
    ) -> SearchNode:
        node = self._check_relaxation(self.lookup(identity), identity, depth)
        self._entries[identity][2] = _REMOVED
        node.relax(parent, heuristic, depth, score)
        self._push(node)
        return node

    def __len__(self) -> int:
        return len(self._entries)

    # ── Helper ─────────────────────────────────────────────────────

    def _push(self, node: SearchNode) -> None:
        entry = [node.score, next(self._counter), node]
        self._entries[node.identity] = entry
        heapq.heappush(self._heap, entry)

    def __repr__(self) -> str:
        return f"BinaryHeapOpenSet(size={len(self)}, heap_entries={len(self._heap)})"
