"""
Open-set interface — abstract base for frontier structures.

Design: Strategy pattern.  The SearchEngine only talks to this interface,
so the binary heap and the sorted list (or any other structure keeping
the same contract) can be swapped without touching the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable

from asyncastar.core.state import SearchNode


class OpenSetInterface(ABC):
    """
    Nodes discovered but not yet expanded, ordered by ascending score.

    Invariants
    ----------
    * at most one node per identity;
    * among equal scores, the node inserted first comes out first.
    """

    @abstractmethod
    def insert(self, node: SearchNode) -> None:
        """
        Add *node* at its sorted position.

        Raises KeyError if a node with the same identity is already held;
        callers are expected to ``lookup`` first and relax instead.
        """
        ...

    @abstractmethod
    def extract_minimum(self) -> SearchNode | None:
        """Remove and return the lowest-score node, or None when empty."""
        ...

    @abstractmethod
    def lookup(self, identity: Hashable) -> SearchNode | None:
        """Return the node held for *identity*, or None."""
        ...

    @abstractmethod
    def update_in_place(
        self,
        identity: Hashable,
        parent: SearchNode | None,
        heuristic: float,
        depth: int,
        score: float,
    ) -> SearchNode:
        """
        Relax the node held for *identity* and restore ordering.

        Only valid when that node's depth exceeds *depth*.  The relaxed
        node queues behind nodes that already hold an equal score.

        Raises
        ------
        KeyError    if *identity* is not in the open set.
        ValueError  if *depth* is not an improvement.
        """
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def __contains__(self, identity: object) -> bool:
        return self.lookup(identity) is not None  # type: ignore[arg-type]

    def __bool__(self) -> bool:
        return len(self) > 0

    # ── Shared validation ──────────────────────────────────────────

    @staticmethod
    def _check_relaxation(
        existing: SearchNode | None, identity: Hashable, depth: int
    ) -> SearchNode:
        if existing is None:
            raise KeyError(f"Identity {identity!r} is not in the open set.")
        if existing.depth <= depth:
            raise ValueError(
                f"Depth {depth} does not improve on {existing.depth} "
                f"for {identity!r}."
            )
        return existing

    @staticmethod
    def _check_absent(existing: SearchNode | None, node: SearchNode) -> None:
        if existing is not None:
            raise KeyError(
                f"Identity {node.identity!r} is already in the open set; "
                f"relax it with update_in_place instead."
            )
