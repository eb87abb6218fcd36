"""
GraphProblem — adapts a NetworkX graph into a search state space.

Every graph node is a state; every edge is a unit-cost move whose action
is the node it leads to.  Goal and blocked (Unsolvable) nodes are given
explicitly; an optional node attribute supplies the heuristic.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable

import networkx as nx

from asyncastar.core.state import Classification, StateDescriptor


class GraphProblem:
    """State space over an ``nx.Graph`` / ``nx.DiGraph``."""

    def __init__(
        self,
        graph: nx.Graph,
        start: Hashable,
        goals: Iterable[Hashable],
        blocked: Iterable[Hashable] = (),
        heuristic_attr: str | None = None,
    ) -> None:
        if start not in graph:
            raise ValueError(f"Start node {start!r} is not in the graph.")
        self.graph = graph
        self.start = start
        self.goals = frozenset(goals)
        self.blocked = frozenset(blocked)
        self.heuristic_attr = heuristic_attr

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[Hashable, Hashable]],
        start: Hashable,
        goals: Iterable[Hashable],
        blocked: Iterable[Hashable] = (),
        nodes: Iterable[Hashable] = (),
        directed: bool = False,
    ) -> GraphProblem:
        """Build the graph from an edge list (plus any isolated *nodes*)."""
        g = nx.DiGraph() if directed else nx.Graph()
        g.add_nodes_from(nodes)
        g.add_edges_from(edges)
        return cls(g, start, goals, blocked)

    # ── Oracle ─────────────────────────────────────────────────────

    def initial_state(self) -> StateDescriptor:
        return self._state(self.start, action=None)

    def neighbors(self, state: StateDescriptor) -> list[StateDescriptor]:
        # DiGraph.neighbors yields successors only
        return [
            self._state(node, action=node)
            for node in self.graph.neighbors(state.identity)
        ]

    def heuristic(self, state: StateDescriptor) -> float:
        if self.heuristic_attr is None:
            return 0.0
        return float(self.graph.nodes[state.identity].get(self.heuristic_attr, 0.0))

    # ── Helpers ────────────────────────────────────────────────────

    def classify(self, node: Hashable) -> Classification:
        if node in self.goals:
            return Classification.GOAL
        if node in self.blocked:
            return Classification.UNSOLVABLE
        return Classification.OPEN

    def _state(self, node: Hashable, action: Hashable | None) -> StateDescriptor:
        return StateDescriptor(
            identity=node, classification=self.classify(node), action=action
        )
