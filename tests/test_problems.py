"""Tests for the bundled state spaces — GridMaze and GraphProblem."""

import random

import networkx as nx
import numpy as np
import pytest

from asyncastar.core.state import Classification
from asyncastar.engine.search_engine import SearchEngine
from asyncastar.problems.graph import GraphProblem
from asyncastar.problems.grid import Direction, GridMaze

CORRIDOR = [
    [-1, -1, -1, -1],
    [-1, 0, 1, -1],
    [-1, -1, -1, -1],
]


def _search(problem):
    completed = []
    engine = SearchEngine.from_options(
        initial=problem.initial_state(),
        neighbors=problem.neighbors,
        heuristic=problem.heuristic,
        on_complete=completed.append,
    )
    engine.run_sync()
    return completed[0]


# ── GridMaze ───────────────────────────────────────────────────────

def test_grid_initial_state():
    maze = GridMaze(CORRIDOR, start=(1, 1))
    s = maze.initial_state()
    assert s.identity == (1, 1)
    assert s.action is None
    assert s.classification is Classification.OPEN


def test_grid_neighbor_order_and_actions():
    maze = GridMaze(CORRIDOR, start=(1, 1))
    n = maze.neighbors(maze.initial_state())

    assert [s.action for s in n] == [Direction.WEST, Direction.EAST, Direction.NORTH, Direction.SOUTH]
    assert [s.identity for s in n] == [(0, 1), (2, 1), (1, 0), (1, 2)]
    assert n[1].classification is Classification.GOAL
    assert n[0].classification is Classification.UNSOLVABLE


def test_grid_skips_out_of_bounds():
    maze = GridMaze([[0, 1]], start=(0, 0))
    n = maze.neighbors(maze.initial_state())
    assert [s.identity for s in n] == [(1, 0)]


def test_grid_end_defaults_to_first_exit():
    maze = GridMaze(CORRIDOR, start=(1, 1))
    assert maze.end == (2, 1)
    assert maze.heuristic(maze.initial_state()) == 1.0


def test_grid_without_exit_has_zero_heuristic():
    maze = GridMaze([[0, 0], [0, -1]], start=(0, 0))
    assert maze.end is None
    assert maze.heuristic(maze.initial_state()) == 0.0


def test_grid_accepts_numpy():
    cells = np.zeros((3, 3), dtype=int)
    cells[2, 2] = 1
    result = _search(GridMaze(cells, start=(0, 0)))
    assert result.success
    assert result.cost == 4


@pytest.mark.parametrize(
    "cells, start",
    [
        ([0, 1, 0], (0, 0)),
        ([[]], (0, 0)),
        ([[0, 2]], (0, 0)),
        ([[0, 1]], (5, 0)),
    ],
)
def test_grid_rejects_bad_input(cells, start):
    with pytest.raises(ValueError):
        GridMaze(cells, start=start)


def test_grid_open_field_matches_manhattan():
    """On an open grid the path length is the Manhattan distance."""
    cells = np.zeros((6, 9), dtype=int)
    cells[5, 8] = 1
    result = _search(GridMaze(cells, start=(0, 0)))
    assert result.cost == 13
    assert result.actions[0] is None
    assert set(result.actions[1:]) == {Direction.EAST, Direction.SOUTH}


# ── GraphProblem ───────────────────────────────────────────────────

def test_graph_path_and_actions():
    problem = GraphProblem.from_edges(
        [("A", "B"), ("B", "C"), ("A", "D"), ("D", "E"), ("E", "C")],
        start="A",
        goals=["C"],
    )
    result = _search(problem)
    assert result.actions == [None, "B", "C"]
    assert result.cost == 2


def test_graph_blocked_nodes():
    problem = GraphProblem.from_edges(
        [("A", "B"), ("B", "C"), ("A", "D"), ("D", "E"), ("E", "C")],
        start="A",
        goals=["C"],
        blocked=["B"],
    )
    result = _search(problem)
    assert result.actions == [None, "D", "E", "C"]


def test_graph_directed_edges():
    problem = GraphProblem.from_edges(
        [("B", "A"), ("A", "C")], start="B", goals=["C"], directed=True
    )
    assert _search(problem).actions == [None, "A", "C"]

    backwards = GraphProblem.from_edges(
        [("A", "B"), ("C", "A")], start="B", goals=["C"], directed=True
    )
    assert not _search(backwards).success


def test_graph_isolated_start():
    problem = GraphProblem.from_edges([("A", "B")], start="Z", goals=["B"], nodes=["Z"])
    result = _search(problem)
    assert not result.success
    assert result.actions == []


def test_graph_unknown_start():
    with pytest.raises(ValueError):
        GraphProblem.from_edges([("A", "B")], start="Z", goals=["B"])


def test_graph_heuristic_attribute():
    g = nx.path_graph(4)
    nx.set_node_attributes(g, {0: 3, 1: 2, 2: 1, 3: 0}, "h")
    problem = GraphProblem(g, start=0, goals=[3], heuristic_attr="h")
    assert problem.heuristic(problem.initial_state()) == 3.0
    assert _search(problem).actions == [None, 1, 2, 3]


@pytest.mark.parametrize("seed", range(5))
def test_graph_matches_networkx_shortest_path(seed):
    """Hop counts agree with networkx on random graphs."""
    g = nx.gnp_random_graph(40, 0.08, seed=seed)
    rng = random.Random(seed)
    start, goal = rng.sample(list(g.nodes), 2)

    result = _search(GraphProblem(g, start=start, goals=[goal]))

    if nx.has_path(g, start, goal):
        assert result.success
        assert result.cost == nx.shortest_path_length(g, start, goal)
        assert result.actions[-1] == goal
    else:
        assert not result.success
