"""
GridMaze — 4-neighbour grid state space.

Cells hold the classification directly:

    -1  wall / pit (Unsolvable)
     0  floor (Open)
     1  exit (Goal)

The grid is indexed ``cells[y][x]``.  Moves are unit cost; actions are the
integer values of ``Direction``.  The heuristic is the Manhattan distance
to the exit, which is admissible (and consistent) on a 4-neighbour grid.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

import numpy as np

from asyncastar.core.state import Classification, StateDescriptor

Coord = tuple[int, int]


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


# Expansion order; (dx, dy) per move
_MOVES: dict[Direction, Coord] = {
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
}

_VALID_CELLS = {c.value for c in Classification}


class GridMaze:
    """
    A maze whose states are grid positions.

    Parameters
    ----------
    cells : 2-D array-like of -1 / 0 / 1
    start : (x, y) starting position
    end : (x, y), optional
        Target for the heuristic.  Defaults to the first Goal cell in
        row-major order; with no Goal cell the heuristic is 0.
    """

    def __init__(
        self,
        cells: Sequence[Sequence[int]] | np.ndarray,
        start: Coord,
        end: Coord | None = None,
    ) -> None:
        grid = np.asarray(cells)
        if grid.ndim != 2 or grid.size == 0:
            raise ValueError(f"Maze must be a non-empty 2-D grid, got shape {grid.shape}.")
        unknown = set(np.unique(grid).tolist()) - _VALID_CELLS
        if unknown:
            raise ValueError(
                f"Maze contains unknown cell values {sorted(unknown)}; "
                f"expected {sorted(_VALID_CELLS)}."
            )
        self.cells = grid.astype(np.int8)
        self.height, self.width = self.cells.shape

        if not self.in_bounds(*start):
            raise ValueError(f"Start {start} is outside the {self.width}x{self.height} maze.")
        self.start: Coord = (int(start[0]), int(start[1]))

        if end is None:
            goals = np.argwhere(self.cells == Classification.GOAL)
            end = (int(goals[0][1]), int(goals[0][0])) if len(goals) else None
        self.end: Coord | None = end

    # ── Oracle ─────────────────────────────────────────────────────

    def initial_state(self) -> StateDescriptor:
        return self._state(*self.start, action=None)

    def neighbors(self, state: StateDescriptor) -> list[StateDescriptor]:
        """States one move away; moves leaving the grid are not produced."""
        x, y = state.payload["x"], state.payload["y"]
        result = []
        for direction, (dx, dy) in _MOVES.items():
            nx_, ny = x + dx, y + dy
            if self.in_bounds(nx_, ny):
                result.append(self._state(nx_, ny, action=int(direction)))
        return result

    def heuristic(self, state: StateDescriptor) -> float:
        if self.end is None:
            return 0.0
        return float(
            abs(state.payload["x"] - self.end[0]) + abs(state.payload["y"] - self.end[1])
        )

    # ── Helpers ────────────────────────────────────────────────────

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def classify(self, x: int, y: int) -> Classification:
        return Classification(int(self.cells[y, x]))

    def _state(self, x: int, y: int, action: int | None) -> StateDescriptor:
        return StateDescriptor(
            identity=(x, y),
            classification=self.classify(x, y),
            action=action,
            payload={"x": x, "y": y},
        )

    def __repr__(self) -> str:
        return f"<GridMaze {self.width}x{self.height} start={self.start} end={self.end}>"
