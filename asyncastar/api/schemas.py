"""
Pydantic schemas for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ── Shared ─────────────────────────────────────────────────────────

class Coordinate(BaseModel):
    x: int
    y: int


class SolveResult(BaseModel):
    """Outcome of a search run."""

    success: bool
    actions: list[Any]
    cost: int
    expanded: int = Field(..., description="Number of expansions performed")


# ── Grid mazes ─────────────────────────────────────────────────────

class GridSolveInput(BaseModel):
    """Maze cells indexed [y][x]: -1 wall, 0 floor, 1 exit."""

    maze: list[list[int]] = Field(..., description="Rows of -1 / 0 / 1 cells")
    start: Coordinate
    end: Coordinate | None = Field(
        default=None, description="Heuristic target; defaults to the first exit cell"
    )
    timeout: float | None = Field(
        default=None, ge=0, description="Seconds before giving up; 0 or null = unbounded"
    )


# ── Graphs ─────────────────────────────────────────────────────────

class GraphSolveInput(BaseModel):
    """Edge-list graph with unit-cost edges."""

    nodes: list[str] = Field(default_factory=list, description="Isolated nodes, if any")
    edges: list[dict[str, str]] = Field(..., description="[{source, target}, ...]")
    start: str
    goals: list[str]
    blocked: list[str] = Field(default_factory=list)
    directed: bool = False
    timeout: float | None = Field(default=None, ge=0)
