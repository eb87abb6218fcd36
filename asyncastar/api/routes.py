"""
FastAPI routes for the Async A* service.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, HTTPException

from asyncastar.api.schemas import GraphSolveInput, GridSolveInput, SolveResult
from asyncastar.core.exceptions import SearchError
from asyncastar.core.result import SearchStatus
from asyncastar.core.state import StateDescriptor
from asyncastar.engine.search_engine import SearchEngine
from asyncastar.problems.graph import GraphProblem
from asyncastar.problems.grid import GridMaze

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Solving ────────────────────────────────────────────────────────

@router.post("/solve/grid", response_model=SolveResult)
async def solve_grid(payload: GridSolveInput) -> SolveResult:
    """Find the shortest route through a grid maze."""
    try:
        end = (payload.end.x, payload.end.y) if payload.end else None
        maze = GridMaze(payload.maze, (payload.start.x, payload.start.y), end)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return await _search(
        maze.initial_state(), maze.neighbors, maze.heuristic, payload.timeout
    )


@router.post("/solve/graph", response_model=SolveResult)
async def solve_graph(payload: GraphSolveInput) -> SolveResult:
    """Find the fewest-hops route from *start* to any goal node."""
    try:
        edges = [(e["source"], e["target"]) for e in payload.edges]
        problem = GraphProblem.from_edges(
            edges,
            start=payload.start,
            goals=payload.goals,
            blocked=payload.blocked,
            nodes=payload.nodes,
            directed=payload.directed,
        )
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Edge is missing {exc}.")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return await _search(
        problem.initial_state(), problem.neighbors, problem.heuristic, payload.timeout
    )


# ── Helper ─────────────────────────────────────────────────────────

async def _search(
    initial: StateDescriptor,
    neighbors: Callable[[StateDescriptor], list[StateDescriptor]],
    heuristic: Callable[[StateDescriptor], float],
    timeout: float | None,
) -> SolveResult:
    outcome: dict[str, Any] = {}
    try:
        engine = SearchEngine.from_options(
            initial=initial,
            neighbors=neighbors,
            heuristic=heuristic,
            on_complete=lambda result: outcome.setdefault("result", result),
            timeout=timeout,
        )
        await engine.run()
    except SearchError as exc:
        logger.exception("Search failed")
        raise HTTPException(status_code=400, detail=str(exc))

    if engine.status is SearchStatus.TIMED_OUT:
        raise HTTPException(
            status_code=408,
            detail=f"Search timed out after {engine.expanded} expansions.",
        )

    result = outcome["result"]
    return SolveResult(
        success=result.success,
        actions=result.actions,
        cost=result.cost,
        expanded=engine.expanded,
    )
