"""
Search outcome types.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from asyncastar.core.state import SearchNode


class SearchStatus(str, Enum):
    """Engine lifecycle: IDLE → RUNNING → SOLVED | UNSOLVABLE | TIMED_OUT."""

    IDLE = "idle"
    RUNNING = "running"
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    TIMED_OUT = "timed_out"

    @property
    def terminal(self) -> bool:
        return self in (
            SearchStatus.SOLVED,
            SearchStatus.UNSOLVABLE,
            SearchStatus.TIMED_OUT,
        )


class SearchResult(BaseModel):
    """Value handed to the completion callback."""

    success: bool
    actions: list[Any] = Field(default_factory=list)
    cost: int = 0

    @classmethod
    def solved(cls, goal: SearchNode) -> SearchResult:
        """Build a successful result from the goal node's parent chain."""
        actions = goal.actions()
        return cls(success=True, actions=actions, cost=len(actions) - 1)

    @classmethod
    def no_path(cls) -> SearchResult:
        return cls(success=False, actions=[], cost=0)
