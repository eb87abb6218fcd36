"""
SearchConfig — the six options a search is built from.

    initial      required   StateDescriptor to start from
    neighbors    required   state -> sequence of states one step away
    heuristic    optional   state -> estimate (default: constant 0)
    on_complete  required   called once with the SearchResult
    on_timeout   optional   called once if the deadline passes first
    timeout      optional   seconds; None or 0 means unbounded

Validation happens eagerly, so a missing option fails at construction
time, before any expansion is scheduled.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from asyncastar.core.exceptions import ConfigurationError
from asyncastar.core.result import SearchResult


def zero_heuristic(state: Any) -> float:
    """Constant 0: reduces A* to uniform-cost (Dijkstra) search."""
    return 0.0


DEFAULT_HEURISTIC = zero_heuristic


class SearchConfig(BaseModel):
    """Explicit, validated engine configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    initial: Any
    neighbors: Callable[[Any], Iterable[Any]]
    heuristic: Callable[[Any], float] = DEFAULT_HEURISTIC
    on_complete: Callable[[SearchResult], Any]
    on_timeout: Callable[[], Any] | None = None
    timeout: float | None = Field(default=None, ge=0)

    @field_validator("initial")
    @classmethod
    def _initial_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("an initial state is required")
        return value

    @field_validator("heuristic", mode="before")
    @classmethod
    def _default_heuristic(cls, value: Any) -> Any:
        return DEFAULT_HEURISTIC if value is None else value

    @property
    def bounded(self) -> bool:
        """True when a non-zero timeout was configured."""
        return bool(self.timeout)


def load_config(**options: Any) -> SearchConfig:
    """
    Build a SearchConfig from keyword options.

    Raises ConfigurationError (never pydantic's ValidationError) so callers
    only need to know about the engine's own exception types.
    """
    try:
        return SearchConfig(**options)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid search configuration: {problems}") from exc
