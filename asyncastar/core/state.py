"""
State types — what the caller hands in and what the engine wraps it in.

StateDescriptor values belong to the caller's state space and are treated
as read-only.  SearchNode is the engine's own bookkeeping record around a
descriptor (depth, heuristic, score, parent), so nothing the engine does
is ever visible on the caller's objects.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from asyncastar.core.exceptions import OracleContractError


class Classification(IntEnum):
    """Tri-state tag carried by every state."""

    UNSOLVABLE = -1
    OPEN = 0
    GOAL = 1


@dataclass(frozen=True)
class StateDescriptor:
    """
    A single state of the caller's search space.

    Attributes
    ----------
    identity : Hashable
        Uniquely names the state; used as the de-duplication key.
    classification : Classification
        Unsolvable (dead end), Open (expandable) or Goal.
    action : Any
        Edge label that produced this state from its predecessor.
        None for the initial state.
    payload : Mapping
        Whatever the neighbor / heuristic functions need (coordinates,
        board layout, ...).  Never read by the engine.
    """

    identity: Hashable
    classification: Classification = Classification.OPEN
    action: Any = None
    payload: Mapping[str, Any] = field(default_factory=dict)


def inspect_state(obj: Any) -> StateDescriptor:
    """
    Validate a value produced by the caller's oracle.

    Anything exposing ``identity`` / ``classification`` / ``action``
    attributes is accepted and normalised into a StateDescriptor.

    Raises OracleContractError when the identity is missing, None or
    unhashable, or the classification is not one of -1 / 0 / 1.
    """
    if isinstance(obj, StateDescriptor) and isinstance(
        obj.classification, Classification
    ):
        _check_identity(obj.identity, obj)
        return obj

    identity = getattr(obj, "identity", None)
    _check_identity(identity, obj)

    if not hasattr(obj, "classification"):
        raise OracleContractError(f"State {obj!r} has no classification.")
    try:
        classification = Classification(obj.classification)
    except (TypeError, ValueError) as exc:
        raise OracleContractError(
            f"State {identity!r} has invalid classification "
            f"{obj.classification!r}; expected one of "
            f"{[c.value for c in Classification]}."
        ) from exc

    if isinstance(obj, StateDescriptor):
        payload = obj.payload
    else:
        payload = getattr(obj, "payload", {})
    return StateDescriptor(
        identity=identity,
        classification=classification,
        action=getattr(obj, "action", None),
        payload=payload,
    )


def _check_identity(identity: Any, obj: Any) -> None:
    if identity is None:
        raise OracleContractError(f"State {obj!r} has no identity.")
    try:
        hash(identity)
    except TypeError as exc:
        raise OracleContractError(
            f"State identity {identity!r} is not hashable."
        ) from exc


def check_heuristic(value: Any, state: StateDescriptor) -> float:
    """Coerce a heuristic result to float; reject non-numbers, NaN and infinities."""
    if isinstance(value, bool):
        raise OracleContractError(
            f"Heuristic for {state.identity!r} returned a bool."
        )
    try:
        h = float(value)
    except (TypeError, ValueError) as exc:
        raise OracleContractError(
            f"Heuristic for {state.identity!r} returned {value!r}, "
            f"not a number."
        ) from exc
    if not math.isfinite(h):
        raise OracleContractError(f"Heuristic for {state.identity!r} is {h}, not finite.")
    return h


class SearchNode:
    """
    Engine-owned wrapper around a StateDescriptor.

    ``parent`` points back toward the initial node and is the only link
    between nodes; parents never hold their children.  A parent's depth is
    always lower than its child's (relaxation only ever lowers depth), so
    walking the chain always ends at the initial node.
    """

    def __init__(
        self,
        state: StateDescriptor,
        heuristic: float = 0.0,
        depth: int = 0,
        parent: SearchNode | None = None,
    ) -> None:
        self.state = state
        self.heuristic = heuristic
        self.depth = depth
        self.score = depth + heuristic
        self.parent = parent

    # ── Descriptor shortcuts ───────────────────────────────────────

    @property
    def identity(self) -> Hashable:
        return self.state.identity

    @property
    def classification(self) -> Classification:
        return self.state.classification

    @property
    def action(self) -> Any:
        return self.state.action

    # ── Bookkeeping ────────────────────────────────────────────────

    def relax(
        self,
        parent: SearchNode | None,
        heuristic: float,
        depth: int,
        score: float,
    ) -> None:
        """Overwrite the bookkeeping with a cheaper path's values."""
        self.parent = parent
        self.heuristic = heuristic
        self.depth = depth
        self.score = score

    def actions(self) -> list[Any]:
        """
        Reconstruct the action sequence from the initial node to this one.

        The first element is always the initial state's action (None).
        Only reads the parent chain, so repeated calls agree.
        """
        path: list[Any] = []
        pointer: SearchNode | None = self
        while pointer is not None:
            path.append(pointer.action)
            pointer = pointer.parent
        path.reverse()
        return path

    def __repr__(self) -> str:
        return (
            f"<SearchNode id={self.identity!r} depth={self.depth} "
            f"score={self.score:g}>"
        )
