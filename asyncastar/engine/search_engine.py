"""
SearchEngine — interruptible best-first (A*) search.

Walks a caller-supplied state space one expansion at a time.  Each call
to ``step()`` expands the lowest-score frontier node; ``run()`` drives
``step()`` from the event loop, yielding between steps so a long search
never monopolises the thread and the deadline is observed promptly.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Hashable
from typing import Any

from asyncastar.core.config import SearchConfig, load_config
from asyncastar.core.exceptions import ConfigurationError, OracleContractError
from asyncastar.core.result import SearchResult, SearchStatus
from asyncastar.core.state import (
    Classification,
    SearchNode,
    StateDescriptor,
    check_heuristic,
    inspect_state,
)
from asyncastar.frontier.binary_heap import BinaryHeapOpenSet
from asyncastar.frontier.interface import OpenSetInterface

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Main entry-point for a single search.

    Usage
    -----
    >>> engine = SearchEngine.from_options(
    ...     initial=maze.initial_state(),
    ...     neighbors=maze.neighbors,
    ...     heuristic=maze.heuristic,
    ...     on_complete=print,
    ... )
    >>> result = await engine.run()

    Parameters
    ----------
    config : SearchConfig
        The six search options, already validated.
    open_set_factory : callable
        Builds the frontier structure (default BinaryHeapOpenSet).
    reopen_closed : bool
        When a cheaper path to an already-expanded state turns up, move
        it back into the frontier so it is expanded again.  Only matters
        for inconsistent heuristics.  Off by default: the closed node's
        bookkeeping is updated in place but it is not re-expanded.
    """

    def __init__(
        self,
        config: SearchConfig,
        open_set_factory: Callable[[], OpenSetInterface] = BinaryHeapOpenSet,
        reopen_closed: bool = False,
    ) -> None:
        if not isinstance(config, SearchConfig):
            raise ConfigurationError(
                f"Expected a SearchConfig, got {type(config).__name__}."
            )
        self.config = config
        self.reopen_closed = reopen_closed

        self._open: OpenSetInterface = open_set_factory()
        self._closed: dict[Hashable, SearchNode] = {}
        self._status = SearchStatus.IDLE
        self._result: SearchResult | None = None
        self._goal: SearchNode | None = None
        self._expanded = 0

        initial_state = inspect_state(config.initial)
        self._initial = SearchNode(
            initial_state, heuristic=self._evaluate(initial_state)
        )
        self._open.insert(self._initial)

        self._deadline: float | None = None
        if config.bounded:
            self._deadline = time.monotonic() + config.timeout  # type: ignore[operator]

    @classmethod
    def from_options(
        cls,
        open_set_factory: Callable[[], OpenSetInterface] = BinaryHeapOpenSet,
        reopen_closed: bool = False,
        **options: Any,
    ) -> SearchEngine:
        """Validate keyword *options* into a SearchConfig and build an engine."""
        return cls(
            load_config(**options),
            open_set_factory=open_set_factory,
            reopen_closed=reopen_closed,
        )

    # ── Introspection ──────────────────────────────────────────────

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def result(self) -> SearchResult | None:
        return self._result

    @property
    def goal_node(self) -> SearchNode | None:
        return self._goal

    @property
    def initial_node(self) -> SearchNode:
        return self._initial

    @property
    def expanded(self) -> int:
        """Number of expansions performed so far."""
        return self._expanded

    @property
    def frontier_size(self) -> int:
        return len(self._open)

    @property
    def closed_size(self) -> int:
        return len(self._closed)

    def timed_out(self) -> bool:
        """True when a deadline is configured and has passed."""
        return self._deadline is not None and time.monotonic() >= self._deadline

    # ── Driving the search ─────────────────────────────────────────

    def step(self) -> bool:
        """
        Perform one expansion.

        Returns True while the search is still running, False once it has
        reached SOLVED, UNSOLVABLE or TIMED_OUT.  Calling it after that is
        a no-op.

        An initial state that is already a Goal or Unsolvable settles the
        search on the first step without calling ``neighbors``.
        """
        if self._status.terminal:
            return False
        self._status = SearchStatus.RUNNING

        if self.timed_out():
            self._time_out()
            return False

        current = self._open.extract_minimum()
        if current is None:
            self._finish(SearchStatus.UNSOLVABLE, SearchResult.no_path())
            return False

        if current is self._initial and current.classification is not Classification.OPEN:
            return self._settle_initial(current)

        self._closed[current.identity] = current
        self._expanded += 1
        logger.debug(
            "Expanding %r (depth=%d, score=%g, frontier=%d)",
            current.identity,
            current.depth,
            current.score,
            len(self._open),
        )

        for raw in self._enumerate(current):
            if self.timed_out():
                self._time_out()
                return False
            if self._visit(current, raw):
                return False
        return True

    async def run(self) -> SearchResult | None:
        """
        Step until the search terminates, yielding to the loop between steps.

        Returns the SearchResult, or None if the deadline passed first.
        """
        while self.step():
            await asyncio.sleep(0)
        return self._result

    def start(self) -> asyncio.Task[SearchResult | None]:
        """Schedule ``run()`` on the running event loop and return the task."""
        return asyncio.get_running_loop().create_task(self.run())

    def run_sync(self) -> SearchResult | None:
        """Run the search to completion from synchronous code."""
        return asyncio.run(self.run())

    # ── Expansion ──────────────────────────────────────────────────

    def _enumerate(self, current: SearchNode) -> list[Any]:
        neighbors = self.config.neighbors(current.state)
        if neighbors is None:
            raise OracleContractError(
                f"neighbors({current.identity!r}) returned None."
            )
        try:
            return list(neighbors)
        except TypeError as exc:
            raise OracleContractError(
                f"neighbors({current.identity!r}) returned "
                f"{type(neighbors).__name__}, not a sequence."
            ) from exc

    def _visit(self, current: SearchNode, raw: Any) -> bool:
        """Classify one neighbor and update bookkeeping.  True once solved."""
        state = inspect_state(raw)
        depth = current.depth + 1
        heuristic = self._evaluate(state)
        score = depth + heuristic

        if state.classification is Classification.GOAL:
            goal = SearchNode(state, heuristic=heuristic, depth=depth, parent=current)
            self._goal = goal
            self._finish(SearchStatus.SOLVED, SearchResult.solved(goal))
            return True

        identity = state.identity
        closed = self._closed.get(identity)
        if closed is not None:
            if closed.depth > depth:
                closed.relax(current, heuristic, depth, score)
                if self.reopen_closed and closed.classification is Classification.OPEN:
                    del self._closed[identity]
                    self._open.insert(closed)
                    logger.debug("Reopened %r at depth %d", identity, depth)
            return False

        if state.classification is Classification.UNSOLVABLE:
            self._closed[identity] = SearchNode(
                state, heuristic=heuristic, depth=depth, parent=current
            )
            return False

        pending = self._open.lookup(identity)
        if pending is None:
            self._open.insert(
                SearchNode(state, heuristic=heuristic, depth=depth, parent=current)
            )
        elif pending.depth > depth:
            self._open.update_in_place(identity, current, heuristic, depth, score)
        return False

    def _settle_initial(self, initial: SearchNode) -> bool:
        """The initial state is itself a goal or a dead end."""
        if initial.classification is Classification.GOAL:
            self._goal = initial
            self._finish(SearchStatus.SOLVED, SearchResult.solved(initial))
        else:
            self._closed[initial.identity] = initial
            self._finish(SearchStatus.UNSOLVABLE, SearchResult.no_path())
        return False

    def _evaluate(self, state: StateDescriptor) -> float:
        return check_heuristic(self.config.heuristic(state), state)

    # ── Termination ────────────────────────────────────────────────

    def _finish(self, status: SearchStatus, result: SearchResult) -> None:
        self._status = status
        self._result = result
        logger.info(
            "Search %s after %d expansions (cost=%d, frontier=%d, closed=%d)",
            status.value,
            self._expanded,
            result.cost,
            len(self._open),
            len(self._closed),
        )
        self.config.on_complete(result)

    def _time_out(self) -> None:
        self._status = SearchStatus.TIMED_OUT
        logger.warning(
            "Search timed out after %d expansions (timeout=%ss)",
            self._expanded,
            self.config.timeout,
        )
        if self.config.on_timeout is not None:
            self.config.on_timeout()
