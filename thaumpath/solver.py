"""
ThaumPath Repository
Introductory remarks: This module is part of the ThaumPath codebase.

Cheapest fixed-length research paths over the aspect graph.

A path of length ``n`` visits ``n`` aspects, the first being the one already
placed on the research table. Its price is the sum of the prices of every
aspect after the first.

Each query first computes, for every remaining step count ``r``, the
cheapest price of any walk of exactly ``r`` steps from each aspect to the
end. That table is an exact lower bound, so the priority-ordered search
below pops prefixes in order of their best possible completed price, deeper
prefixes first on ties. The first completed path is a cheapest one; the
search then drains every prefix with the same bound to collect all ties and
stops. Prefixes that cannot reach the end in the steps left are never
queued. An exhausted expansion budget therefore still returns the cheapest
paths found so far, flagged as incomplete.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import (
    Dict,
    Generic,
    Hashable,
    List,
    NamedTuple,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
    cast,
)

from thaumpath.compositions import build_aspect_graph
from thaumpath.config import (
    DEFAULT_LENGTH_SLACK,
    DEFAULT_MAX_EXPANSIONS,
    NO_PATH_PRICE,
)
from thaumpath.graph import Graph

T = TypeVar("T", bound=Hashable)

Path = Tuple[T, ...]


class PriceModel(Protocol[T]):
    """Anything that can price a node, usually an AspectInventory."""

    def price_of(self, node: T) -> int: ...


@dataclass(frozen=True)
class AspectPaths(Generic[T]):
    """All cheapest paths found for one exact length."""

    paths: Tuple[Path, ...]
    price: int
    complete: bool = True

    @property
    def found(self) -> bool:
        return bool(self.paths)

    @property
    def length(self) -> Optional[int]:
        if not self.paths:
            return None
        return len(self.paths[0])

    @classmethod
    def empty(cls, *, complete: bool = True) -> "AspectPaths[T]":
        return cls(paths=(), price=NO_PATH_PRICE, complete=complete)


class _SearchState(NamedTuple):
    bound: int
    depth_key: int
    order: int
    price: int
    node: Hashable
    path: Tuple[Hashable, ...]


class Solver(Generic[T]):
    """Answer repeated path queries against one graph and one price model.

    Both collaborators are treated as read-only; every query keeps its own
    frontier, so a solver can be shared freely. To price against a refreshed
    inventory, build a new solver.
    """

    def __init__(
        self,
        inventory: PriceModel[T],
        graph: Optional[Graph[T]] = None,
        *,
        max_expansions: int = DEFAULT_MAX_EXPANSIONS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_expansions < 0:
            raise ValueError("max_expansions must not be negative.")
        self._inventory = inventory
        if graph is None:
            graph = cast(Graph[T], build_aspect_graph())
        self._graph = graph
        self._max_expansions = max_expansions
        self._logger = logger or logging.getLogger(__name__)

    @property
    def graph(self) -> Graph[T]:
        return self._graph

    @property
    def inventory(self) -> PriceModel[T]:
        return self._inventory

    def find_paths(
        self,
        start: T,
        end: T,
        distance: int,
        max_distance_increase: int = DEFAULT_LENGTH_SLACK,
    ) -> Dict[int, AspectPaths[T]]:
        """Solve each length in ``[distance, distance + increase)``.

        The result maps the offset from ``distance`` to that length's
        cheapest paths. Lengths are solved independently.
        """
        best_paths: Dict[int, AspectPaths[T]] = {}
        for increase in range(max_distance_increase):
            best_paths[increase] = self.find_paths_with_length(
                start, end, distance + increase
            )
        return best_paths

    def find_paths_with_length(
        self, start: T, end: T, desired_distance: int
    ) -> AspectPaths[T]:
        """Find every cheapest path of exactly ``desired_distance`` aspects."""
        if desired_distance < 2:
            return AspectPaths.empty()

        remaining = self._remaining_prices(end, desired_distance - 1)
        start_bound = remaining[-1].get(start)
        if start_bound is None:
            return AspectPaths.empty()

        order = itertools.count()
        queue: List[_SearchState] = [
            _SearchState(start_bound, -1, next(order), 0, start, (start,))
        ]

        lowest_price = NO_PATH_PRICE
        paths: List[Path] = []
        expansions = 0
        complete = True

        while queue:
            state = heapq.heappop(queue)
            if state.bound > lowest_price:
                break

            distance = len(state.path)
            if distance == desired_distance:
                # Only prefixes that can still end at ``end`` are queued.
                lowest_price = state.price
                paths.append(cast(Path, state.path))
                continue

            if self._max_expansions and expansions >= self._max_expansions:
                complete = False
                break
            expansions += 1

            steps_left = remaining[desired_distance - distance - 1]
            for neighbour in self._graph.iter_neighbours(
                cast(T, state.node)
            ):
                rest = steps_left.get(neighbour)
                if rest is None:
                    continue
                price = state.price + self._inventory.price_of(neighbour)
                if price + rest > lowest_price:
                    continue
                heapq.heappush(
                    queue,
                    _SearchState(
                        price + rest,
                        -(distance + 1),
                        next(order),
                        price,
                        neighbour,
                        state.path + (neighbour,),
                    ),
                )

        if not complete:
            self._logger.warning(
                "Search %s -> %s (length %d) stopped after %d expansions "
                "with %d paths",
                start,
                end,
                desired_distance,
                expansions,
                len(paths),
            )
        else:
            self._logger.debug(
                "Search %s -> %s (length %d): %d paths at price %d "
                "after %d expansions",
                start,
                end,
                desired_distance,
                len(paths),
                lowest_price,
                expansions,
            )

        if not paths:
            return AspectPaths.empty(complete=complete)
        return AspectPaths(
            paths=tuple(paths),
            price=lowest_price,
            complete=complete,
        )

    def _remaining_prices(self, end: T, steps: int) -> List[Dict[T, int]]:
        """Cheapest price of a walk of exactly ``r`` steps to ``end``.

        Entry ``r`` maps each node that can reach ``end`` in exactly ``r``
        steps to that price; nodes that cannot are absent.
        """
        table: List[Dict[T, int]] = [{end: 0}]
        for _ in range(steps):
            previous = table[-1]
            current: Dict[T, int] = {}
            for node in self._graph:
                best: Optional[int] = None
                for neighbour in self._graph.iter_neighbours(node):
                    rest = previous.get(neighbour)
                    if rest is None:
                        continue
                    price = self._inventory.price_of(neighbour) + rest
                    if best is None or price < best:
                        best = price
                if best is not None:
                    current[node] = best
            table.append(current)
        return table

    def path_price(self, path: Sequence[T]) -> int:
        """Price of ``path``; the first aspect is already held and is free."""
        return sum(self._inventory.price_of(node) for node in path[1:])
