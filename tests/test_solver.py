"""
ThaumPath Repository
Introductory remarks: This module is part of the ThaumPath codebase.

Tests for the fixed-length path search.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import random
from typing import Hashable, List, Set, Tuple

import pytest

from thaumpath.aspects import Aspect, all_aspects
from thaumpath.compositions import build_aspect_graph
from thaumpath.config import NO_PATH_PRICE, UNAFFORDABLE_PRICE
from thaumpath.graph import Graph
from thaumpath.inventory import AspectInventory
from thaumpath.solver import AspectPaths, Solver


def reference_search(
    graph: Graph, inventory: AspectInventory, start: Hashable, end: Hashable,
    length: int,
) -> Tuple[Set[Tuple[Hashable, ...]], int]:
    """Uniform-cost search over (price, path), stopping past the optimum."""
    counter = itertools.count()
    heap: List[Tuple[int, int, Tuple[Hashable, ...]]] = [
        (0, next(counter), (start,))
    ]
    best = None
    found: Set[Tuple[Hashable, ...]] = set()
    while heap:
        price, _, path = heapq.heappop(heap)
        if best is not None and price > best:
            break
        if len(path) == length:
            if path[-1] == end:
                best = price
                found.add(path)
            continue
        for neighbour in graph.neighbours(path[-1]):
            heapq.heappush(
                heap,
                (
                    price + inventory.price_of(neighbour),
                    next(counter),
                    path + (neighbour,),
                ),
            )
    if best is None:
        return set(), NO_PATH_PRICE
    return found, best


@pytest.fixture(scope="module")
def random_inventory() -> AspectInventory:
    rng = random.Random(1234)
    amounts = {
        aspect: rng.choice([0, 1, 2, 5, 8, 20, 40])
        for aspect in all_aspects()
    }
    return AspectInventory(amounts)


def test_forced_through_unaffordable_node() -> None:
    graph = Graph.from_compositions([("z", "x", "y")])
    inventory = AspectInventory({"x": 2, "y": 2})
    solver = Solver(inventory, graph)

    result = solver.find_paths_with_length("x", "y", 3)

    assert result.paths == (("x", "z", "y"),)
    assert result.price == UNAFFORDABLE_PRICE + 1
    assert result.found
    assert result.length == 3


def test_no_path_returns_empty_with_sentinel_price() -> None:
    graph = Graph.from_compositions([("z", "x", "y")])
    solver = Solver(AspectInventory({"x": 1}), graph)

    # The graph is bipartite, so x -> y needs an odd number of aspects.
    result = solver.find_paths_with_length("x", "y", 4)

    assert result == AspectPaths.empty()
    assert result.price == NO_PATH_PRICE
    assert not result.found
    assert result.length is None


@pytest.mark.parametrize("length", [-1, 0, 1])
def test_lengths_below_two_have_no_path(length: int) -> None:
    solver = Solver(AspectInventory({Aspect.AER: 1}))

    assert solver.find_paths_with_length(Aspect.AER, Aspect.AER, length) == (
        AspectPaths.empty()
    )


def test_isolated_aspect_has_no_paths() -> None:
    solver = Solver(AspectInventory({Aspect.GLORIA: 5, Aspect.AER: 5}))

    for length in range(2, 7):
        assert not solver.find_paths_with_length(
            Aspect.GLORIA, Aspect.AER, length
        ).found
        assert not solver.find_paths_with_length(
            Aspect.AER, Aspect.GLORIA, length
        ).found


def test_adjacent_aspects_length_two() -> None:
    solver = Solver(AspectInventory({Aspect.AER: 3, Aspect.LUX: 1}))

    result = solver.find_paths_with_length(Aspect.AER, Aspect.LUX, 2)

    assert result.paths == ((Aspect.AER, Aspect.LUX),)
    assert result.price == 3


def test_equal_price_paths_are_all_kept() -> None:
    graph = Graph([("s", "a"), ("s", "b"), ("a", "e"), ("b", "e")])
    solver = Solver(AspectInventory({"a": 1, "b": 1, "e": 1}), graph)

    result = solver.find_paths_with_length("s", "e", 3)

    assert set(result.paths) == {("s", "a", "e"), ("s", "b", "e")}
    assert result.price == 2


def test_cheaper_path_replaces_earlier_candidates() -> None:
    graph = Graph([("s", "a"), ("s", "b"), ("a", "e"), ("b", "e")])
    solver = Solver(AspectInventory({"a": 1, "b": 9, "e": 9}), graph)

    result = solver.find_paths_with_length("s", "e", 3)

    assert result.paths == (("s", "b", "e"),)
    assert result.price == 2


def test_paths_may_revisit_aspects() -> None:
    graph = Graph([("s", "e")])
    solver = Solver(AspectInventory({"s": 1, "e": 1}), graph)

    result = solver.find_paths_with_length("s", "e", 4)

    assert result.paths == (("s", "e", "s", "e"),)
    assert result.price == 3


def test_find_paths_solves_each_offset_independently() -> None:
    solver = Solver(AspectInventory({Aspect.AER: 4, Aspect.IGNIS: 2}))

    results = solver.find_paths(Aspect.AER, Aspect.IGNIS, 3, 3)

    assert sorted(results) == [0, 1, 2]
    for offset, paths in results.items():
        assert paths == solver.find_paths_with_length(
            Aspect.AER, Aspect.IGNIS, 3 + offset
        )


def test_find_paths_with_zero_slack_is_empty() -> None:
    solver = Solver(AspectInventory({Aspect.AER: 1}))

    assert solver.find_paths(Aspect.AER, Aspect.IGNIS, 3, 0) == {}


def test_search_is_idempotent(random_inventory: AspectInventory) -> None:
    solver = Solver(random_inventory)

    first = solver.find_paths_with_length(Aspect.AQUA, Aspect.IGNIS, 5)
    second = solver.find_paths_with_length(Aspect.AQUA, Aspect.IGNIS, 5)

    assert first == second


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (Aspect.AQUA, Aspect.IGNIS),
        (Aspect.AER, Aspect.TERRA),
        (Aspect.LUX, Aspect.TENEBRAE),
        (Aspect.HUMANUS, Aspect.METALLUM),
        (Aspect.PERDITIO, Aspect.ORDO),
        (Aspect.VICTUS, Aspect.VICTUS),
    ],
)
@pytest.mark.parametrize("length", [2, 3, 4, 5])
def test_matches_reference_search(
    random_inventory: AspectInventory, start: Aspect, end: Aspect, length: int
) -> None:
    graph = build_aspect_graph()
    solver = Solver(random_inventory, graph)

    result = solver.find_paths_with_length(start, end, length)
    expected_paths, expected_price = reference_search(
        graph, random_inventory, start, end, length
    )

    assert result.price == expected_price
    assert set(result.paths) == expected_paths
    assert len(result.paths) == len(set(result.paths))
    for path in result.paths:
        assert len(path) == length
        assert path[0] is start
        assert path[-1] is end
        for node_a, node_b in zip(path, path[1:]):
            assert graph.has_edge(node_a, node_b)
        assert solver.path_price(path) == result.price


def test_expansion_budget_keeps_cheapest_paths_found_so_far(
    caplog: pytest.LogCaptureFixture,
) -> None:
    inventory = AspectInventory({aspect: 1 for aspect in all_aspects()})
    solver = Solver(inventory, max_expansions=5)
    graph = solver.graph

    with caplog.at_level(logging.WARNING, logger="thaumpath.solver"):
        result = solver.find_paths_with_length(Aspect.AER, Aspect.TERRA, 6)

    assert not result.complete
    assert result.found
    assert result.price == 5
    for path in result.paths:
        assert len(path) == 6
        assert path[0] is Aspect.AER
        assert path[-1] is Aspect.TERRA
        for node_a, node_b in zip(path, path[1:]):
            assert graph.has_edge(node_a, node_b)
    assert any(
        "Search Aer -> Terra (length 6) stopped after 5 expansions" in m
        for m in caplog.messages
    )


def test_long_paths_are_found_within_a_small_budget() -> None:
    inventory = AspectInventory({aspect: 10 for aspect in all_aspects()})
    solver = Solver(inventory, max_expansions=20_000)

    result = solver.find_paths_with_length(Aspect.AER, Aspect.AQUA, 11)

    # Every aspect costs 1, so every walk of this length ties.
    assert result.found
    assert result.price == 10
    assert all(len(path) == 11 for path in result.paths)


def test_budget_smaller_than_one_path_returns_nothing() -> None:
    inventory = AspectInventory({aspect: 1 for aspect in all_aspects()})
    solver = Solver(inventory, max_expansions=2)

    result = solver.find_paths_with_length(Aspect.AER, Aspect.TERRA, 6)

    assert result == AspectPaths.empty(complete=False)


def test_search_only_expands_prefixes_of_cheapest_paths(
    caplog: pytest.LogCaptureFixture,
) -> None:
    # Two routes of three aspects; the route through "x" is unaffordable.
    graph = Graph(
        [("s", "a"), ("a", "b"), ("b", "e"), ("s", "x"), ("x", "y"),
         ("y", "e")]
    )
    solver = Solver(AspectInventory({"a": 1, "b": 1, "e": 1, "y": 1}), graph)

    with caplog.at_level(logging.DEBUG, logger="thaumpath.solver"):
        result = solver.find_paths_with_length("s", "e", 4)

    assert result.paths == (("s", "a", "b", "e"),)
    assert result.complete
    assert "1 paths at price 3 after 3 expansions" in caplog.text


def test_unlimited_budget_completes() -> None:
    inventory = AspectInventory({aspect: 1 for aspect in all_aspects()})
    solver = Solver(inventory, max_expansions=0)

    result = solver.find_paths_with_length(Aspect.AER, Aspect.TERRA, 4)

    assert result.complete
    assert result.found


def test_negative_budget_is_rejected() -> None:
    with pytest.raises(ValueError):
        Solver(AspectInventory({}), max_expansions=-1)


def test_default_graph_is_the_aspect_graph() -> None:
    solver = Solver(AspectInventory({}))
    expected = build_aspect_graph().neighbours(Aspect.LUX)

    assert solver.graph.neighbours(Aspect.LUX) == expected
