"""Immutable undirected adjacency structure."""

from __future__ import annotations

from typing import (
    Dict,
    FrozenSet,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    Tuple,
    TypeVar,
)

T = TypeVar("T", bound=Hashable)


class Graph(Generic[T]):
    """Symmetric neighbour sets, fixed once constructed.

    Every edge is stored in both directions and duplicate edges collapse, so
    ``b in graph.neighbours(a)`` holds exactly when ``a in
    graph.neighbours(b)``. Neighbours are also kept in first-seen order so
    that traversals are reproducible between processes.
    """

    def __init__(self, edges: Iterable[Tuple[T, T]] = ()) -> None:
        # dict keys double as an insertion-ordered set
        adjacency: Dict[T, Dict[T, None]] = {}
        for node_a, node_b in edges:
            adjacency.setdefault(node_a, {})[node_b] = None
            adjacency.setdefault(node_b, {})[node_a] = None

        self._ordered: Mapping[T, Tuple[T, ...]] = {
            node: tuple(neighbours) for node, neighbours in adjacency.items()
        }
        self._sets: Mapping[T, FrozenSet[T]] = {
            node: frozenset(neighbours)
            for node, neighbours in self._ordered.items()
        }

    @classmethod
    def from_compositions(
        cls, compositions: Iterable[Tuple[T, T, T]]
    ) -> "Graph[T]":
        """Connect each composite to both of its components."""
        edges = []
        for composite, component_a, component_b in compositions:
            edges.append((composite, component_a))
            edges.append((composite, component_b))
        return cls(edges)

    def neighbours(self, node: T) -> FrozenSet[T]:
        return self._sets.get(node, frozenset())

    def iter_neighbours(self, node: T) -> Iterator[T]:
        """Yield neighbours in the order their edges were first added."""
        return iter(self._ordered.get(node, ()))

    def has_edge(self, node_a: T, node_b: T) -> bool:
        return node_b in self.neighbours(node_a)

    def edge_count(self) -> int:
        return sum(len(n) for n in self._ordered.values()) // 2

    def __iter__(self) -> Iterator[T]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}"
            f"(nodes={len(self)}, edges={self.edge_count()})"
        )
