"""Small helpers shared by the graph kernels: ranking, report lines, source picking."""

from __future__ import annotations

import random
from typing import Any, Iterable, Sequence, Tuple, TypeVar

K_RAND_SEED = 27491095

K = TypeVar("K")
V = TypeVar("V")


def top_k(pairs: Iterable[Tuple[K, V]], k: int) -> list[Tuple[V, K]]:
    """Return up to ``k`` ``(value, key)`` pairs with the largest values, largest first.

    Ties on value are broken by the larger key, as with a descending sort of
    ``(value, key)`` tuples.
    """
    if k <= 0:
        return []
    best: list[Tuple[V, K]] = []
    min_so_far: Any = 0
    for key, value in pairs:
        if len(best) < k or value > min_so_far:
            best.append((value, key))
            best.sort(reverse=True)
            del best[k:]
            min_so_far = best[-1][0]
    return best


def format_label(label: str, value: str) -> str:
    """Format a labelled value as a fixed-width report line."""
    return "%-21s%7s" % (label + ":", value)


def format_time(label: str, seconds: float) -> str:
    """Format a labelled duration in seconds as a fixed-width report line."""
    return "%-21s%3f" % (label + ":", seconds)


def format_step(label: str, count: int) -> str:
    """Format a labelled count as a fixed-width report line."""
    return "%-14s%14d" % (label + ":", count)


class SourcePicker:
    """Picks starting vertices that have at least one in- or out-edge."""

    def __init__(self, graph: Any, given_source: int = -1, seed: int = K_RAND_SEED) -> None:
        self._graph = graph
        self._given_source = given_source
        self._rng = random.Random(seed)
        if given_source == -1 and not any(
            graph.out_degree(v) or graph.in_degree(v) for v in graph.vertices()
        ):
            raise ValueError("graph has no vertex with a non-zero degree")

    def pick_next(self) -> int:
        """Return the given source, or a random vertex with non-zero degree."""
        if self._given_source != -1:
            return self._given_source
        last = self._graph.num_nodes - 1
        while True:
            source = self._rng.randint(0, last)
            if self._graph.out_degree(source) or self._graph.in_degree(source):
                return source


def _first(items: Sequence[Any]) -> Any:
    return items[0]