"""Connected components by the Shiloach-Vishkin hooking and pointer-jumping scheme."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .bitmap import Bitmap
from .graph import CSRGraph
from .pagerank import epoch_ranges
from .util import top_k


@dataclass
class ComponentsResult:
    """Component label of every vertex and the number of sweeps the run took."""

    comp: list[int] = field(default_factory=list)
    iterations: int = 0

    @property
    def num_components(self) -> int:
        return len(set(self.comp))


def _hook(comp: list[int], u: int, v: int) -> bool:
    """Hook the higher of the two labels onto the lower; report whether it changed."""
    comp_u = comp[u]
    comp_v = comp[v]
    if comp_u == comp_v:
        return False
    high, low = (comp_u, comp_v) if comp_u > comp_v else (comp_v, comp_u)
    if comp[high] == high:
        comp[high] = low
        return True
    return False


def _compress(comp: list[int]) -> None:
    """Point every vertex straight at the root of its label tree."""
    for n in range(len(comp)):
        while comp[n] != comp[comp[n]]:
            comp[n] = comp[comp[n]]


def shiloach_vishkin(graph: CSRGraph, num_epochs: Optional[int] = None) -> ComponentsResult:
    """Label each vertex with the lowest vertex id of its connected component.

    Edges are followed in their stored direction only; the min-max hooking
    lets lower labels spread either way, so directed graphs are treated as
    undirected. With ``num_epochs`` vertices are swept in that many
    consecutive ranges; the labels come out the same.
    """
    n = graph.num_nodes
    ranges = [range(n)] if num_epochs is None else epoch_ranges(n, num_epochs)
    comp = list(range(n))
    iterations = 0
    change = True
    while change:
        change = False
        for vertices in ranges:
            for u in vertices:
                for v in graph.out_neigh(u):
                    if _hook(comp, u, int(v)):
                        change = True
        _compress(comp)
        iterations += 1
    return ComponentsResult(comp=comp, iterations=iterations)


def comp_stats(comp: Sequence[int], k: int = 5) -> tuple[list[tuple[int, int]], int]:
    """Return the ``k`` biggest components as ``(size, label)`` pairs and the component count."""
    counts = Counter(comp)
    biggest = top_k(sorted(counts.items()), k)
    return biggest, len(counts)


def cc_verifier(graph: CSRGraph, comp: Sequence[int]) -> bool:
    """Check labels by a breadth-first search from one vertex of each label.

    The search never may reach a vertex with another label, runs along both
    edge directions of a directed graph, and must visit every vertex.
    """
    if len(comp) != graph.num_nodes:
        raise ValueError("one label per vertex is required")
    label_to_source: dict[int, int] = {}
    for n in graph.vertices():
        label_to_source[comp[n]] = n
    visited = Bitmap(graph.num_nodes)
    for label, source in label_to_source.items():
        frontier = [source]
        visited.set_bit(source)
        for u in frontier:
            neighbors = list(graph.out_neigh(u))
            if graph.directed:
                neighbors.extend(graph.in_neigh(u))
            for v in map(int, neighbors):
                if comp[v] != label:
                    return False
                if not visited.get_bit(v):
                    visited.set_bit(v)
                    frontier.append(v)
    return all(visited.get_bit(n) for n in graph.vertices())