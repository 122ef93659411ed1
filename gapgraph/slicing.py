"""Partitioning of CSR graphs by destination range and by neighbor tiles."""

from __future__ import annotations

from itertools import chain
from typing import Any, Callable

from .builder import prefix_sum
from .graph import CSRGraph


def _csr(
    graph: CSRGraph,
    neighbors_of: Callable[[int], list[Any]],
    keep: Callable[[Any], bool] = lambda v: True,
) -> tuple[list[int], list[Any]]:
    """Offsets and neighbors of every vertex, keeping stored order."""
    lists = [[v for v in neighbors_of(n) if keep(v)] for n in graph.vertices()]
    return prefix_sum(map(len, lists)), list(chain.from_iterable(lists))


def graph_slicer(
    graph: CSRGraph,
    start_id: int,
    stop_id: int,
    out_degree: bool = False,
    modify_both: bool = False,
) -> CSRGraph:
    """Keep only edges whose neighbor lies in ``[start_id, stop_id)``.

    For a directed graph ``out_degree`` picks the direction that is sliced:
    out-edges when true (push), in-edges when false (pull). The other
    direction is copied unchanged with ``modify_both`` and left out otherwise.
    An undirected graph has its single neighbor list sliced.
    """

    def in_range(v: Any) -> bool:
        return start_id <= int(v) < stop_id

    n = graph.num_nodes
    if not graph.directed:
        offsets, neighbors = _csr(graph, graph.out_neigh, in_range)
        return CSRGraph(n, offsets, neighbors, directed=False)

    sliced_dir, other_dir = (
        (graph.out_neigh, graph.in_neigh) if out_degree else (graph.in_neigh, graph.out_neigh)
    )
    offsets, neighbors = _csr(graph, sliced_dir, in_range)
    if modify_both:
        inv_offsets, inv_neighbors = _csr(graph, other_dir)
    else:
        inv_offsets, inv_neighbors = None, None

    if out_degree:
        return CSRGraph(n, offsets, neighbors, inv_offsets, inv_neighbors, directed=True)
    return CSRGraph(n, inv_offsets, inv_neighbors, offsets, neighbors, directed=True)


def _tile_size(num_nodes: int, num_tiles: int) -> int:
    if num_tiles > num_nodes:
        return 1
    size = num_nodes // num_tiles
    if num_nodes % num_tiles:
        size += 1
    return size


def quantize_graph(graph: CSRGraph, num_tiles: int) -> CSRGraph:
    """Replace each vertex's out-neighbors by the sorted set of tiles they fall in.

    Vertices are split into ``num_tiles`` contiguous tiles of equal size (the
    last possibly smaller); the result is an undirected graph whose neighbor
    lists hold tile numbers.
    """
    if num_tiles <= 0:
        raise ValueError("num_tiles must be positive")
    tile = _tile_size(graph.num_nodes, num_tiles)
    lists = [
        sorted({int(v) // tile for v in graph.out_neigh(n)}) for n in graph.vertices()
    ]
    offsets = prefix_sum(map(len, lists))
    return CSRGraph(
        graph.num_nodes, offsets, list(chain.from_iterable(lists)), directed=False
    )