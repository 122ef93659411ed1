"""Vertex reordering of CSR graphs: by decreasing degree or by random permutation."""

from __future__ import annotations

import random
from itertools import chain
from typing import Any, Callable, Optional, Sequence

from .builder import prefix_sum
from .graph import CSRGraph
from .util import K_RAND_SEED

_Csr = tuple[Optional[list[int]], Optional[list[int]]]


def _old_by_new(new_ids: Sequence[int]) -> list[int]:
    old_of = [0] * len(new_ids)
    for old, new in enumerate(new_ids):
        old_of[new] = old
    return old_of


def _build(
    old_of: Sequence[int],
    new_ids: Sequence[int],
    neighbors_of: Callable[[int], list[Any]],
) -> tuple[list[int], list[int]]:
    """Relabelled CSR arrays with each vertex's neighbors sorted."""
    lists = [sorted(new_ids[int(v)] for v in neighbors_of(old)) for old in old_of]
    return prefix_sum(map(len, lists)), list(chain.from_iterable(lists))


def _degrees_only(
    old_of: Sequence[int], degree_of: Callable[[int], int]
) -> tuple[list[int], list[int]]:
    """Relabelled offsets with zero-filled neighbor slots of the right size."""
    offsets = prefix_sum(degree_of(old) for old in old_of)
    return offsets, [0] * offsets[-1]


def _relabel(
    graph: CSRGraph,
    new_ids: Sequence[int],
    out_degree: bool,
    create_only_deg_list: bool,
    create_both_csrs: bool,
) -> CSRGraph:
    n = graph.num_nodes
    old_of = _old_by_new(new_ids)
    if not graph.directed:
        offsets, neighbors = _build(old_of, new_ids, graph.out_neigh)
        return CSRGraph(n, offsets, neighbors, directed=False)

    if out_degree:
        primary, secondary, secondary_degree = graph.in_neigh, graph.out_neigh, graph.out_degree
    else:
        primary, secondary, secondary_degree = graph.out_neigh, graph.in_neigh, graph.in_degree

    offsets, neighbors = _build(old_of, new_ids, primary)
    inv: _Csr
    if create_both_csrs:
        inv = _build(old_of, new_ids, secondary)
    elif create_only_deg_list:
        inv = _degrees_only(old_of, secondary_degree)
    else:
        inv = (None, None)

    if out_degree:
        return CSRGraph(n, inv[0], inv[1], offsets, neighbors, directed=True)
    return CSRGraph(n, offsets, neighbors, inv[0], inv[1], directed=True)


def deg_sort(
    graph: CSRGraph,
    out_degree: bool = True,
    create_only_deg_list: bool = False,
    create_both_csrs: bool = True,
) -> tuple[CSRGraph, list[int]]:
    """Renumber vertices by decreasing degree; return the new graph and ``new_ids``.

    ``new_ids[old]`` is the new id of vertex ``old``. Ties in degree go to the
    larger old id first. For a directed graph ``out_degree`` picks which degree
    orders the vertices; the CSR for the other direction is always built, while
    the ordering direction is built in full with ``create_both_csrs``, as
    offsets with zero-filled neighbors with ``create_only_deg_list``, or left
    out otherwise.
    """
    if graph.directed and not out_degree:
        degree_of = graph.in_degree
    else:
        degree_of = graph.out_degree
    order = sorted(((degree_of(n), n) for n in graph.vertices()), reverse=True)
    new_ids = [0] * graph.num_nodes
    for rank, (_, old) in enumerate(order):
        new_ids[old] = rank
    relabeled = _relabel(graph, new_ids, out_degree, create_only_deg_list, create_both_csrs)
    return relabeled, new_ids


def rand_order(
    graph: CSRGraph,
    create_only_deg_list: bool = False,
    create_both_csrs: bool = True,
    seed: int = K_RAND_SEED,
) -> tuple[CSRGraph, list[int]]:
    """Renumber vertices by a seeded random permutation; return the new graph and ``new_ids``.

    The in-edge CSR of a directed graph is always built; the out-edge CSR is
    controlled by ``create_both_csrs`` and ``create_only_deg_list`` as in
    :func:`deg_sort`.
    """
    new_ids = list(range(graph.num_nodes))
    random.Random(seed).shuffle(new_ids)
    relabeled = _relabel(graph, new_ids, True, create_only_deg_list, create_both_csrs)
    return relabeled, new_ids