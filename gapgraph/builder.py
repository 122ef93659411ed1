"""Construction of CSR graphs from edge lists and files."""

from __future__ import annotations

from itertools import accumulate, groupby
from typing import Any, Iterable, Optional, Sequence

from .graph import CSRGraph, EdgePair
from .reader import GraphFormatError, file_suffix, read_edge_list, read_serialized_graph


def prefix_sum(degrees: Iterable[int]) -> list[int]:
    """Exclusive prefix sum with the total appended: ``n + 1`` offsets."""
    return list(accumulate(degrees, initial=0))


def _squished(neighbors: Sequence[Any], n: int) -> list[Any]:
    """Sorted neighbors without duplicates (first of each run kept) or ``n`` itself."""
    unique = (next(run) for _, run in groupby(sorted(neighbors), key=int))
    return [v for v in unique if int(v) != n]


def squish_csr(graph: CSRGraph, transpose: bool) -> tuple[list[int], list[Any]]:
    """Offsets and neighbors of one direction with self-loops and duplicates removed."""
    degrees: list[int] = []
    neighbors: list[Any] = []
    for n in graph.vertices():
        neigh = graph.in_neigh(n) if transpose else graph.out_neigh(n)
        kept = _squished(neigh, n)
        degrees.append(len(kept))
        neighbors.extend(kept)
    return prefix_sum(degrees), neighbors


def squish_graph(graph: CSRGraph) -> CSRGraph:
    """Copy of ``graph`` with sorted neighbors and no self-loops or duplicate edges."""
    out_offsets, out_neighbors = squish_csr(graph, False)
    if graph.directed:
        in_offsets, in_neighbors = squish_csr(graph, True)
        return CSRGraph(
            graph.num_nodes, out_offsets, out_neighbors, in_offsets, in_neighbors,
            directed=True,
        )
    return CSRGraph(graph.num_nodes, out_offsets, out_neighbors, directed=False)


def relabel_by_degree(graph: CSRGraph) -> CSRGraph:
    """Rebuild an undirected graph with vertices numbered by decreasing degree."""
    if graph.directed:
        raise ValueError("Cannot relabel directed graph")
    order = sorted(((graph.out_degree(n), n) for n in graph.vertices()), reverse=True)
    new_ids = [0] * graph.num_nodes
    for rank, (_, old) in enumerate(order):
        new_ids[old] = rank
    offsets = prefix_sum(degree for degree, _ in order)
    neighbors: list[int] = []
    for _, old in order:
        neighbors.extend(sorted(new_ids[int(v)] for v in graph.out_neigh(old)))
    return CSRGraph(graph.num_nodes, offsets, neighbors, directed=False)


class Builder:
    """Builds unweighted CSR graphs; weights on input edges are dropped."""

    def __init__(self, symmetrize: bool = False) -> None:
        self.symmetrize = symmetrize
        self.num_nodes: Optional[int] = None

    def find_max_node_id(self, edges: Iterable[EdgePair]) -> int:
        """Largest vertex id among edge endpoints, at least zero."""
        return max((max(e.u, int(e.v)) for e in edges), default=0) if edges else 0

    def _node_count(self, edges: Sequence[EdgePair]) -> int:
        if self.num_nodes is not None:
            return self.num_nodes
        return self.find_max_node_id(edges) + 1

    def _uses(self, transpose: bool) -> tuple[bool, bool]:
        return (self.symmetrize or not transpose, self.symmetrize or transpose)

    def count_degrees(self, edges: Sequence[EdgePair], transpose: bool) -> list[int]:
        """Per-vertex degree counts in the requested direction."""
        degrees = [0] * self._node_count(edges)
        use_src, use_dst = self._uses(transpose)
        for e in edges:
            u, v = e.u, int(e.v)
            if u < 0 or v < 0:
                raise ValueError(f"negative vertex id in edge ({u}, {v})")
            if use_src:
                degrees[u] += 1
            if use_dst:
                degrees[v] += 1
        return degrees

    def make_csr(self, edges: Sequence[EdgePair], transpose: bool) -> tuple[list[int], list[int]]:
        """Offsets and neighbors for one direction, neighbors in edge-list order."""
        offsets = prefix_sum(self.count_degrees(edges, transpose))
        neighbors = [0] * offsets[-1]
        cursor = offsets[:-1]
        use_src, use_dst = self._uses(transpose)
        for e in edges:
            u, v = e.u, int(e.v)
            if use_src:
                neighbors[cursor[u]] = v
                cursor[u] += 1
            if use_dst:
                neighbors[cursor[v]] = u
                cursor[v] += 1
        return offsets, neighbors

    def make_graph_from_edges(self, edges: Iterable[EdgePair]) -> CSRGraph:
        """Build a graph from edges; undirected when symmetrizing, else directed with inverse."""
        edges = list(edges)
        if self.num_nodes is None:
            self.num_nodes = self.find_max_node_id(edges) + 1
        offsets, neighbors = self.make_csr(edges, False)
        if self.symmetrize:
            return CSRGraph(self.num_nodes, offsets, neighbors, directed=False)
        in_offsets, in_neighbors = self.make_csr(edges, True)
        return CSRGraph(
            self.num_nodes, offsets, neighbors, in_offsets, in_neighbors, directed=True
        )

    def make_graph(self, filename) -> CSRGraph:
        """Load a graph file; edge lists are built and squished, ``.sg`` files read as is."""
        suffix = file_suffix(filename)
        if suffix == ".sg":
            return read_serialized_graph(filename)
        if suffix == ".wsg":
            raise GraphFormatError(".wsg only allowed for weighted graphs")
        edges, _ = read_edge_list(filename)
        return squish_graph(self.make_graph_from_edges(edges))