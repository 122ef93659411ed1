"""Graphs in compressed sparse row (CSR) form, with optional weights."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, TypeVar

S = TypeVar("S")
D = TypeVar("D")


@dataclass(eq=False)
class NodeWeight:
    """A destination vertex with an edge weight.

    Equality looks at the vertex only, so duplicate and self edges can be
    found regardless of weight; ordering uses vertex then weight.
    """

    v: int
    w: int = 1

    def _key(self, other: Any) -> Any:
        if isinstance(other, NodeWeight):
            return (self.v, self.w), (other.v, other.w)
        if isinstance(other, int):
            return self.v, other
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NodeWeight):
            return self.v == other.v
        if isinstance(other, int):
            return self.v == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.v)

    def __lt__(self, other: Any) -> bool:
        keys = self._key(other)
        return keys if keys is NotImplemented else keys[0] < keys[1]

    def __le__(self, other: Any) -> bool:
        keys = self._key(other)
        return keys if keys is NotImplemented else keys[0] <= keys[1]

    def __gt__(self, other: Any) -> bool:
        keys = self._key(other)
        return keys if keys is NotImplemented else keys[0] > keys[1]

    def __ge__(self, other: Any) -> bool:
        keys = self._key(other)
        return keys if keys is NotImplemented else keys[0] >= keys[1]

    def __int__(self) -> int:
        return self.v

    def __index__(self) -> int:
        return self.v

    def __str__(self) -> str:
        return f"{self.v} {self.w}"


@dataclass
class EdgePair(Generic[S, D]):
    """An edge from ``u`` to ``v``; ``v`` may carry a weight."""

    u: S
    v: D


class CSRGraph:
    """Graph stored as offset and neighbor arrays, optionally with its inverse.

    An undirected graph shares one set of arrays for both directions. A
    directed graph may lack one of the two directions, in which case asking
    for it raises ``ValueError``.
    """

    def __init__(
        self,
        num_nodes: int,
        out_offsets: Optional[Sequence[int]],
        out_neighbors: Optional[Sequence[Any]],
        in_offsets: Optional[Sequence[int]] = None,
        in_neighbors: Optional[Sequence[Any]] = None,
        directed: Optional[bool] = None,
    ) -> None:
        if directed is None:
            directed = in_offsets is not None or in_neighbors is not None
        self._directed = directed
        self._num_nodes = num_nodes
        self._out_offsets = self._checked(out_offsets, out_neighbors, "out")
        self._out_neighbors = list(out_neighbors) if out_neighbors is not None else None
        if directed:
            self._in_offsets = self._checked(in_offsets, in_neighbors, "in")
            self._in_neighbors = list(in_neighbors) if in_neighbors is not None else None
        else:
            if self._out_offsets is None:
                raise ValueError("an undirected graph needs out offsets")
            self._in_offsets = self._out_offsets
            self._in_neighbors = self._out_neighbors

        if not directed:
            offs = self._out_offsets
            self._num_edges = (offs[num_nodes] - offs[0]) // 2
        elif self._out_offsets is not None:
            offs = self._out_offsets
            self._num_edges = offs[num_nodes] - offs[0]
        elif self._in_offsets is not None:
            offs = self._in_offsets
            self._num_edges = offs[num_nodes] - offs[0]
        else:
            raise ValueError("a graph needs out or in offsets")

    def _checked(
        self,
        offsets: Optional[Sequence[int]],
        neighbors: Optional[Sequence[Any]],
        kind: str,
    ) -> Optional[list[int]]:
        if offsets is None:
            return None
        if neighbors is None:
            raise ValueError(f"{kind} offsets given without {kind} neighbors")
        result = list(offsets)
        if len(result) != self._num_nodes + 1:
            raise ValueError(
                f"{kind} offsets must have {self._num_nodes + 1} entries, got {len(result)}"
            )
        return result

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def num_edges(self) -> int:
        return self._num_edges

    @property
    def num_edges_directed(self) -> int:
        return self._num_edges if self._directed else 2 * self._num_edges

    def _check_node(self, n: int) -> None:
        if not 0 <= n < self._num_nodes:
            raise IndexError(f"vertex {n} out of range")

    @staticmethod
    def _require(offsets: Optional[list[int]], kind: str) -> list[int]:
        if offsets is None:
            raise ValueError(f"graph stores no {kind}-edges")
        return offsets

    def out_degree(self, v: int) -> int:
        """Number of out-edges of ``v``."""
        self._check_node(v)
        offs = self._require(self._out_offsets, "out")
        return offs[v + 1] - offs[v]

    def in_degree(self, v: int) -> int:
        """Number of in-edges of ``v``."""
        self._check_node(v)
        offs = self._require(self._in_offsets, "in")
        return offs[v + 1] - offs[v]

    def out_neigh(self, n: int) -> list[Any]:
        """Out-neighbors of ``n`` in stored order."""
        self._check_node(n)
        offs = self._require(self._out_offsets, "out")
        return self._out_neighbors[offs[n]:offs[n + 1]]

    def in_neigh(self, n: int) -> list[Any]:
        """In-neighbors of ``n`` in stored order."""
        self._check_node(n)
        offs = self._require(self._in_offsets, "in")
        return self._in_neighbors[offs[n]:offs[n + 1]]

    def is_neighbor(self, n: int, m: int) -> bool:
        """Whether ``m`` is an out-neighbor of ``n``; neighbors must be sorted."""
        self._check_node(n)
        offs = self._require(self._out_offsets, "out")
        lo, hi = offs[n], offs[n + 1]
        i = bisect.bisect_left(self._out_neighbors, m, lo, hi, key=int)
        return i < hi and int(self._out_neighbors[i]) == m

    def vertices(self) -> range:
        return range(self._num_nodes)

    def vertex_offsets(self, in_graph: bool = False) -> list[int]:
        """Offsets of each vertex's neighbors, starting at zero."""
        offs = (
            self._require(self._in_offsets, "in")
            if in_graph
            else self._require(self._out_offsets, "out")
        )
        base = offs[0]
        return [o - base for o in offs]

    def stats_line(self) -> str:
        """One-line summary of size and average degree."""
        kind = "directed" if self._directed else "undirected"
        return (
            f"Graph has {self._num_nodes} nodes and {self._num_edges} "
            f"{kind} edges for degree: {self._num_edges // self._num_nodes}"
        )

    def topology_lines(self) -> list[str]:
        """One line per vertex listing its out-neighbors."""
        return [
            f"{n}: " + "".join(f"{j} " for j in self.out_neigh(n))
            for n in self.vertices()
        ]