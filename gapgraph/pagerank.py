"""Pull-direction PageRank over CSR graphs, with optional epoch-wise traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .graph import CSRGraph
from .util import top_k

DAMPING = 0.85


@dataclass
class PageRankResult:
    """Scores after the run, the error of the last iteration and how many ran."""

    scores: list[float] = field(default_factory=list)
    error: float = 0.0
    iterations: int = 0


def epoch_ranges(num_nodes: int, num_epochs: int) -> list[range]:
    """Split ``range(num_nodes)`` into ``num_epochs`` contiguous ranges.

    Every range but the last spans ``ceil(num_nodes / num_epochs)`` vertices;
    the last runs to ``num_nodes``. Ranges past the end are empty.
    """
    if num_epochs <= 0:
        raise ValueError("num_epochs must be positive")
    if num_nodes < 0:
        raise ValueError("num_nodes must be non-negative")
    size = (num_nodes + num_epochs - 1) // num_epochs
    ranges = []
    for e in range(num_epochs):
        start = min(e * size, num_nodes)
        stop = num_nodes if e == num_epochs - 1 else min((e + 1) * size, num_nodes)
        ranges.append(range(start, max(start, stop)))
    return ranges


def _base_score(graph: CSRGraph) -> float:
    if graph.num_nodes <= 0:
        raise ValueError("PageRank needs a graph with at least one vertex")
    return (1.0 - DAMPING) / graph.num_nodes


def _contribution(score: float, degree: int) -> float:
    # A vertex without out-edges is never anyone's in-neighbor, so its share is unused.
    return score / degree if degree else 0.0


def page_rank_pull(
    graph: CSRGraph,
    max_iters: int = 1,
    epsilon: float = 0.0,
    num_epochs: Optional[int] = None,
) -> PageRankResult:
    """Run pull-style PageRank from uniform scores.

    Each iteration computes every vertex's outgoing contribution, then sets
    each score from the contributions of its in-neighbors. Stops after
    ``max_iters`` iterations or once the summed change drops below
    ``epsilon``. With ``num_epochs`` the vertices are visited in that many
    consecutive ranges; the result is the same.
    """
    base_score = _base_score(graph)
    n = graph.num_nodes
    scores = [1.0 / n] * n
    ranges = [range(n)] if num_epochs is None else epoch_ranges(n, num_epochs)
    error = 0.0
    iterations = 0
    for _ in range(max_iters):
        contrib = [_contribution(s, graph.out_degree(v)) for v, s in enumerate(scores)]
        error = 0.0
        for vertices in ranges:
            for u in vertices:
                incoming = sum(contrib[int(v)] for v in graph.in_neigh(u))
                old = scores[u]
                scores[u] = base_score + DAMPING * incoming
                error += abs(scores[u] - old)
        iterations += 1
        if error < epsilon:
            break
    return PageRankResult(scores=scores, error=error, iterations=iterations)


def pr_verifier(graph: CSRGraph, scores: Sequence[float], target_error: float) -> bool:
    """Check that one serial push iteration changes the scores by less than ``target_error``."""
    base_score = _base_score(graph)
    if len(scores) != graph.num_nodes:
        raise ValueError("one score per vertex is required")
    incoming = [0.0] * graph.num_nodes
    for u in graph.vertices():
        share = _contribution(scores[u], graph.out_degree(u))
        for v in graph.out_neigh(u):
            incoming[int(v)] += share
    error = sum(
        abs(base_score + DAMPING * total - score) for total, score in zip(incoming, scores)
    )
    return error < target_error


def top_scores(graph: CSRGraph, scores: Sequence[float], k: int = 5) -> list[tuple[float, int]]:
    """The ``k`` highest ``(score, vertex)`` pairs, highest first."""
    return top_k(((n, scores[n]) for n in graph.vertices()), k)