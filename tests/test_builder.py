import struct
from collections import Counter

import pytest

from gapgraph.builder import (
    Builder,
    prefix_sum,
    relabel_by_degree,
    squish_csr,
    squish_graph,
)
from gapgraph.graph import CSRGraph, EdgePair, NodeWeight
from gapgraph.reader import GraphFormatError

EDGE_TUPLES = [(0, 1), (1, 2), (2, 0), (0, 2)]


def _edges(pairs):
    return [EdgePair(u, v) for u, v in pairs]


def test_prefix_sum_pinned():
    assert prefix_sum([2, 0, 3]) == [0, 2, 2, 5]
    assert prefix_sum([]) == [0]


def test_prefix_sum_invariants():
    degrees = [4, 1, 0, 7, 2]
    sums = prefix_sum(degrees)
    assert len(sums) == len(degrees) + 1
    assert sums[0] == 0
    assert [b - a for a, b in zip(sums, sums[1:])] == degrees


def test_find_max_node_id():
    b = Builder()
    assert b.find_max_node_id(_edges(EDGE_TUPLES)) == 2
    assert b.find_max_node_id([EdgePair(0, NodeWeight(7, 1))]) == 7
    assert b.find_max_node_id([]) == 0


def test_count_degrees_directions():
    edges = _edges(EDGE_TUPLES)
    b = Builder()
    out_deg = b.count_degrees(edges, False)
    in_deg = b.count_degrees(edges, True)
    assert out_deg == [Counter(u for u, _ in EDGE_TUPLES)[n] for n in range(3)]
    assert in_deg == [Counter(v for _, v in EDGE_TUPLES)[n] for n in range(3)]
    assert sum(Builder(symmetrize=True).count_degrees(edges, False)) == 2 * len(edges)


def test_count_degrees_negative_id():
    with pytest.raises(ValueError):
        Builder().count_degrees([EdgePair(-1, 0)], False)


def test_make_csr_keeps_edge_order():
    edges = _edges(EDGE_TUPLES)
    offsets, neighbors = Builder().make_csr(edges, False)
    for n in range(3):
        assert neighbors[offsets[n]:offsets[n + 1]] == [v for u, v in EDGE_TUPLES if u == n]


def test_make_graph_directed():
    g = Builder().make_graph_from_edges(_edges(EDGE_TUPLES))
    assert g.directed is True
    assert g.num_nodes == 3
    assert g.num_edges == len(EDGE_TUPLES)
    for n in g.vertices():
        assert sorted(g.out_neigh(n)) == sorted(v for u, v in EDGE_TUPLES if u == n)
        assert sorted(g.in_neigh(n)) == sorted(u for u, v in EDGE_TUPLES if v == n)


def test_make_graph_symmetrized():
    g = Builder(symmetrize=True).make_graph_from_edges(_edges(EDGE_TUPLES))
    assert g.directed is False
    assert g.num_edges == len(EDGE_TUPLES)
    for u, v in EDGE_TUPLES:
        assert v in g.out_neigh(u)
        assert u in g.out_neigh(v)


def test_make_graph_drops_weights():
    g = Builder().make_graph_from_edges([EdgePair(0, NodeWeight(1, 9))])
    assert g.out_neigh(0) == [1]
    assert isinstance(g.out_neigh(0)[0], int)


def test_squish_removes_loops_and_duplicates():
    pairs = [(0, 1), (0, 1), (0, 0), (1, 0), (2, 1), (2, 1), (2, 0)]
    g = Builder().make_graph_from_edges(_edges(pairs))
    sq = squish_graph(g)
    assert sq.directed is True
    for n in g.vertices():
        assert sq.out_neigh(n) == sorted(set(g.out_neigh(n)) - {n})
        assert sq.in_neigh(n) == sorted(set(g.in_neigh(n)) - {n})
    assert sq.num_edges < g.num_edges


def test_squish_undirected():
    pairs = [(0, 2), (2, 0), (1, 1), (1, 2)]
    g = Builder(symmetrize=True).make_graph_from_edges(_edges(pairs))
    sq = squish_graph(g)
    assert sq.directed is False
    for n in g.vertices():
        assert sq.out_neigh(n) == sorted(set(g.out_neigh(n)) - {n})


def test_squish_csr_keeps_lightest_duplicate():
    g = CSRGraph(
        2, [0, 3, 3], [NodeWeight(1, 5), NodeWeight(1, 2), NodeWeight(0, 1)], directed=False
    )
    offsets, neighbors = squish_csr(g, False)
    assert offsets == [0, 1, 1]
    assert (neighbors[0].v, neighbors[0].w) == (1, 2)


def test_relabel_directed_raises():
    g = Builder().make_graph_from_edges(_edges(EDGE_TUPLES))
    with pytest.raises(ValueError):
        relabel_by_degree(g)


def test_relabel_by_degree_orders_degrees():
    pairs = [(3, 0), (3, 1), (3, 2), (0, 1)]
    g = squish_graph(Builder(symmetrize=True).make_graph_from_edges(_edges(pairs)))
    r = relabel_by_degree(g)
    degrees = [r.out_degree(n) for n in r.vertices()]
    assert degrees == sorted(degrees, reverse=True)
    assert sorted(degrees) == sorted(g.out_degree(n) for n in g.vertices())
    assert r.num_edges == g.num_edges
    assert r.out_degree(0) == g.out_degree(3)
    for n in r.vertices():
        assert r.out_neigh(n) == sorted(r.out_neigh(n))


def test_make_graph_from_el_file(tmp_path):
    path = tmp_path / "g.el"
    path.write_text("0 1\n0 1\n1 1\n1 2\n")
    g = Builder().make_graph(path)
    assert g.directed is True
    for n in g.vertices():
        assert n not in g.out_neigh(n)
        assert len(set(g.out_neigh(n))) == len(g.out_neigh(n))
    assert g.out_neigh(0) == [1]


def test_make_graph_symmetrize_file(tmp_path):
    path = tmp_path / "g.el"
    path.write_text("0 1\n1 2\n")
    g = Builder(symmetrize=True).make_graph(path)
    assert g.directed is False
    assert g.out_neigh(1) == [0, 2]


def test_make_graph_serialized(tmp_path):
    path = tmp_path / "g.sg"
    offsets, neighbors = [0, 1, 2], [1, 0]
    data = struct.pack("<?qq", False, len(neighbors), 2)
    data += struct.pack("<3q", *offsets) + struct.pack("<2i", *neighbors)
    path.write_bytes(data)
    g = Builder().make_graph(path)
    assert g.out_neigh(0) == [1]
    assert g.out_neigh(1) == [0]


def test_make_graph_wsg_rejected(tmp_path):
    path = tmp_path / "g.wsg"
    path.write_bytes(b"")
    with pytest.raises(GraphFormatError):
        Builder().make_graph(path)