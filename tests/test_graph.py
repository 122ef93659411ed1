import pytest

from gapgraph.graph import CSRGraph, EdgePair, NodeWeight


def _undirected_path():
    # edges 0-1 and 1-2, stored in both directions
    return CSRGraph(3, [0, 1, 3, 4], [1, 0, 2, 1])


def _directed():
    # edges 0->1, 0->2, 1->2
    return CSRGraph(3, [0, 2, 3, 3], [1, 2, 2], [0, 0, 1, 3], [0, 0, 1])


def test_undirected_counts():
    g = _undirected_path()
    assert not g.directed
    assert g.num_nodes == 3
    assert g.num_edges_directed == 2 * g.num_edges
    assert g.num_edges_directed == len([1, 0, 2, 1])


def test_undirected_in_equals_out():
    g = _undirected_path()
    for v in g.vertices():
        assert g.in_neigh(v) == g.out_neigh(v)
        assert g.in_degree(v) == g.out_degree(v)


def test_directed_neighbors_and_degrees():
    g = _directed()
    assert g.directed
    assert g.num_edges == g.num_edges_directed == 3
    assert g.out_neigh(0) == [1, 2]
    assert g.in_neigh(2) == [0, 1]
    assert [g.out_degree(v) for v in g.vertices()] == [2, 1, 0]
    assert [g.in_degree(v) for v in g.vertices()] == [0, 1, 2]


def test_degree_sums_match_edges():
    g = _directed()
    assert sum(g.out_degree(v) for v in g.vertices()) == g.num_edges
    assert sum(g.in_degree(v) for v in g.vertices()) == g.num_edges


def test_is_neighbor():
    g = _directed()
    assert g.is_neighbor(0, 2)
    assert not g.is_neighbor(1, 0)
    assert not g.is_neighbor(2, 1)


def test_is_neighbor_weighted():
    g = CSRGraph(2, [0, 2, 2], [NodeWeight(0, 5), NodeWeight(1, 3)], [0, 0, 0], [])
    assert g.is_neighbor(0, 1)
    assert not g.is_neighbor(1, 0)


def test_vertex_offsets_are_rebased():
    g = CSRGraph(2, [4, 5, 6], [0, 0, 0, 0, 1, 0])
    assert g.vertex_offsets() == [0, 1, 2]
    assert g.vertex_offsets(True) == [0, 1, 2]


def test_directed_without_inverse():
    g = CSRGraph(2, [0, 1, 1], [1], directed=True)
    assert g.num_edges == 1
    with pytest.raises(ValueError):
        g.in_degree(0)
    with pytest.raises(ValueError):
        g.in_neigh(0)


def test_directed_with_only_inverse():
    g = CSRGraph(2, None, None, [0, 0, 1], [0], directed=True)
    assert g.num_edges == 1
    assert g.in_neigh(1) == [0]
    with pytest.raises(ValueError):
        g.out_neigh(0)


def test_bad_offsets_length_rejected():
    with pytest.raises(ValueError):
        CSRGraph(3, [0, 1], [1])


def test_vertex_out_of_range():
    g = _undirected_path()
    with pytest.raises(IndexError):
        g.out_neigh(3)
    with pytest.raises(IndexError):
        g.out_degree(-1)


def test_stats_line():
    g = _undirected_path()
    line = g.stats_line()
    assert line.startswith(f"Graph has 3 nodes and {g.num_edges} undirected edges")
    assert line.endswith("for degree: 0")


def test_topology_lines():
    g = _undirected_path()
    assert g.topology_lines() == ["0: 1 ", "1: 0 2 ", "2: 1 "]


def test_node_weight_equality_ignores_weight():
    assert NodeWeight(3, 1) == NodeWeight(3, 9)
    assert NodeWeight(3, 1) == 3
    assert NodeWeight(3, 1) != NodeWeight(4, 1)
    assert len({NodeWeight(3, 1), NodeWeight(3, 2)}) == 1


def test_node_weight_ordering_and_text():
    items = [NodeWeight(2, 1), NodeWeight(1, 5), NodeWeight(1, 2)]
    assert [(n.v, n.w) for n in sorted(items)] == [(1, 2), (1, 5), (2, 1)]
    assert str(NodeWeight(7, 4)) == "7 4"
    assert int(NodeWeight(7, 4)) == 7
    assert NodeWeight(5).w == 1


def test_edge_pair_fields():
    e = EdgePair(1, NodeWeight(2, 3))
    assert e.u == 1
    assert e.v == 2
    assert e.v.w == 3